import argparse
import sys
from .config import load_config
from .scanner import scan_tree
from .summary import StatusSummary
from .utils import ScanError


def main(argv=None):
    parser = argparse.ArgumentParser(prog="githygiene", description="Audit the git state of every project under a directory")
    parser.add_argument("-p", "--path", default=".", help="Directory to start scanning from")
    parser.add_argument("--long", action="store_true", help="List every project path instead of counts")
    parser.add_argument("--debug", action="store_true", help="Print each status as it is classified")
    parser.add_argument("--marker", default=None, help="File name that marks a project root (default: Cargo.toml)")
    parser.add_argument("--workers", type=int, default=None, help="Walk subtrees with this many threads")
    parser.add_argument("--timeout", type=float, default=None, help="Per-command timeout in seconds")
    parser.add_argument("--config", default=None, help="Config file (default: <path>/.githygiene.yml)")

    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.path, args.config)
        if args.marker:
            cfg.data["marker"] = args.marker
        if args.workers is not None:
            cfg.data["workers"] = args.workers
        if args.timeout is not None:
            cfg.data["timeout"] = args.timeout

        summary = StatusSummary(record_not_a_repository=cfg.record_not_a_repository)
        found = scan_tree(args.path, cfg, summary, debug=args.debug)
        if args.debug:
            print(f"[debug] {found} project roots found, {summary.total()} recorded")
    except (ScanError, OSError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    if args.long:
        summary.long()
    else:
        summary.short()
    return 0


if __name__ == "__main__":
    sys.exit(main())
