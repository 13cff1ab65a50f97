from __future__ import annotations
import os
from concurrent.futures import ThreadPoolExecutor, FIRST_COMPLETED, Future, wait
from functools import partial
from typing import Callable, List, Optional, Set, Tuple
from pathspec import PathSpec
from .config import Config
from .status import Status, classify
from .summary import StatusSummary
from .utils import TraversalError, load_excludes, is_excluded

Classifier = Callable[[str], Status]


def visit(directory: str, marker: str) -> Tuple[bool, List[str]]:
    """List the immediate children of ``directory``.

    Returns ``(True, [])`` as soon as the marker file is seen, otherwise
    ``(False, subdirectories)``.
    """
    subdirs: List[str] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.is_dir():
                    subdirs.append(entry.path)
                elif entry.is_file() and entry.name == marker:
                    return True, []
    except OSError as e:
        raise TraversalError(f"Failed to list {directory}: {e}") from e
    return False, subdirs


def _record(status: Status, summary: StatusSummary, debug: bool):
    recorded = summary.record(status)
    if debug:
        print(f"[debug] {status}" if recorded else f"[debug] dropped {status}")


def _search(directory: str, scan_root: str, marker: str, excludes: PathSpec,
            classify_fn: Classifier, summary: StatusSummary, debug: bool) -> int:
    is_root, subdirs = visit(directory, marker)
    if is_root:
        _record(classify_fn(directory), summary, debug)
        return 1
    found = 0
    for sub in subdirs:
        if is_excluded(excludes, scan_root, sub):
            continue
        found += _search(sub, scan_root, marker, excludes, classify_fn, summary, debug)
    return found


def _visit_and_classify(directory: str, marker: str, classify_fn: Classifier) -> Tuple[Optional[Status], List[str]]:
    is_root, subdirs = visit(directory, marker)
    if is_root:
        return classify_fn(directory), []
    return None, subdirs


def _search_parallel(scan_root: str, marker: str, excludes: PathSpec, classify_fn: Classifier,
                     summary: StatusSummary, debug: bool, workers: int) -> int:
    found = 0
    with ThreadPoolExecutor(max_workers=workers) as executor:
        pending: Set[Future] = {executor.submit(_visit_and_classify, scan_root, marker, classify_fn)}
        try:
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for fut in done:
                    status, subdirs = fut.result()
                    if status is not None:
                        _record(status, summary, debug)
                        found += 1
                    for sub in subdirs:
                        if is_excluded(excludes, scan_root, sub):
                            continue
                        pending.add(executor.submit(_visit_and_classify, sub, marker, classify_fn))
        except BaseException:
            for fut in pending:
                fut.cancel()
            raise
    return found


def scan_tree(path: str, cfg: Config, summary: StatusSummary, classify_fn: Optional[Classifier] = None,
              debug: bool = False, workers: Optional[int] = None) -> int:
    """Find every project root under ``path`` and record its status into ``summary``.

    A directory holding the marker file is classified and never descended into.
    With more than one worker, sibling subtrees are walked concurrently and the
    order of recorded paths is not deterministic. Any ScanError aborts the scan.
    Returns the number of project roots found.
    """
    if classify_fn is None:
        classify_fn = partial(classify, vcs=cfg.vcs, timeout=cfg.timeout)
    if workers is None:
        workers = cfg.workers
    excludes = load_excludes(cfg.exclude)
    if workers <= 1:
        return _search(path, path, cfg.marker, excludes, classify_fn, summary, debug)
    return _search_parallel(path, cfg.marker, excludes, classify_fn, summary, debug, workers)
