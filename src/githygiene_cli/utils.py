from __future__ import annotations
import os, subprocess
from typing import List, Optional, Tuple
from pathspec import PathSpec


class ScanError(Exception):
    """Fatal condition that aborts the whole scan."""


class CommandError(ScanError):
    pass


class RemoteCheckError(ScanError):
    def __init__(self, path: str, text: str):
        super().__init__(f"{path}: {text.strip()}")
        self.path = path
        self.text = text


class TraversalError(ScanError):
    pass


def run(cmd: List[str], cwd: Optional[str] = None, timeout: Optional[float] = None) -> Tuple[str, str]:
    """Run ``cmd`` in ``cwd`` and return its full (stdout, stderr).

    The exit code is not inspected. Undecodable bytes are replaced.
    """
    try:
        res = subprocess.run(
            cmd,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=False,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"{' '.join(cmd)} timed out after {timeout}s in {cwd}") from e
    except OSError as e:
        raise CommandError(f"Failed to execute {cmd[0]} in {cwd}: {e}") from e
    return res.stdout or "", res.stderr or ""


def load_excludes(patterns: List[str]) -> PathSpec:
    return PathSpec.from_lines("gitwildmatch", patterns or [])


def is_excluded(spec: PathSpec, scan_root: str, directory: str) -> bool:
    rel = os.path.relpath(directory, scan_root)
    if rel == ".":
        return False
    # trailing slash so directory-only patterns like "target/" match
    return spec.match_file(rel.replace(os.sep, "/") + "/")
