from __future__ import annotations
import copy, os, yaml
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from .utils import ScanError

CONFIG_FILE = ".githygiene.yml"

DEFAULT_CONFIG = {
    "marker": "Cargo.toml",
    "vcs": "git",
    "timeout": None,
    "workers": 1,
    "record_not_a_repository": False,
    "exclude": [],
}


@dataclass
class Config:
    data: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULT_CONFIG))

    @property
    def marker(self) -> str:
        return self.data["marker"]

    @property
    def vcs(self) -> str:
        return self.data["vcs"]

    @property
    def timeout(self) -> Optional[float]:
        return self.data["timeout"]

    @property
    def workers(self) -> int:
        return self.data["workers"]

    @property
    def record_not_a_repository(self) -> bool:
        return bool(self.data["record_not_a_repository"])

    @property
    def exclude(self):
        return list(self.data.get("exclude") or [])


def _check(key: str, value: Any) -> Any:
    """Return ``value`` normalised for ``key`` or raise ValueError."""
    if key in ("marker", "vcs"):
        if not isinstance(value, str) or not value:
            raise ValueError("expected a non-empty string")
        return value
    if key == "timeout":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError("expected a positive number of seconds")
        return float(value)
    if key == "workers":
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError("expected a positive integer")
        return value
    if key == "record_not_a_repository":
        if not isinstance(value, bool):
            raise ValueError("expected true or false")
        return value
    if key == "exclude":
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
            raise ValueError("expected a pattern or a list of patterns")
        return value
    return value


def load_config(scan_root: str, path: Optional[str] = None) -> Config:
    """Merge ``.githygiene.yml`` from the scan root (or ``path``) over the defaults.

    Unreadable files and invalid values print a ``[warn]`` line and fall back
    to the defaults.
    """
    explicit = path is not None
    if path is None:
        path = os.path.join(scan_root, CONFIG_FILE)
    merged = copy.deepcopy(DEFAULT_CONFIG)
    if not os.path.exists(path):
        if explicit:
            raise ScanError(f"Config file not found: {path}")
        return Config(merged)
    try:
        with open(path, "r", encoding="utf-8") as f:
            user = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        print(f"[warn] Ignoring unreadable config {path}: {e}")
        return Config(merged)
    if not isinstance(user, dict):
        print(f"[warn] Ignoring config {path}: expected a mapping")
        return Config(merged)
    for k, v in user.items():
        if k not in merged:
            print(f"[warn] Unknown config key in {path}: {k}")
            continue
        try:
            merged[k] = _check(k, v)
        except ValueError as e:
            print(f"[warn] Ignoring {k}={v!r} in {path}: {e}")
    return Config(merged)
