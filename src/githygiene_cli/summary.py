from __future__ import annotations
import threading
from typing import Dict, List, Tuple
from .status import Category, Status
from .renderer import render_short, render_long

RENDER_ORDER = [
    Category.NO_REMOTE,
    Category.UP_TO_DATE,
    Category.BRANCH_AHEAD,
    Category.UNTRACKED_FILES,
    Category.OTHER,
    Category.CHANGES_NOT_STAGED,
]


class StatusSummary:
    """Thread-safe tally of discovered project roots by category.

    NotARepository results are dropped unless ``record_not_a_repository``
    is set, in which case they are kept and rendered last.
    """

    def __init__(self, record_not_a_repository: bool = False):
        self.record_not_a_repository = record_not_a_repository
        self._lock = threading.Lock()
        self._paths: Dict[Category, List[str]] = {c: [] for c in Category}

    def _categories(self) -> List[Category]:
        if self.record_not_a_repository:
            return RENDER_ORDER + [Category.NOT_A_REPOSITORY]
        return list(RENDER_ORDER)

    def record(self, status: Status) -> bool:
        if status.category is Category.NOT_A_REPOSITORY and not self.record_not_a_repository:
            return False
        with self._lock:
            self._paths[status.category].append(status.path)
        return True

    def counts(self) -> List[Tuple[str, int]]:
        with self._lock:
            return [(c.value, len(self._paths[c])) for c in self._categories()]

    def sections(self) -> List[Tuple[str, List[str]]]:
        with self._lock:
            return [(c.value, list(self._paths[c])) for c in self._categories()]

    def total(self) -> int:
        return sum(n for _, n in self.counts())

    def short(self):
        print(render_short(self.counts()), end="")

    def long(self):
        print(render_long(self.sections()), end="")
