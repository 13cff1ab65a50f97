from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
from .utils import run, RemoteCheckError


class Category(str, Enum):
    NO_REMOTE = "NoRemote"
    UP_TO_DATE = "UpToDate"
    BRANCH_AHEAD = "BranchAhead"
    CHANGES_NOT_STAGED = "ChangesNotStaged"
    UNTRACKED_FILES = "UntrackedFiles"
    NOT_A_REPOSITORY = "NotARepository"
    OTHER = "Other"


class RemoteState(Enum):
    HAS_REMOTE = "has_remote"
    NO_REMOTE = "no_remote"
    NOT_A_REPOSITORY = "not_a_repository"


@dataclass(frozen=True)
class Status:
    category: Category
    path: str
    text: Optional[str] = None  # raw diagnostic text; None for NoRemote/UpToDate


NOT_A_REPOSITORY_MARKER = "not a git repository"

# Evaluated in order, first match wins. Real output can contain several of these.
STATUS_PATTERNS: Tuple[Tuple[str, Category], ...] = (
    ("Your branch is ahead of", Category.BRANCH_AHEAD),
    ("Changes not staged for commit:", Category.CHANGES_NOT_STAGED),
    ("Untracked files:", Category.UNTRACKED_FILES),
    ("Your branch is up to date with", Category.UP_TO_DATE),
    ("fatal: not a git repository", Category.NOT_A_REPOSITORY),
)


def classify_text(text: str) -> Category:
    for pattern, category in STATUS_PATTERNS:
        if pattern in text:
            return category
    return Category.OTHER


def check_remote(root: str, vcs: str = "git", timeout: Optional[float] = None) -> Tuple[RemoteState, str]:
    """Determine whether ``root`` has a configured remote.

    Returns the state together with the stderr text that produced it.
    A freshly scaffolded project can carry ``.git`` metadata without ever
    having been given a remote, which is reported as NO_REMOTE.
    """
    out, err = run([vcs, "remote", "-v"], cwd=root, timeout=timeout)
    if err:
        if NOT_A_REPOSITORY_MARKER in err:
            return RemoteState.NOT_A_REPOSITORY, err
        raise RemoteCheckError(root, err)
    if not out:
        return RemoteState.NO_REMOTE, err
    return RemoteState.HAS_REMOTE, err


def status_text(root: str, vcs: str = "git", timeout: Optional[float] = None) -> str:
    out, err = run([vcs, "status"], cwd=root, timeout=timeout)
    return err if err else out


def classify(root: str, vcs: str = "git", timeout: Optional[float] = None) -> Status:
    state, err = check_remote(root, vcs=vcs, timeout=timeout)
    if state is RemoteState.NO_REMOTE:
        return Status(Category.NO_REMOTE, root)
    if state is RemoteState.NOT_A_REPOSITORY:
        return Status(Category.NOT_A_REPOSITORY, root, err)

    text = status_text(root, vcs=vcs, timeout=timeout)
    category = classify_text(text)
    if category is Category.UP_TO_DATE:
        return Status(category, root)
    return Status(category, root, text)
