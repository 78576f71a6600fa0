"""Git Operations Package"""

from autocommit.git.runner import GitError, GitNotFoundError, GitRunner, SubprocessRunner
from autocommit.git.repository import ChangeSet, GitRepository

__all__ = [
    "GitError",
    "GitNotFoundError",
    "GitRunner",
    "SubprocessRunner",
    "ChangeSet",
    "GitRepository",
]
