"""Git Repository - collect working-tree changes, then stage, commit and push."""

from dataclasses import dataclass

from autocommit.git.runner import GitError, GitNotFoundError, GitRunner, SubprocessRunner


@dataclass(frozen=True)
class ChangeSet:
    """Short status plus unified diff, as handed to the model."""
    status: str = ""
    diff: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.status.strip() and not self.diff.strip()

    @property
    def text(self) -> str:
        return (
            "Git Status (staged files):\n" + self.status
            + "\nGit Diff (staged changes):\n" + self.diff
        )


class GitRepository:
    """Thin wrapper over the git calls one run needs."""

    def __init__(self, runner: GitRunner | None = None):
        self.runner = runner or SubprocessRunner()

    def verify(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self.runner.run('rev-parse', '--is-inside-work-tree')
        except GitNotFoundError:
            raise
        except GitError:
            raise GitError("Not inside a git repository")

    def collect_changes(self) -> ChangeSet:
        """Get the short status and the diff of the working tree."""
        status = self._step("get git status --short", 'status', '--short')
        diff = self._step("get git diff", 'diff')
        return ChangeSet(status=status, diff=diff)

    def stage_all(self) -> None:
        self._step("stage changes", 'add', '.')

    def commit(self, title: str, description: str = "") -> None:
        args = ['commit', '-m', title]
        if description.strip():
            args += ['-m', description]
        self._step("commit", *args)

    def push(self) -> None:
        self._step("push", 'push')

    def _step(self, what: str, *args: str) -> str:
        try:
            return self.runner.run(*args)
        except GitError as e:
            raise GitError(f"Failed to {what}: {e}")
