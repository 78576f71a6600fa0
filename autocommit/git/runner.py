"""Git process runner - the only place that spawns git."""

import subprocess
from abc import ABC, abstractmethod


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitNotFoundError(GitError):
    """The git executable could not be started."""
    pass


class GitRunner(ABC):
    """Runs a git subcommand and returns its stdout, raising GitError on failure."""

    @abstractmethod
    def run(self, *args: str) -> str:
        pass


class SubprocessRunner(GitRunner):
    """Runs git as a child process."""

    def __init__(self, executable: str = 'git'):
        self.executable = executable

    def run(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                [self.executable, *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitNotFoundError("Git is not installed or not in PATH")
