# Standard Library Imports
from typing import List, Optional

# Build-in Functions And Class Import
from mr_comment._engine.console import info
from mr_comment._types.errors import DiffAcquisitionError
from .command import run_git_command


def build_diff_command(commit: Optional[str] = None) -> List[str]:
    """
    Choose the git diff invocation for a commit reference.

    Args:
        commit (Optional[str]): None for working-tree changes, "HEAD", a range
            containing "..", or any other single commit-ish.

    Returns:
        List[str]: The full command, starting with "git".
    """
    command: List[str] = ["git", "diff"]

    if commit is None:
        return command
    if ".." in commit:
        command.append(commit)
    elif commit == "HEAD":
        command.append("HEAD")
    else:
        # Single commit: compare with its parent
        command.extend([f"{commit}^", commit])
    return command


def get_diff_from_git(commit: Optional[str] = None) -> str:
    """
    Run git diff for the requested target and return its output.

    Raises:
        DiffAcquisitionError: git failed, or its output is not valid UTF-8.
    """
    command = build_diff_command(commit)
    info(f"Running [highlight]{' '.join(command)}[/highlight]")

    returncode, stdout, stderr = run_git_command(command)
    if returncode != 0:
        raise DiffAcquisitionError(f"Git command failed: {stderr}")

    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DiffAcquisitionError(f"Failed to parse git output as UTF-8: {e}") from e


def read_diff_file(path: str) -> str:
    """
    Read a previously saved diff from disk.

    Raises:
        DiffAcquisitionError: the file is missing, unreadable or not UTF-8.
    """
    info(f"Reading diff from [highlight]{path}[/highlight]")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise DiffAcquisitionError(f"Diff file is not valid UTF-8: {path}") from e
    except OSError as e:
        raise DiffAcquisitionError(f"Failed to read file: {path} ({e.strerror or e})") from e
