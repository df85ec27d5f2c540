import subprocess
from typing import List, Tuple


def run_git_command(command: List[str]) -> Tuple[int, bytes, str]:
    """
    Runs a git command and returns its return code, raw stdout, and stderr.

    Args:
        command (List[str]): The git command and its arguments as a list of strings.
                             Example: ["git", "diff", "HEAD"]

    Returns:
        Tuple[int, bytes, str]: A tuple containing the command's return code,
                                stdout as undecoded bytes, and stderr (decoded string).
                                Returns (1, b"", "error details") if git cannot be executed.

    Note:
        stdout is left undecoded so the caller decides how strictly to treat
        invalid UTF-8. stderr is only ever shown to the user, so invalid
        characters are replaced.
    """
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            check=False,
        )
        stderr = (result.stderr or b"").decode("utf-8", errors="replace")
        return result.returncode, result.stdout or b"", stderr.strip()
    except FileNotFoundError:
        # Handle case where 'git' command is not found
        return 1, b"", "Git command not found. Is Git installed and in your PATH?"
    except OSError as e:
        return 1, b"", f"Exception running command {' '.join(command)}: {e}"
