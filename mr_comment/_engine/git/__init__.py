from .engine import build_diff_command, get_diff_from_git, read_diff_file

__all__ = ["build_diff_command", "get_diff_from_git", "read_diff_file"]
