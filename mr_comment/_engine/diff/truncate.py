import math

from mr_comment._engine.diff.lines import split_lines
from mr_comment._types.model import TruncatedDiff

TRUNCATION_MARKER = "[...diff truncated...]"

# Rough characters-per-token ratio; OpenAI sits near 3.5, Claude near 4
CHARS_PER_TOKEN = 3.5


def truncate_diff(diff: str, max_lines: int) -> TruncatedDiff:
    """
    Bound a diff to max_lines, keeping its beginning and end.

    The first and last max_lines // 2 lines survive with TRUNCATION_MARKER
    between them, so an odd max_lines keeps one line fewer than requested.
    The reported original_line_count is always the pre-truncation count.
    """
    lines = split_lines(diff)
    original_line_count = len(lines)

    if original_line_count <= max_lines:
        return TruncatedDiff(
            content=diff,
            original_line_count=original_line_count,
            max_lines=max_lines,
        )

    half = max(max_lines, 0) // 2
    head = lines[:half]
    tail = lines[original_line_count - half:]
    return TruncatedDiff(
        content="\n".join(head + [TRUNCATION_MARKER] + tail),
        original_line_count=original_line_count,
        max_lines=max_lines,
    )


def estimate_tokens(text: str) -> int:
    """Advisory token count for --debug. Never used to gate a request."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)
