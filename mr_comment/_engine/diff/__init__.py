from .lines import split_lines
from .normalize import normalize_diff
from .truncate import TRUNCATION_MARKER, estimate_tokens, truncate_diff

__all__ = ["split_lines", "normalize_diff", "truncate_diff", "estimate_tokens", "TRUNCATION_MARKER"]
