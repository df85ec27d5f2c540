from typing import List


def split_lines(text: str) -> List[str]:
    """
    Split text on "\\n" only, the way git writes diffs.

    str.splitlines() also breaks on form feeds, NEL, U+2028 and lone
    carriage returns, all of which can appear inside a source line. A
    trailing newline does not open an empty last line, and one "\\r" is
    dropped from the end of each line so CRLF input counts the same.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
