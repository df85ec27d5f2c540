"""
Diff normalization for prompts.

Git diffs contain a lot of text that costs tokens without helping a model
describe a change: binary notices and the full bodies of files that were
created or removed. normalize_diff() drops those, keeps modified files
verbatim, and appends a short summary naming every added and deleted file.

The scan is a small state machine fed one line at a time. A file section
starts in HEADER, where its header lines are buffered until the null-device
markers, the file mode lines or the first hunk reveal what kind of change it is.
"""

from enum import Enum
from typing import List, Optional

from mr_comment._engine.diff.lines import split_lines
from mr_comment._types.errors import EmptyDiffError
from mr_comment._types.model import FileChangeRecord, NormalizedDiff

FILE_HEADER_PREFIX = "diff --git"
BINARY_PREFIX = "Binary files"
HUNK_PREFIX = "@@"
# Pre-image is the null device: the file is new
ADDED_MARKER = "--- /dev/null"
# Post-image is the null device: the file is being removed
DELETED_MARKER = "+++ /dev/null"
# Extended header lines; the only marker for files without hunks (binary, empty)
NEW_FILE_MODE = "new file mode "
DELETED_FILE_MODE = "deleted file mode "


class ScanState(Enum):
    IDLE = "idle"
    HEADER = "header"
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"


def _path_from_header(line: str) -> Optional[str]:
    # "diff --git a/src/app.py b/src/app.py" -> "src/app.py"
    parts = line.split(" ")
    if len(parts) < 3 or not parts[2]:
        return None
    path = parts[2]
    if path.startswith("a/"):
        path = path[2:]
    return path


class DiffScanner:
    """Consumes raw diff lines and accumulates the normalized output."""

    def __init__(self) -> None:
        self.state = ScanState.IDLE
        self.path: Optional[str] = None
        self.header: List[str] = []
        self.lines: List[str] = []
        self.files: List[FileChangeRecord] = []

    def feed(self, line: str) -> None:
        if line.startswith(BINARY_PREFIX):
            return

        if line.startswith(FILE_HEADER_PREFIX):
            self.finish_file()
            self.state = ScanState.HEADER
            self.path = _path_from_header(line)
            self.header = [line]
            return

        if self.state is ScanState.HEADER:
            if line.startswith(DELETED_MARKER) or line.startswith(DELETED_FILE_MODE):
                self.state = ScanState.DELETED
                self.header = []
            elif line.startswith(ADDED_MARKER) or line.startswith(NEW_FILE_MODE):
                self.state = ScanState.ADDED
                self.header = []
            elif line.startswith(HUNK_PREFIX):
                self.state = ScanState.MODIFIED
                self.lines.extend(self.header)
                self.header = []
                self.lines.append(line)
            else:
                self.header.append(line)
            return

        if self.state in (ScanState.ADDED, ScanState.DELETED):
            return

        self.lines.append(line)

    def finish_file(self) -> None:
        """Record the pending file section. Runs on every header and at end of input."""
        if self.state is ScanState.HEADER:
            # Header only (mode change, binary, rename): keep it as a modification
            self.lines.extend(self.header)
            self._record("modified")
        elif self.state is ScanState.MODIFIED:
            self._record("modified")
        elif self.state is ScanState.ADDED:
            self._record("added")
        elif self.state is ScanState.DELETED:
            self._record("deleted")

        self.state = ScanState.IDLE
        self.path = None
        self.header = []

    def _record(self, status: str) -> None:
        if self.path is not None:
            self.files.append(FileChangeRecord(path=self.path, status=status))


def _summary(title: str, paths: List[str]) -> str:
    if not paths:
        return ""
    return f"\n{title}:\n" + "".join(f"• {path}\n" for path in paths)


def normalize_diff(raw_diff: str) -> NormalizedDiff:
    """
    Convert raw git diff text into a NormalizedDiff.

    Modified files are copied line for line. Added and deleted files are
    reduced to their path in the trailing "New files:" / "Deleted files:"
    sections. "Binary files ..." notices are removed.

    Raises:
        EmptyDiffError: nothing but whitespace is left after normalization.
    """
    scanner = DiffScanner()
    for line in split_lines(raw_diff):
        scanner.feed(line)
    scanner.finish_file()

    new_files = [f.path for f in scanner.files if f.status == "added"]
    deleted_files = [f.path for f in scanner.files if f.status == "deleted"]

    content = "\n".join(scanner.lines)
    content += _summary("New files", new_files)
    content += _summary("Deleted files", deleted_files)

    if not content.strip():
        raise EmptyDiffError("No diff content found")

    return NormalizedDiff(content=content, files=scanner.files)
