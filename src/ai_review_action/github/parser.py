"""
Unified Diff Parser

Parses the raw unified diff GitHub returns for a pull request or a
commit comparison into structured files, hunks and line changes.
"""

import re
import logging
from typing import List, Optional

from ..models.pr_diff import DELETED_FILE_PATH, Change, Chunk, DiffFile


logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when diff text is not a valid unified diff"""
    def __init__(self, message: str, line_number: Optional[int] = None):
        if line_number is not None:
            message = f"{message} (diff line {line_number})"
        super().__init__(message)
        self.line_number = line_number


class UnifiedDiffParser:
    """
    Parser for unified diff text.

    Hunk bodies are consumed by the line counts declared in their
    headers, so a removed line that itself starts with "--" is never
    mistaken for the next file header.
    """

    def __init__(self):
        """Initialize unified diff parser."""
        self.hunk_header_pattern = re.compile(r'^@@\s*-(\d+)(?:,(\d+))?\s+\+(\d+)(?:,(\d+))?\s*@@(.*)$')
        self.git_header_pattern = re.compile(r'^diff --git ("?)a/(.+?)\1 ("?)b/(.+?)\3$')
        self.binary_file_pattern = re.compile(r'^Binary files? .* differ$')

    def parse(self, diff_text: str) -> List[DiffFile]:
        """
        Parse diff text into DiffFile records.

        Args:
            diff_text: Full unified diff string

        Returns:
            Files in diff order, each with its hunks in order

        Raises:
            ParseError: If the text is not a unified diff
        """
        if not diff_text or not diff_text.strip():
            return []

        files: List[DiffFile] = []
        current_file: Optional[DiffFile] = None
        current_chunk: Optional[Chunk] = None
        target_header_seen = False
        old_line = new_line = 0
        old_remaining = new_remaining = 0

        for index, line in enumerate(diff_text.splitlines(), start=1):
            if current_chunk is not None and (old_remaining > 0 or new_remaining > 0):
                marker = line[:1]
                if marker == '\\':
                    continue
                if marker == '+':
                    current_chunk.changes.append(Change('add', line, new_line_number=new_line))
                    new_line += 1
                    new_remaining -= 1
                    continue
                if marker == '-':
                    current_chunk.changes.append(Change('del', line, old_line_number=old_line))
                    old_line += 1
                    old_remaining -= 1
                    continue
                if marker == ' ' or line == '':
                    current_chunk.changes.append(
                        Change('normal', line or ' ', old_line_number=old_line, new_line_number=new_line)
                    )
                    old_line += 1
                    new_line += 1
                    old_remaining -= 1
                    new_remaining -= 1
                    continue
                # Hunk shorter than its header claims; treat the line as a header
                logger.debug(f"Hunk ended early at diff line {index}")
                current_chunk = None

            if line.startswith('\\'):
                continue

            if line.startswith('diff --git '):
                current_file = self._start_file(files, line)
                current_chunk = None
                target_header_seen = False

            elif line.startswith('--- '):
                if current_file is None or current_file.chunks or target_header_seen:
                    current_file = DiffFile(source_path=None, target_path=None)
                    files.append(current_file)
                    target_header_seen = False
                current_chunk = None
                current_file.source_path = self._parse_path(line[4:])
                if current_file.source_path == DELETED_FILE_PATH:
                    current_file.is_new = True

            elif line.startswith('+++ '):
                if current_file is None:
                    raise ParseError("Target file header without source header", index)
                current_file.target_path = self._parse_path(line[4:])
                target_header_seen = True

            elif line.startswith('@@'):
                if current_file is None:
                    raise ParseError("Hunk header outside of a file", index)
                match = self.hunk_header_pattern.match(line)
                if not match:
                    raise ParseError(f"Malformed hunk header: {line!r}", index)

                old_line = int(match.group(1))
                old_remaining = int(match.group(2)) if match.group(2) is not None else 1
                new_line = int(match.group(3))
                new_remaining = int(match.group(4)) if match.group(4) is not None else 1

                current_chunk = Chunk(
                    content=line,
                    old_start=old_line,
                    old_lines=old_remaining,
                    new_start=new_line,
                    new_lines=new_remaining,
                )
                current_file.chunks.append(current_chunk)

            elif current_file is None:
                # Preamble before the first file (e.g. mail headers of a patch)
                continue

            elif line.startswith('new file mode'):
                current_file.is_new = True

            elif line.startswith('deleted file mode'):
                current_file.target_path = DELETED_FILE_PATH

            elif line.startswith('rename from '):
                current_file.source_path = self._parse_path(line[len('rename from '):], strip_prefix=False)

            elif line.startswith('rename to '):
                current_file.target_path = self._parse_path(line[len('rename to '):], strip_prefix=False)

            elif self.binary_file_pattern.match(line):
                current_file.is_binary = True

            elif line[:1] in ('+', '-'):
                raise ParseError("Change line outside of a hunk", index)

        if not files:
            raise ParseError("No file headers found in diff")

        logger.debug(f"Parsed {len(files)} files, {sum(len(f.chunks) for f in files)} hunks")
        return files

    def _start_file(self, files: List[DiffFile], header: str) -> DiffFile:
        """Open a new file record from a "diff --git" header."""
        source_path = target_path = None
        match = self.git_header_pattern.match(header)
        if match:
            source_path = match.group(2)
            target_path = match.group(4)
        else:
            logger.debug(f"Could not read paths from git header: {header!r}")

        diff_file = DiffFile(source_path=source_path, target_path=target_path)
        files.append(diff_file)
        return diff_file

    def _parse_path(self, raw: str, strip_prefix: bool = True) -> str:
        """
        Normalize a path from a file header.

        Drops a trailing tab-separated timestamp, surrounding quotes
        and the a/ or b/ prefix git adds.
        """
        path = raw.split('\t', 1)[0].rstrip()
        if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
            path = path[1:-1]
        if path == DELETED_FILE_PATH:
            return path
        if strip_prefix and (path.startswith('a/') or path.startswith('b/')):
            path = path[2:]
        return path
