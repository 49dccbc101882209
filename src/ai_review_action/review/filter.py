"""
Exclusion Filter

Drops diff files whose target path matches one of the configured
glob patterns.
"""

import logging
from typing import Iterable, List

from wcmatch import glob

from ..models.pr_diff import DiffFile


logger = logging.getLogger(__name__)

# minimatch defaults: "**" spans directories, brace sets expand and
# wildcards never match a leading dot
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE


def parse_patterns(raw: str) -> List[str]:
    """Split a comma-separated pattern list, trimming blanks."""
    if not raw:
        return []
    return [token.strip() for token in raw.split(',') if token.strip()]


class ExclusionFilter:
    """
    Filters parsed diff files by glob pattern.

    Files without a target path are matched as the empty string.
    Order of the surviving files is preserved.
    """

    def __init__(self, patterns: Iterable[str]):
        self.patterns = [p for p in patterns if p]

    @classmethod
    def from_config(cls, raw: str) -> "ExclusionFilter":
        return cls(parse_patterns(raw))

    def is_excluded(self, path: str) -> bool:
        if not self.patterns:
            return False
        return glob.globmatch(path, self.patterns, flags=GLOB_FLAGS)

    def filter(self, files: List[DiffFile]) -> List[DiffFile]:
        kept = []
        for diff_file in files:
            if self.is_excluded(diff_file.target_path or ""):
                logger.debug(f"Excluding {diff_file.target_path}")
                continue
            kept.append(diff_file)

        if len(kept) != len(files):
            logger.info(f"Excluded {len(files) - len(kept)} of {len(files)} files")
        return kept
