"""
Pylint Score Collector

Runs pylint over the Python files of the working tree and extracts the
overall rating from its text report. Lint scoring is best effort: a
linter that cannot run is logged and reported as a missing score.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Sequence


logger = logging.getLogger(__name__)

MAX_SCORE = 10.0
DEFAULT_EXCLUDED_DIRS = ('venv', 'env', '.venv', 'node_modules')

RATING_PATTERN = re.compile(r'Your code has been rated at (\d+\.\d+)')


class LinterExecutionError(Exception):
    """pylint could not be run or exited abnormally"""
    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


def parse_score(report: str) -> float:
    """Extract the rating from a pylint report; 0.0 when there is none."""
    match = RATING_PATTERN.search(report or "")
    return float(match.group(1)) if match else 0.0


class PylintScoreCollector:
    """
    Computes a pylint score for a source tree.
    """

    def __init__(
        self,
        root: str = ".",
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
        command: Sequence[str] = ("pylint",),
        timeout: Optional[float] = None
    ):
        """
        Initialize the collector.

        Args:
            root: Directory to search for Python files
            excluded_dirs: Directory names skipped at any depth
            command: Executable (and fixed leading arguments) to invoke
            timeout: Optional subprocess timeout in seconds
        """
        self.root = Path(root)
        self.excluded_dirs = set(excluded_dirs)
        self.command = list(command)
        self.timeout = timeout

    def discover_files(self) -> List[str]:
        """
        Find *.py files under root, relative to it, in sorted order.

        Hidden files and anything inside a hidden directory are skipped,
        as are the excluded directory names at any depth.
        """
        files = []
        for path in self.root.rglob('*.py'):
            relative = path.relative_to(self.root)
            if any(part.startswith('.') for part in relative.parts):
                continue
            if any(part in self.excluded_dirs for part in relative.parts[:-1]):
                continue
            if path.is_file():
                files.append(relative.as_posix())
        return sorted(files)

    def run_pylint(self, files: List[str]) -> str:
        """
        Run pylint in exit-zero mode and return its text report.

        Raises:
            LinterExecutionError: If pylint is missing, times out or
                exits non-zero despite --exit-zero
        """
        args = self.command + files + ['--exit-zero', '--output-format=text']
        try:
            result = subprocess.run(
                args,
                cwd=str(self.root),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise LinterExecutionError(f"pylint executable not found: {e}")
        except subprocess.TimeoutExpired:
            raise LinterExecutionError(f"pylint timed out after {self.timeout}s")
        except OSError as e:
            raise LinterExecutionError(f"Failed to start pylint: {e}")

        if result.stderr:
            logger.error(f"Pylint error: {result.stderr.strip()}")

        if result.returncode != 0:
            raise LinterExecutionError(
                f"pylint exited with status {result.returncode}",
                returncode=result.returncode
            )

        return result.stdout

    def collect(self) -> Optional[float]:
        """
        Compute the lint score.

        Returns:
            10.0 when there are no Python files, the parsed rating
            otherwise, or None when pylint could not be run
        """
        files = self.discover_files()
        if not files:
            logger.info("No Python files found in the repository.")
            return MAX_SCORE

        logger.info(f"Running pylint on {len(files)} files")
        try:
            report = self.run_pylint(files)
        except LinterExecutionError as e:
            logger.error(f"Lint scoring skipped: {e}")
            return None

        score = parse_score(report)
        logger.info(f"Pylint score: {score:.2f}/10")
        return score
