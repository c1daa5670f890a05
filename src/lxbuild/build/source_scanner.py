"""
Source file discovery.

This module handles:
- Finding LX source files (.lx) in each configured source directory
- Finding the intermediate C++ files (.cpp) the frontend wrote to the build directory

Both scans are non-recursive and sorted so builds are reproducible.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

LX_SOURCE_PATTERN = "*.lx"
INTERMEDIATE_PATTERN = "*.cpp"


@dataclass
class SourceCollection:
    """LX sources grouped by the source directory they were found in."""

    source_dir: Path
    sources: List[Path]
    project_dir: Path

    @property
    def src_dir_name(self) -> str:
        """Source directory relative to the project, as the frontend expects it.

        Raises:
            ValueError: If the directory lies outside the project
        """
        return self.source_dir.relative_to(self.project_dir).as_posix()


class SourceScanner:
    """
    Scans source directories and the build directory.

    Example usage:
        scanner = SourceScanner(config.build_dir)
        for collection in scanner.scan_sources(config.source_dirs, config.project_dir):
            ...
        units = scanner.scan_intermediate()
    """

    def __init__(self, build_dir: Path):
        """
        Initialize source scanner.

        Args:
            build_dir: Build output directory holding generated .cpp files
        """
        self.build_dir = Path(build_dir)

    def scan_sources(
        self, source_dirs: Sequence[Path], project_dir: Path
    ) -> List[SourceCollection]:
        """
        Find LX sources in every source directory, keeping directory order.

        Args:
            source_dirs: Absolute source directories from the configuration
            project_dir: Project root the directories are named relative to

        Returns:
            One SourceCollection per directory (possibly with no sources)
        """
        return [
            SourceCollection(
                source_dir=Path(src_dir),
                sources=self._glob_files(Path(src_dir), LX_SOURCE_PATTERN),
                project_dir=Path(project_dir),
            )
            for src_dir in source_dirs
        ]

    def scan_intermediate(self) -> List[Path]:
        """Find the generated C++ units in the build directory."""
        return self._glob_files(self.build_dir, INTERMEDIATE_PATTERN)

    @staticmethod
    def _glob_files(directory: Path, pattern: str) -> List[Path]:
        if not directory.is_dir():
            return []
        return sorted(path for path in directory.glob(pattern) if path.is_file())
