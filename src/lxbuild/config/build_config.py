"""
.lx-build descriptor parser.

This module parses the JSON build descriptor of an LX project into an
immutable BuildConfiguration. The toolchain section is kept verbatim; its
shape is validated later by whichever ToolchainDriver the registry selects.

Example project.lx-build:
    {
        "src-dir": ["src"],
        "debug": false,
        "compiler": {
            "type": "MSVC-22",
            "dir": "C:/Program Files/Microsoft Visual Studio/2022/Community",
            "version": "14.40.33807",
            "sdk-dir": "C:/Program Files (x86)/Windows Kits/10",
            "sdk-version": "10.0.22621.0"
        }
    }
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union

from ..errors import (
    InvalidDescriptorPath,
    MalformedDescriptor,
    MissingSourceDirs,
    MissingToolchainSection,
    MissingToolchainType,
    SourceDirNotFound,
)

DESCRIPTOR_EXTENSION = ".lx-build"
BUILD_DIR_NAME = "build"
DEFAULT_FRONTEND = "lx-frontend"


def resolve_source_dir(project_dir: Path, raw: str) -> Path:
    """Resolve a descriptor src-dir entry against the project directory."""
    return (Path(project_dir) / raw).resolve()


@dataclass(frozen=True)
class BuildConfiguration:
    """
    Validated in-memory form of a .lx-build descriptor.

    Instances only come out of parse(), which either returns a fully valid
    configuration or raises a ConfigurationError.

    Usage:
        config = BuildConfiguration.parse(Path("example/project.lx-build"))
        for src_dir in config.source_dirs:
            ...
    """

    project_name: str
    project_dir: Path
    descriptor_path: Path
    source_dirs: Tuple[Path, ...]
    toolchain_section: Mapping[str, Any]
    debug: bool = False
    frontend: str = DEFAULT_FRONTEND
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False)

    @property
    def build_dir(self) -> Path:
        """Directory the frontend writes generated C++ and objects into."""
        return self.project_dir / BUILD_DIR_NAME

    @property
    def toolchain_type(self) -> str:
        """
        Toolchain identifier declared under compiler.type.

        Raises:
            MissingToolchainType: If the type is absent or not a string
        """
        compiler_type = self.toolchain_section.get("type")
        if not isinstance(compiler_type, str) or not compiler_type.strip():
            raise MissingToolchainType(
                "Compiler Type not specified in build info (.lx-build file)"
            )
        return compiler_type.strip()

    @classmethod
    def parse(cls, path: Optional[Union[str, Path]]) -> "BuildConfiguration":
        """
        Parse and validate a .lx-build descriptor.

        Args:
            path: Path to the descriptor file

        Returns:
            Fully validated BuildConfiguration

        Raises:
            InvalidDescriptorPath: Empty path, missing file or wrong extension
            MalformedDescriptor: Content is not a JSON object, or a src-dir
                entry is not a directory inside the project
            MissingSourceDirs: src-dir absent or empty
            SourceDirNotFound: A listed source directory does not exist
            MissingToolchainSection: compiler section absent
        """
        descriptor = cls._verify_descriptor_path(path)
        project_dir = descriptor.parent
        root = cls._load_json(descriptor)

        source_dirs = cls._parse_source_dirs(root, project_dir)

        toolchain_section = root.get("compiler")
        if not isinstance(toolchain_section, dict):
            raise MissingToolchainSection(
                "Compiler not specified in build info (.lx-build file)"
            )

        # Absence (or a non-boolean value) silently means a release build
        debug = root.get("debug")
        if not isinstance(debug, bool):
            debug = False

        frontend = root.get("frontend")
        if not isinstance(frontend, str) or not frontend.strip():
            frontend = DEFAULT_FRONTEND

        return cls(
            project_name=descriptor.name[: -len(DESCRIPTOR_EXTENSION)],
            project_dir=project_dir,
            descriptor_path=descriptor,
            source_dirs=tuple(source_dirs),
            toolchain_section=MappingProxyType(dict(toolchain_section)),
            debug=debug,
            frontend=frontend.strip(),
            raw=MappingProxyType(root),
        )

    @staticmethod
    def _verify_descriptor_path(path: Optional[Union[str, Path]]) -> Path:
        if path is None or str(path).strip() == "":
            raise InvalidDescriptorPath("No build info path is provided.")

        descriptor = Path(path)
        if not descriptor.is_file():
            raise InvalidDescriptorPath(
                f"The provided build info path ({descriptor}) does not exist."
            )

        if not descriptor.name.endswith(DESCRIPTOR_EXTENSION):
            raise InvalidDescriptorPath(
                f"The provided build info path ({descriptor}) is not a "
                f"{DESCRIPTOR_EXTENSION} file"
            )

        return descriptor.resolve()

    @staticmethod
    def _load_json(descriptor: Path) -> dict:
        try:
            root = json.loads(descriptor.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise MalformedDescriptor(
                f"Could not parse {DESCRIPTOR_EXTENSION}'s JSON format: {e}"
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedDescriptor(f"Could not read {descriptor}: {e}") from e

        if not isinstance(root, dict):
            raise MalformedDescriptor(
                f"Top level of {descriptor.name} must be a JSON object"
            )
        return root

    @staticmethod
    def _parse_source_dirs(root: dict, project_dir: Path) -> List[Path]:
        raw_dirs = root.get("src-dir")
        if not isinstance(raw_dirs, list) or not raw_dirs:
            raise MissingSourceDirs(
                "Source directory not specified in build info file (.lx-build)."
            )

        source_dirs = []
        for raw in raw_dirs:
            if not isinstance(raw, str) or not raw.strip():
                raise MalformedDescriptor(
                    "A source dir provided in the .lx-build file is not a path: "
                    f"{raw!r}"
                )
            src_dir = resolve_source_dir(project_dir, raw)
            if not src_dir.is_dir():
                raise SourceDirNotFound(src_dir)
            # The frontend is handed the directory relative to the project root
            if not src_dir.is_relative_to(project_dir):
                raise MalformedDescriptor(
                    f"A source dir ({src_dir}) provided in the .lx-build file is "
                    f"outside the project directory ({project_dir})"
                )
            source_dirs.append(src_dir)

        return source_dirs
