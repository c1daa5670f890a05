"""Build descriptor parsing for lxbuild."""

from .build_config import (
    BUILD_DIR_NAME,
    DEFAULT_FRONTEND,
    DESCRIPTOR_EXTENSION,
    BuildConfiguration,
    resolve_source_dir,
)

__all__ = [
    "BuildConfiguration",
    "resolve_source_dir",
    "BUILD_DIR_NAME",
    "DEFAULT_FRONTEND",
    "DESCRIPTOR_EXTENSION",
]
