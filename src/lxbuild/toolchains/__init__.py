"""Native toolchain drivers for lxbuild."""

from .base import IToolchainDriver
from .msvc import MSVCToolchainDriver
from .registry import DEFAULT_TOOLCHAINS, ToolchainRegistry

__all__ = [
    "IToolchainDriver",
    "MSVCToolchainDriver",
    "ToolchainRegistry",
    "DEFAULT_TOOLCHAINS",
]
