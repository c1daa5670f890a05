"""
Toolchain registry for lxbuild.

Maps the compiler "type" declared in a .lx-build descriptor to the driver
class that implements it. The mapping is closed: supporting a new toolchain
means writing an IToolchainDriver and adding an entry to DEFAULT_TOOLCHAINS.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type

from ..errors import UnknownToolchainType
from ..process_runner import ProcessRunner
from .base import IToolchainDriver
from .msvc import MSVCToolchainDriver

DEFAULT_TOOLCHAINS: Dict[str, Type[IToolchainDriver]] = {
    "MSVC-22": MSVCToolchainDriver,
}


class ToolchainRegistry:
    """
    Resolves toolchain identifiers to constructed drivers.

    Example usage:
        registry = ToolchainRegistry()
        driver = registry.resolve(
            config.toolchain_type,
            config.descriptor_path,
            config.toolchain_section,
        )
        driver.compile_units(sources)
    """

    def __init__(self, toolchains: Optional[Mapping[str, Type[IToolchainDriver]]] = None):
        self._toolchains = dict(DEFAULT_TOOLCHAINS if toolchains is None else toolchains)

    def supported_types(self) -> List[str]:
        return sorted(self._toolchains)

    def resolve(
        self,
        identifier: str,
        descriptor_path: Path,
        toolchain_section: Mapping[str, Any],
        runner: Optional[ProcessRunner] = None,
        verbose: bool = False,
    ) -> IToolchainDriver:
        """
        Construct the driver registered under identifier.

        Args:
            identifier: Toolchain type from the descriptor (e.g., MSVC-22)
            descriptor_path: Path to the .lx-build file
            toolchain_section: Raw compiler section, passed to the driver untouched
            runner: Process runner handed to the driver
            verbose: Verbose driver output

        Returns:
            Validated toolchain driver

        Raises:
            UnknownToolchainType: If identifier is not registered
            ToolchainResolutionError: If the driver rejects its section or installation
        """
        driver_cls = self._toolchains.get(identifier)
        if driver_cls is None:
            raise UnknownToolchainType(identifier, self.supported_types())

        return driver_cls.create(
            Path(descriptor_path),
            toolchain_section,
            runner=runner,
            verbose=verbose,
        )
