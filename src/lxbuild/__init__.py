"""lxbuild - native toolchain driver for the LX compiler."""

__version__ = "0.1.0"

from .build import BuildOrchestrator, BuildResult, BuildStage  # noqa: E402
from .config import BuildConfiguration  # noqa: E402
from .toolchains import IToolchainDriver, MSVCToolchainDriver, ToolchainRegistry  # noqa: E402

__all__ = [
    "__version__",
    "BuildConfiguration",
    "BuildOrchestrator",
    "BuildResult",
    "BuildStage",
    "IToolchainDriver",
    "MSVCToolchainDriver",
    "ToolchainRegistry",
]
