"""
Build pipeline for lxbuild.

This package provides:
- Source discovery (.lx sources, generated .cpp units)
- The LX frontend collaborator contract
- Build orchestration (translate, compile, link)
"""

from .frontend import CommandFrontend, IFrontend
from .orchestrator import BuildOrchestrator, BuildResult, BuildStage
from .source_scanner import SourceCollection, SourceScanner

__all__ = [
    "BuildOrchestrator",
    "BuildResult",
    "BuildStage",
    "CommandFrontend",
    "IFrontend",
    "SourceCollection",
    "SourceScanner",
]
