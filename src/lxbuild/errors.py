"""
Error taxonomy for the LX build driver.

Every failure the driver can diagnose is an LXBuildError. The four families
mirror where a build can go wrong:

- ConfigurationError: the .lx-build descriptor itself is unusable
- ToolchainResolutionError: the declared toolchain is unknown or incomplete
- ExternalStageError: the LX frontend failed (translation or header creation)
- ProcessError: the compiler or linker failed to start or exited non-zero

Components raise these; only the BuildOrchestrator turns them into a failed
BuildResult.
"""

from pathlib import Path
from typing import Iterable, Mapping, Optional


class LXBuildError(Exception):
    """Base error carrying an optional hint and context for diagnostics."""

    def __init__(
        self,
        message: str,
        *,
        hint: Optional[str] = None,
        context: Optional[Mapping[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [self.message]
        for key, value in self.context.items():
            if value:
                parts.append(f"  {key}: {value}")
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        return "\n".join(parts)


# Configuration errors


class ConfigurationError(LXBuildError):
    """Raised when the build descriptor is missing, malformed or inconsistent."""

    pass


class InvalidDescriptorPath(ConfigurationError):
    pass


class MalformedDescriptor(ConfigurationError):
    pass


class MissingSourceDirs(ConfigurationError):
    pass


class SourceDirNotFound(ConfigurationError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"A source dir ({self.path}) provided in the .lx-build file does not exist",
            context={"path": str(self.path)},
        )


class MissingToolchainSection(ConfigurationError):
    pass


class BuildDirUnavailable(ConfigurationError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(
            f"Build output directory ({self.path}) could not be created: {reason}",
            hint="Remove or rename whatever occupies the project's build path.",
            context={"path": str(self.path)},
        )


# Toolchain resolution errors


class ToolchainResolutionError(LXBuildError):
    """Raised when a toolchain cannot be selected or its installation is incomplete."""

    pass


class MissingToolchainType(ToolchainResolutionError):
    pass


class UnknownToolchainType(ToolchainResolutionError):
    def __init__(self, identifier: object, supported: Iterable[str]) -> None:
        self.identifier = identifier
        self.supported = list(supported)
        valid = "\n".join(f"\t{name}" for name in self.supported)
        super().__init__(
            f"Invalid compiler type: {identifier}\nValid types are:\n{valid}"
        )


class MissingToolchainField(ToolchainResolutionError):
    def __init__(self, key: str, description: str) -> None:
        self.key = key
        super().__init__(
            f"{description} not specified in build info (.lx-build file). "
            f'Should be under "{key}".',
            context={"key": key},
        )


class ToolchainPathNotFound(ToolchainResolutionError):
    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = Path(path)
        super().__init__(
            f"{name} ({self.path}) does not exist",
            hint="Check the 'dir', 'version', 'sdk-dir' and 'sdk-version' "
            "fields of the compiler section.",
            context={"path": str(self.path)},
        )


# External stage errors


class ExternalStageError(LXBuildError):
    """Raised when an LX frontend collaborator reports failure."""

    pass


class TranslationFailed(ExternalStageError):
    def __init__(self, source_file: Path, output: str = "") -> None:
        self.source_file = Path(source_file)
        self.output = output
        super().__init__(
            f"An error occurred whilst translating {self.source_file.name}",
            context={"file": str(self.source_file), "output": output},
        )


class HeaderAggregationFailed(ExternalStageError):
    def __init__(self, project_dir: Path, output: str = "") -> None:
        self.project_dir = Path(project_dir)
        self.output = output
        super().__init__(
            "An error occurred during header file creation",
            context={"project": str(self.project_dir), "output": output},
        )


# Process errors


class ProcessError(LXBuildError):
    """Raised when the compiler/linker fails to launch or exits non-zero.

    returncode is None when the process could not be started at all.
    """

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        output: str = "",
        context: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.returncode = returncode
        self.output = output
        details = dict(context or {})
        details["exit code"] = "" if returncode is None else str(returncode)
        details["output"] = output
        super().__init__(message, context=details)


class CompilationFailed(ProcessError):
    def __init__(
        self, source_file: Path, returncode: Optional[int] = None, output: str = ""
    ) -> None:
        self.source_file = Path(source_file)
        if returncode is None:
            message = f"Failed to start compiler for {self.source_file.name}"
        else:
            message = f"Compilation of {self.source_file.name} failed"
        super().__init__(
            message,
            returncode=returncode,
            output=output,
            context={"file": str(self.source_file)},
        )


class LinkFailed(ProcessError):
    def __init__(
        self, message: str, returncode: Optional[int] = None, output: str = ""
    ) -> None:
        super().__init__(message, returncode=returncode, output=output)


class BuildFailed(LXBuildError):
    """Raised by run_build(); names the stage and chains the original error."""

    def __init__(self, stage: object, cause: LXBuildError) -> None:
        self.stage = stage
        self.cause = cause
        stage_name = getattr(stage, "value", stage)
        super().__init__(f"Build failed during {stage_name}: {cause}")
