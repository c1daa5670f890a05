"""MSVC toolchain driver.

This module drives the Microsoft Visual C++ compiler (cl.exe) from a Visual
Studio installation plus a Windows SDK. All installation paths are derived
from four descriptor fields and verified once, at construction:

    {
        "type": "MSVC-22",
        "dir": "C:/Program Files/Microsoft Visual Studio/2022/Community",
        "version": "14.40.33807",
        "sdk-dir": "C:/Program Files (x86)/Windows Kits/10",
        "sdk-version": "10.0.22621.0"
    }

Optional "host-arch" and "target-arch" select the compiler flavour
(both default to x86).
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from ..config.build_config import BUILD_DIR_NAME
from ..errors import (
    CompilationFailed,
    LinkFailed,
    MissingToolchainField,
    ToolchainPathNotFound,
)
from ..process_runner import ProcessRunner
from .base import IToolchainDriver

# Executable names use this suffix on every host; the files are Windows binaries
EXE_SUFFIX = ".exe"
OBJECT_SUFFIX = ".obj"

LINK_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


class MSVCToolchainDriver(IToolchainDriver):
    """Driver for cl.exe from Visual Studio 2022."""

    # (descriptor key, description used in error messages), read in this order
    REQUIRED_FIELDS: List[Tuple[str, str]] = [
        ("dir", "Visual Studio location"),
        ("version", "Visual Studio version"),
        ("sdk-dir", "Windows SDK path"),
        ("sdk-version", "Windows SDK version"),
    ]

    DEFAULT_HOST_ARCH = "x86"
    DEFAULT_TARGET_ARCH = "x86"

    # (attribute, display name), verified in this order; the compiler must be
    # a file, everything after it a directory
    REQUIRED_PATHS: List[Tuple[str, str]] = [
        ("compiler_path", "MSVC compiler location"),
        ("msvc_include_path", "MSVC include path"),
        ("msvc_lib_path", "MSVC library path"),
        ("ucrt_include_path", "Windows SDK ucrt include path"),
        ("shared_include_path", "Windows SDK shared include path"),
        ("um_include_path", "Windows SDK um include path"),
        ("ucrt_lib_path", "Windows SDK ucrt library path"),
        ("um_lib_path", "Windows SDK um library path"),
    ]

    def __init__(
        self,
        install_dir: Path,
        version: str,
        sdk_dir: Path,
        sdk_version: str,
        project_dir: Path,
        host_arch: str = DEFAULT_HOST_ARCH,
        target_arch: str = DEFAULT_TARGET_ARCH,
        runner: Optional[ProcessRunner] = None,
        verbose: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Derive and verify every installation path.

        Args:
            install_dir: Visual Studio installation directory
            version: MSVC toolset version (e.g., 14.40.33807)
            sdk_dir: Windows SDK root (e.g., .../Windows Kits/10)
            sdk_version: Windows SDK version (e.g., 10.0.22621.0)
            project_dir: Project root; its build directory is also searched for headers
            host_arch: Architecture the compiler runs on
            target_arch: Architecture the compiler emits code for
            runner: Process runner (defaults to a real subprocess runner)
            verbose: Print each compiled unit
            clock: Source of the link timestamp (defaults to datetime.now)

        Raises:
            ToolchainPathNotFound: First missing path, in REQUIRED_PATHS order
        """
        self.install_dir = Path(install_dir)
        self.version = version
        self.sdk_dir = Path(sdk_dir)
        self.sdk_version = sdk_version
        self.project_dir = Path(project_dir)
        self.host_arch = host_arch
        self.target_arch = target_arch
        self.verbose = verbose
        self.runner = runner if runner is not None else ProcessRunner(verbose=verbose)
        self.clock = clock if clock is not None else datetime.now

        msvc_root = self.install_dir / "VC" / "Tools" / "MSVC" / version
        self.compiler_path = (
            msvc_root / "bin" / f"Host{host_arch}" / target_arch / f"cl{EXE_SUFFIX}"
        )
        self.msvc_include_path = msvc_root / "include"
        self.msvc_lib_path = msvc_root / "lib" / target_arch

        sdk_include = self.sdk_dir / "Include" / sdk_version
        self.ucrt_include_path = sdk_include / "ucrt"
        self.shared_include_path = sdk_include / "shared"
        self.um_include_path = sdk_include / "um"

        sdk_lib = self.sdk_dir / "Lib" / sdk_version
        self.ucrt_lib_path = sdk_lib / "ucrt" / target_arch
        self.um_lib_path = sdk_lib / "um" / target_arch

        self._verify_paths()

    @classmethod
    def create(
        cls,
        descriptor_path: Path,
        toolchain_section: Mapping[str, Any],
        runner: Optional[ProcessRunner] = None,
        verbose: bool = False,
    ) -> "MSVCToolchainDriver":
        """Read the compiler section and build a verified driver.

        All required fields are read before any filesystem check, so a
        missing field is always reported as such rather than as a bad path.
        """
        values = {}
        for key, description in cls.REQUIRED_FIELDS:
            values[key] = cls._read_field(toolchain_section, key, description)

        host_arch = cls._read_optional(toolchain_section, "host-arch", cls.DEFAULT_HOST_ARCH)
        target_arch = cls._read_optional(
            toolchain_section, "target-arch", cls.DEFAULT_TARGET_ARCH
        )

        return cls(
            install_dir=Path(values["dir"]),
            version=values["version"],
            sdk_dir=Path(values["sdk-dir"]),
            sdk_version=values["sdk-version"],
            project_dir=Path(descriptor_path).resolve().parent,
            host_arch=host_arch,
            target_arch=target_arch,
            runner=runner,
            verbose=verbose,
        )

    @staticmethod
    def _read_field(section: Mapping[str, Any], key: str, description: str) -> str:
        value = section.get(key)
        if not isinstance(value, str) or not value.strip():
            raise MissingToolchainField(key, description)
        return value.strip()

    @staticmethod
    def _read_optional(section: Mapping[str, Any], key: str, default: str) -> str:
        value = section.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return default

    def _verify_paths(self) -> None:
        for attr, name in self.REQUIRED_PATHS:
            path = getattr(self, attr)
            exists = path.is_file() if attr == "compiler_path" else path.is_dir()
            if not exists:
                raise ToolchainPathNotFound(name, path)

    @property
    def build_dir(self) -> Path:
        return self.project_dir / BUILD_DIR_NAME

    @property
    def include_dirs(self) -> List[Path]:
        """Header search path: MSVC, SDK ucrt/shared/um, then the build directory."""
        return [
            self.msvc_include_path,
            self.ucrt_include_path,
            self.shared_include_path,
            self.um_include_path,
            self.build_dir,
        ]

    @property
    def library_dirs(self) -> List[Path]:
        return [self.msvc_lib_path, self.ucrt_lib_path, self.um_lib_path]

    def build_compile_command(self, source_file: Path, object_file: Path) -> List[str]:
        cmd = [str(self.compiler_path), "/nologo"]
        for include in self.include_dirs:
            cmd.extend(["/I", str(include)])
        cmd.extend(["/EHsc", "/c", str(source_file), f"/Fo{object_file}"])
        return cmd

    def build_link_command(self, object_files: Sequence[Path], output_exe: Path) -> List[str]:
        cmd = [str(self.compiler_path), "/nologo"]
        cmd.extend(str(obj) for obj in object_files)
        cmd.extend(["/link", f"/OUT:{output_exe}"])
        cmd.extend(f"/LIBPATH:{lib}" for lib in self.library_dirs)
        return cmd

    def compile_unit(self, source_file: Path) -> Path:
        source_file = Path(source_file)
        object_file = source_file.with_suffix(OBJECT_SUFFIX)

        if self.verbose:
            print(f"      Compiling {source_file.name}...")

        outcome = self.runner.run(
            self.build_compile_command(source_file, object_file),
            cwd=self.project_dir,
        )
        if not outcome.success:
            raise CompilationFailed(source_file, outcome.returncode, outcome.output)

        return object_file

    def compile_units(self, source_files: Sequence[Path]) -> List[Path]:
        # Later units are never attempted once one fails
        return [self.compile_unit(source) for source in source_files]

    def output_executable_path(self, project_dir: Path, output_name: str) -> Path:
        """Timestamped executable path for a link started now."""
        timestamp = self.clock().strftime(LINK_TIMESTAMP_FORMAT)
        return Path(project_dir) / f"{output_name}_{timestamp}{EXE_SUFFIX}"

    def link(self, project_dir: Path, output_name: str) -> Path:
        project_dir = Path(project_dir)
        build_dir = project_dir / BUILD_DIR_NAME

        # Stale objects from earlier builds are linked too; cleaning is up to the caller
        object_files = sorted(build_dir.glob(f"*{OBJECT_SUFFIX}"))
        if not object_files:
            raise LinkFailed(f"No {OBJECT_SUFFIX} files found in {build_dir}")

        output_exe = self.output_executable_path(project_dir, output_name)

        if self.verbose:
            print(f"      Linking {len(object_files)} objects -> {output_exe.name}")

        outcome = self.runner.run(
            self.build_link_command(object_files, output_exe),
            cwd=project_dir,
        )
        if not outcome.success:
            if outcome.started:
                message = "MSVC failed at linking the objs."
            else:
                message = "Failed to start MSVC linker."
            raise LinkFailed(message, outcome.returncode, outcome.output)

        return output_exe
