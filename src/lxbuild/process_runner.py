"""Process Runner.

This module is the single place where lxbuild spawns external processes
(compiler, linker, LX frontend). Every call blocks until the process exits
and is translated into a ProcessOutcome instead of raising, so callers decide
which typed error a failure becomes.

Design:
    - Wraps subprocess.Popen with captured stdout/stderr
    - A process that cannot be started is an outcome (returncode None), not an exception
    - No timeout: a hung compiler blocks the build
    - On KeyboardInterrupt the whole child process tree is terminated (cl.exe
      spawns link.exe) before the interrupt is re-raised
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import psutil


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of one external process invocation."""

    command: List[str]
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    started: bool = True

    @property
    def success(self) -> bool:
        return self.started and self.returncode == 0

    @property
    def output(self) -> str:
        """Captured stderr and stdout, for error reports."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)


def kill_process_tree(pid: int, timeout: float = 3.0) -> int:
    """Terminate a process and all of its descendants.

    Children are terminated before their parent; anything still alive after
    the grace period is killed.

    Args:
        pid: Root process id
        timeout: Seconds to wait for graceful termination

    Returns:
        Number of processes that were signalled
    """
    try:
        root = psutil.Process(pid)
        processes = root.children(recursive=True)
        processes.reverse()
        processes.append(root)
    except psutil.NoSuchProcess:
        return 0

    signalled = []
    for proc in processes:
        try:
            proc.terminate()
            signalled.append(proc)
        except psutil.NoSuchProcess:
            pass  # Already gone

    _gone, alive = psutil.wait_procs(signalled, timeout=timeout)
    for proc in alive:
        try:
            proc.kill()
            logging.warning(f"Force killed process {proc.pid} after {timeout}s")
        except psutil.NoSuchProcess:
            pass

    logging.info(f"Terminated process tree of {pid} ({len(signalled)} processes)")
    return len(signalled)


class ProcessRunner:
    """Runs external commands to completion and captures their output."""

    def __init__(self, verbose: bool = False):
        """Initialize process runner.

        Args:
            verbose: Echo each command line before running it
        """
        self.verbose = verbose

    def run(self, command: Sequence[str], cwd: Optional[Path] = None) -> ProcessOutcome:
        """Run a command and wait for it to exit.

        Args:
            command: Executable followed by its arguments
            cwd: Working directory for the process

        Returns:
            ProcessOutcome describing how the process ended
        """
        cmd = [str(part) for part in command]

        if self.verbose:
            print(f"      $ {subprocess.list2cmdline(cmd)}")

        try:
            proc = subprocess.Popen(
                cmd,
                cwd=str(cwd) if cwd is not None else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            return ProcessOutcome(
                command=cmd,
                returncode=None,
                stderr=f"Failed to start {cmd[0]}: {e}",
                started=False,
            )

        try:
            stdout, stderr = proc.communicate()
        except KeyboardInterrupt:
            kill_process_tree(proc.pid)
            raise

        return ProcessOutcome(
            command=cmd,
            returncode=proc.returncode,
            stdout=stdout or "",
            stderr=stderr or "",
        )

