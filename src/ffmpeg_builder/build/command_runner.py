"""Stage Command Runner.

This module runs the external tools of a build (git, configure, make)
and turns any failure into a stage-named error.

Design:
    - Wraps subprocess.run for every external build step
    - Merges per-stage environment overrides (PKG_CONFIG_PATH) into the
      inherited environment
    - Captures tool output unless verbose, attaching the tail to errors
    - A non-zero exit aborts the run; nothing is retried
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

STAGE_FETCH = "fetch"
STAGE_DOWNLOAD = "download"
STAGE_EXTRACT = "extract"
STAGE_CONFIGURE = "configure"
STAGE_MAKE = "make"
STAGE_INSTALL = "install"

# Verbose tool output goes to the process stderr descriptor so stdout stays
# reserved for the pkg-config line.
STDERR_FD = 2


class BuildError(Exception):
    """Base class for failures of an external build step."""

    pass


class StageError(BuildError):
    """Raised when a single build stage fails."""

    def __init__(
        self,
        target: str,
        stage: str,
        detail: str,
        returncode: Optional[int] = None,
        output: str = "",
    ):
        self.target = target
        self.stage = stage
        self.returncode = returncode
        self.output = output

        message = f"{target}: {stage} stage failed: {detail}"
        if output:
            message += f"\n{output}"
        super().__init__(message)


class CommandRunner:
    """Runs build stage commands synchronously."""

    def __init__(self, verbose: bool = False, output_tail_lines: int = 40):
        """Initialize command runner.

        Args:
            verbose: Stream tool output to stderr instead of capturing it
            output_tail_lines: Lines of captured output kept on failure
        """
        self.verbose = verbose
        self.output_tail_lines = output_tail_lines

    def run(
        self,
        target: str,
        stage: str,
        cmd: List[str],
        cwd: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        """Run one stage command.

        Args:
            target: Name of the thing being built (e.g. 'x264', 'ffmpeg')
            stage: Stage name reported on failure
            cmd: Command and arguments
            cwd: Working directory
            env: Environment variables added to the inherited environment

        Raises:
            StageError: If the command cannot be started or exits non-zero
        """
        logger.info(f"[{target}] {stage}")
        logger.debug(f"[{target}] $ {' '.join(cmd)}")

        run_env = None
        if env:
            run_env = dict(os.environ)
            run_env.update(env)

        try:
            if self.verbose:
                result = subprocess.run(
                    cmd, cwd=cwd, env=run_env, stdout=STDERR_FD, stderr=STDERR_FD
                )
            else:
                result = subprocess.run(
                    cmd,
                    cwd=cwd,
                    env=run_env,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    errors="replace",
                )
        except OSError as e:
            raise StageError(target, stage, f"could not run {cmd[0]}: {e}") from e

        if result.returncode != 0:
            raise StageError(
                target,
                stage,
                f"{cmd[0]} exited with code {result.returncode}",
                returncode=result.returncode,
                output=self._tail(result.stdout),
            )

    def _tail(self, output: Optional[str]) -> str:
        if not output:
            return ""
        lines = output.rstrip().splitlines()
        return "\n".join(lines[-self.output_tail_lines :])
