# /*
# Copyright 2026 The Solo Action Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Process runner: the single chokepoint for external CLI invocations.

Two invocation modes are kept apart so the shell surface stays visible at
call sites: :meth:`CommandRunner.run_argv` passes an argument vector
straight to the executable, :meth:`CommandRunner.run_shell` hands one
script string to ``bash -c`` for redirections and pipelines.
"""

from __future__ import annotations

import shlex
import subprocess
import sys
from collections import deque
from collections.abc import Callable, Sequence

import sh

from solo_action import logger
from solo_action.constants import BASH, EXIT_CODE_NOT_FOUND, STDERR_TAIL_LINES
from solo_action.errors import CommandFailed

StdoutSink = Callable[[str], None]

# Handles of detached children, held for the life of the process.
_detached: list[subprocess.Popen] = []


class CommandRunner:
    """Runs external CLIs, streaming their output into the job log."""

    def require(self, command: str) -> None:
        """Check if a command exists on the system PATH.

        Args:
            command: Name of the CLI command to check.

        Raises:
            RuntimeError: If the command is not found.
        """
        try:
            path = sh.which(command)
        except (sh.ErrorReturnCode, sh.CommandNotFound) as err:
            raise RuntimeError(f"Required command '{command}' not found. Please install it first.") from err
        if not path:
            raise RuntimeError(f"Required command '{command}' not found. Please install it first.")

    def run_argv(
        self,
        command: str,
        args: Sequence[str] = (),
        stdout_sink: StdoutSink | None = None,
        echo: bool = True,
    ) -> int:
        """Run ``command`` with ``args`` and wait for it to exit.

        Args:
            command: Executable name, resolved on PATH.
            args: Argument vector.
            stdout_sink: Optional callable receiving each decoded stdout chunk.
            echo: Copy stdout into the job log. Disabled when capturing.

        Returns:
            The exit code, always 0.

        Raises:
            CommandFailed: If the command is missing, exits non-zero, or is killed by a signal.
        """
        argv = [str(arg) for arg in args]
        logger.info("[exec] Running: %s", shlex.join([command, *argv]))
        stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)

        def _on_stdout(chunk: str) -> None:
            if echo:
                sys.stdout.write(chunk)
            if stdout_sink is not None:
                stdout_sink(chunk)

        def _on_stderr(chunk: str) -> None:
            sys.stderr.write(chunk)
            stderr_tail.append(chunk)

        try:
            sh.Command(command)(*argv, _out=_on_stdout, _err=_on_stderr, _tty_out=False)
        except sh.CommandNotFound as err:
            raise CommandFailed(command, argv, EXIT_CODE_NOT_FOUND, f"{command}: command not found") from err
        except sh.ErrorReturnCode as err:
            raise CommandFailed(command, argv, err.exit_code, "".join(stderr_tail).rstrip()) from err
        finally:
            sys.stdout.flush()
        return 0

    def run_shell(self, script: str, stdout_sink: StdoutSink | None = None, echo: bool = True) -> int:
        """Run ``script`` through ``bash -c``.

        Args:
            script: Shell script, may contain redirections and pipes.
            stdout_sink: Optional callable receiving each decoded stdout chunk.
            echo: Copy stdout into the job log.

        Returns:
            The exit code, always 0.

        Raises:
            CommandFailed: If the shell exits non-zero.
        """
        return self.run_argv(BASH, ["-c", script], stdout_sink=stdout_sink, echo=echo)

    def capture_argv(self, command: str, args: Sequence[str] = ()) -> str:
        """Run ``command`` and return its stdout without echoing it."""
        chunks: list[str] = []
        self.run_argv(command, args, stdout_sink=chunks.append, echo=False)
        return "".join(chunks)

    def capture_shell(self, script: str) -> str:
        chunks: list[str] = []
        self.run_shell(script, stdout_sink=chunks.append, echo=False)
        return "".join(chunks)

    def spawn_detached(self, command: str, args: Sequence[str] = ()) -> subprocess.Popen | None:
        """Start a background process in its own session and return at once.

        The child's stdio goes to /dev/null and it is never waited on; it
        outlives this process and is reclaimed with the CI job.

        Args:
            command: Executable name, resolved on PATH.
            args: Argument vector.

        Returns:
            The process handle, or None if it could not be started.
        """
        argv = [command, *(str(arg) for arg in args)]
        logger.info("[exec] Spawning: %s", shlex.join(argv))
        try:
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("Failed to start %s: %s", command, exc)
            return None
        _detached.append(proc)
        return proc
