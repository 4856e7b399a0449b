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

"""Error types raised by the runner, the account parser and the pipeline."""

from __future__ import annotations

from collections.abc import Sequence


class SoloActionError(RuntimeError):
    """Base class for all solo_action errors."""


class CommandFailed(SoloActionError):
    """An external CLI exited non-zero, died by signal, or was not found.

    Attributes:
        command: Executable name.
        argv: Argument vector passed to the executable.
        exit_code: Process exit code (negative for a signal).
        stderr_tail: Last lines the process wrote to stderr.
    """

    def __init__(self, command: str, args: Sequence[str], exit_code: int, stderr_tail: str = "") -> None:
        self.command = command
        self.argv = tuple(args)
        self.exit_code = exit_code
        self.stderr_tail = stderr_tail
        message = f"Command failed with exit code {exit_code}: {self.command_line}"
        if stderr_tail:
            message += f"\n{stderr_tail}"
        super().__init__(message)

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.argv])


class ServiceAbsent(SoloActionError):
    """A probed Kubernetes service does not exist (or cannot be seen)."""

    def __init__(self, service: str, namespace: str) -> None:
        self.service = service
        self.namespace = namespace
        super().__init__(f"Service {service} not found in namespace {namespace}")


class NoAccountJson(SoloActionError):
    """No account JSON object was found in the ledger CLI output."""


class IncompleteAccount(SoloActionError):
    """A parsed account record is missing its id or public key."""


class StateMissing(SoloActionError):
    """No cluster name was persisted by the provision step."""
