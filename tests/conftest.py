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

from __future__ import annotations

import os
import re
import shlex
from collections.abc import Iterable
from pathlib import Path

import pytest

from solo_action.actions import parse_file_commands
from solo_action.errors import CommandFailed
from solo_action.runner import CommandRunner

ECDSA_ACCOUNT = {"accountId": "0.0.1001", "publicKey": "3030ecdsa", "balance": 10000000}
ED25519_ACCOUNT = {"accountId": "0.0.1002", "publicKey": "302aed25519", "balance": 10000000}

ECDSA_PRIVATE_KEY = "3030ecdsaprivate"
ED25519_PRIVATE_KEY = "302eed25519private"


def account_output(account: dict) -> str:
    return (
        "✔ Initialize\n"
        "✔ create the new account\n"
        f'{{"accountId":"{account["accountId"]}","publicKey":"{account["publicKey"]}",'
        f'"balance":{account["balance"]}}}\n'
        "done\n"
    )


class RecordingRunner(CommandRunner):
    """Runner double that records invocations instead of executing them.

    Every invocation is appended to ``calls`` as one string: argv-mode
    commands joined by spaces, shell scripts verbatim, detached processes
    prefixed with ``spawn``. Any call starting with one of ``failures``
    raises :class:`CommandFailed`.
    """

    def __init__(
        self,
        failures: Iterable[str] = (),
        absent_services: Iterable[str] = (),
        account_outputs: dict[str, str] | None = None,
        private_keys: dict[str, str] | None = None,
    ) -> None:
        self.failures = tuple(failures)
        self.absent_services = set(absent_services)
        self.account_outputs = account_outputs if account_outputs is not None else {
            "ecdsa": account_output(ECDSA_ACCOUNT),
            "ed25519": account_output(ED25519_ACCOUNT),
        }
        self.private_keys = private_keys if private_keys is not None else {
            ECDSA_ACCOUNT["accountId"]: ECDSA_PRIVATE_KEY + "\n",
            ED25519_ACCOUNT["accountId"]: ED25519_PRIVATE_KEY + "\n",
        }
        self.calls: list[str] = []
        self.required: list[str] = []

    def _maybe_fail(self, command: str, args: list[str], line: str) -> None:
        if any(line.startswith(prefix) for prefix in self.failures):
            raise CommandFailed(command, args, 1, "simulated failure")

    def require(self, command: str) -> None:
        self.required.append(command)

    def run_argv(self, command, args=(), stdout_sink=None, echo=True) -> int:
        argv = [str(arg) for arg in args]
        line = " ".join([command, *argv])
        self.calls.append(line)
        self._maybe_fail(command, argv, line)
        if command == "kubectl" and argv[:2] == ["get", "svc"] and argv[2] != "-n":
            if argv[2] in self.absent_services:
                raise CommandFailed(command, argv, 1, f'services "{argv[2]}" not found')
        return 0

    def run_shell(self, script, stdout_sink=None, echo=True) -> int:
        self.calls.append(script)
        self._maybe_fail("bash", ["-c", script], script)
        if script.startswith("solo account create"):
            tokens = shlex.split(script)
            target = Path(tokens[tokens.index(">") + 1])
            key_type = "ecdsa" if "--generate-ecdsa-key" in script else "ed25519"
            target.write_text(self.account_outputs[key_type], encoding="utf-8")
        secret = re.search(r"get secret account-key-(\S+) ", script)
        if secret and stdout_sink is not None:
            stdout_sink(self.private_keys.get(secret.group(1), ""))
        return 0

    def spawn_detached(self, command, args=()):
        line = " ".join([command, *(str(arg) for arg in args)])
        self.calls.append(f"spawn {line}")
        return object()


class GitHubFiles:
    """Access to the temporary GITHUB_OUTPUT and GITHUB_STATE files."""

    def __init__(self, output: Path, state: Path) -> None:
        self.output_path = output
        self.state_path = state

    def outputs(self) -> dict[str, str]:
        return parse_file_commands(self.output_path.read_text(encoding="utf-8"))

    def state(self) -> dict[str, str]:
        return parse_file_commands(self.state_path.read_text(encoding="utf-8"))


@pytest.fixture
def github(tmp_path, monkeypatch) -> GitHubFiles:
    """Isolate the runner environment: file commands in tmp, cwd in tmp."""
    for name in list(os.environ):
        if name.startswith(("INPUT_", "STATE_")):
            monkeypatch.delenv(name, raising=False)
    output = tmp_path / "github_output"
    state = tmp_path / "github_state"
    output.touch()
    state.touch()
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    monkeypatch.setenv("GITHUB_STATE", str(state))
    monkeypatch.chdir(tmp_path)
    return GitHubFiles(output, state)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()
