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

"""Stage table types and the sequencer that executes them in order.

A pipeline is a list of :class:`Stage` entries. Each stage is ``FATAL``
(the first failing action aborts the whole pipeline) or ``BEST_EFFORT``
(the first failing action is reported as a warning, the rest of that stage
is skipped and the pipeline moves on). :class:`PortForward` actions are
skip-if-absent and never fail.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rich.panel import Panel

from solo_action import actions, console, logger
from solo_action.accounts import create_account
from solo_action.config import NetworkContext
from solo_action.errors import SoloActionError
from solo_action.portforward import port_forward_if_exists
from solo_action.runner import CommandRunner


class StageKind(str, Enum):
    FATAL = "fatal"
    BEST_EFFORT = "best-effort"


@dataclass(frozen=True)
class Command:
    """An argv-mode CLI invocation."""

    command: str
    args: tuple[str, ...] = ()

    def __str__(self) -> str:
        return shlex.join([self.command, *self.args])


@dataclass(frozen=True)
class PortForward:
    """Probe a service and, if present, forward ``port_spec`` to it."""

    service: str
    port_spec: str


@dataclass(frozen=True)
class CreateAccount:
    """Create a funded account and publish its credentials."""

    key_type: str
    hbar_amount: int


Action = Command | PortForward | CreateAccount


@dataclass(frozen=True)
class Stage:
    """A named group of actions sharing one failure policy.

    Attributes:
        name: Human readable stage title.
        kind: Failure policy for the stage.
        actions: Actions executed in order.
    """

    name: str
    kind: StageKind
    actions: tuple[Action, ...]


class StepSequencer:
    """Executes stages strictly one action at a time."""

    def __init__(self, runner: CommandRunner, ctx: NetworkContext, workdir: Path | None = None) -> None:
        self.runner = runner
        self.ctx = ctx
        self.workdir = workdir

    def run(self, stages: Sequence[Stage]) -> None:
        """Run all stages in order.

        Args:
            stages: Stage table to execute.

        Raises:
            SoloActionError: The first failure of a FATAL stage.
        """
        for stage in stages:
            self.run_stage(stage)

    def run_stage(self, stage: Stage) -> bool:
        """Run one stage, applying its failure policy.

        Returns:
            True if every action succeeded, False if a best-effort stage failed.
        """
        console.print(Panel.fit(stage.name, style="bold blue"))
        try:
            for action in stage.actions:
                self.execute(action)
        except SoloActionError as err:
            if stage.kind is StageKind.FATAL:
                logger.error("Stage '%s' failed", stage.name)
                raise
            actions.warning(f"{stage.name} failed, continuing: {err}")
            return False
        return True

    def execute(self, action: Action) -> None:
        if isinstance(action, Command):
            self.runner.run_argv(action.command, action.args)
        elif isinstance(action, PortForward):
            port_forward_if_exists(self.runner, action.service, action.port_spec, self.ctx.namespace)
        elif isinstance(action, CreateAccount):
            create_account(self.runner, self.ctx, action.key_type, action.hbar_amount, workdir=self.workdir)
        else:
            raise TypeError(f"Unsupported action {action!r}")
