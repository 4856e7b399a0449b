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

"""verify-ports subcommand: wait for forwarded host ports to open."""

from __future__ import annotations

import typer

from solo_action import actions
from solo_action.config import ActionInputs
from solo_action.constants import PORT_READY_MAX_RETRIES
from solo_action.readiness import expected_ports, verify_ports


def verify(
    port: list[int] | None = typer.Option(
        None, "--port", help="Additional host port to check (repeatable)"),
    attempts: int = typer.Option(
        PORT_READY_MAX_RETRIES, "--attempts", min=1, help="Connection attempts per port"),
) -> None:
    """Check that every port forwarded by provision accepts connections."""
    ports = expected_ports(ActionInputs())
    for extra in port or []:
        ports[f"port {extra}"] = extra

    failed = verify_ports(ports, attempts=attempts)
    if failed:
        actions.set_failed(f"Ports not reachable: {', '.join(failed)}")
        raise typer.Exit(code=1)
