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

"""Detached ``kubectl port-forward`` processes for in-cluster services."""

from __future__ import annotations

from solo_action import actions, console, logger
from solo_action.constants import KUBECTL
from solo_action.errors import CommandFailed, ServiceAbsent
from solo_action.runner import CommandRunner


def _probe_service(runner: CommandRunner, service: str, namespace: str) -> None:
    """Check that ``service`` exists in ``namespace``.

    Raises:
        ServiceAbsent: If ``kubectl get svc`` fails for any reason.
    """
    try:
        runner.run_argv(KUBECTL, ["get", "svc", service, "-n", namespace])
    except CommandFailed as err:
        raise ServiceAbsent(service, namespace) from err


def port_forward_if_exists(runner: CommandRunner, service: str, port_spec: str, namespace: str) -> bool:
    """Forward ``port_spec`` to ``svc/<service>`` if the service exists.

    Never raises: either one detached port-forward is started or an
    informational skip is logged. Readiness of the local port is not
    checked here, and repeated calls with the same ``port_spec`` are not
    deduplicated.

    Args:
        runner: Process runner.
        service: Kubernetes service name.
        port_spec: ``<host>:<container>`` port mapping.
        namespace: Namespace of the service.

    Returns:
        True if a port-forward process was started.
    """
    try:
        _probe_service(runner, service, namespace)
    except ServiceAbsent:
        actions.info(f"Service {service} not found, skipping port-forward")
        return False
    except Exception as exc:
        logger.warning("Probe of service %s failed: %s", service, exc)
        actions.info(f"Service {service} not found, skipping port-forward")
        return False

    proc = runner.spawn_detached(KUBECTL, ["port-forward", f"svc/{service}", "-n", namespace, port_spec])
    if proc is None:
        actions.info(f"Port-forward for {service} on {port_spec} could not be started")
        return False
    console.print(f"[green]\u2705 Port-forward started for {service} on {port_spec}[/green]")
    return True
