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

"""Host-side readiness checks for forwarded ports."""

from __future__ import annotations

import socket
from tenacity import RetryError, retry, retry_if_result, stop_after_attempt, wait_fixed

from solo_action import console
from solo_action.config import ActionInputs
from solo_action.constants import (
    HAPROXY_PORT,
    PORT_CONNECT_TIMEOUT_SECONDS,
    PORT_READY_MAX_RETRIES,
    PORT_READY_POLL_INTERVAL_SECONDS,
)


def expected_ports(inputs: ActionInputs) -> dict[str, int]:
    """Map service labels to the host ports ``provision`` forwards for ``inputs``."""
    ports = {"HAProxy": HAPROXY_PORT}
    if inputs.install_mirror_node:
        ports["Mirror Node REST"] = inputs.mirror_node_port_rest
        ports["Mirror Node gRPC"] = inputs.mirror_node_port_grpc
        ports["Mirror Node Web3 REST"] = inputs.mirror_node_port_web3_rest
    if inputs.install_relay:
        ports["JSON-RPC Relay"] = inputs.relay_port
    return ports


def is_listening(port: int, host: str = "127.0.0.1") -> bool:
    try:
        with socket.create_connection((host, port), timeout=PORT_CONNECT_TIMEOUT_SECONDS):
            return True
    except OSError:
        return False


def wait_for_port(
    port: int,
    host: str = "127.0.0.1",
    attempts: int = PORT_READY_MAX_RETRIES,
    interval: float = PORT_READY_POLL_INTERVAL_SECONDS,
) -> bool:
    """Poll until ``host:port`` accepts TCP connections.

    Args:
        port: Host port to check.
        host: Address to connect to.
        attempts: Maximum number of connection attempts.
        interval: Seconds between attempts.

    Returns:
        True if the port became reachable within the attempts.
    """

    @retry(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(interval),
        retry=retry_if_result(lambda ok: not ok),
    )
    def _attempt() -> bool:
        return is_listening(port, host)

    try:
        return _attempt()
    except RetryError:
        return False


def verify_ports(ports: dict[str, int], attempts: int = PORT_READY_MAX_RETRIES) -> list[str]:
    """Wait for each forwarded port and report the ones that never opened.

    Args:
        ports: Mapping of service labels to host ports.
        attempts: Maximum number of connection attempts per port.

    Returns:
        Labels of services whose ports did not become reachable.
    """
    failed: list[str] = []
    for label, port in ports.items():
        console.print(f"[yellow]\u2139\ufe0f  Checking {label} on port {port}...[/yellow]")
        if wait_for_port(port, attempts=attempts):
            console.print(f"[green]\u2705 {label} is listening on port {port}[/green]")
        else:
            console.print(f"[red]\u2717 {label} is not listening on port {port}[/red]")
            failed.append(label)
    return failed
