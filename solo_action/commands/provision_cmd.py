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

"""Provision subcommand (the action's main entry point)."""

from __future__ import annotations

from pathlib import Path

import typer

from solo_action import actions
from solo_action.config import ActionInputs, NetworkContext, VersionInput, display_config
from solo_action.orchestrator import provision as run_provision
from solo_action.orchestrator import wants_network


def provision(
    hiero_version: str | None = typer.Option(
        None, "--hiero-version", help="Consensus node image tag (overrides INPUT_HIEROVERSION)"),
    mirror_node_version: str | None = typer.Option(
        None, "--mirror-node-version", help="Mirror node image tag"),
    install_mirror_node: bool | None = typer.Option(
        None, "--install-mirror-node/--no-install-mirror-node", help="Deploy the mirror node"),
    install_relay: bool | None = typer.Option(
        None, "--install-relay/--no-install-relay", help="Deploy the JSON-RPC relay"),
    mirror_node_port_rest: int | None = typer.Option(
        None, "--mirror-node-port-rest", help="Host port for the mirror node REST API"),
    mirror_node_port_grpc: int | None = typer.Option(
        None, "--mirror-node-port-grpc", help="Host port for the mirror node gRPC API"),
    mirror_node_port_web3_rest: int | None = typer.Option(
        None, "--mirror-node-port-web3-rest", help="Host port for the mirror node Web3 REST API"),
    relay_port: int | None = typer.Option(
        None, "--relay-port", help="Host port for the JSON-RPC relay"),
    hbar_amount: int | None = typer.Option(
        None, "--hbar-amount", help="Amount each account is funded with"),
    workdir: Path | None = typer.Option(
        None, "--workdir", help="Directory for account CLI output files"),
) -> None:
    """Create the kind cluster, deploy the ledger and create funded accounts.

    Inputs are read from INPUT_* environment variables; options override them.
    """
    overrides = {
        key: value
        for key, value in {
            "hiero_version": hiero_version,
            "mirror_node_version": mirror_node_version,
            "install_mirror_node": install_mirror_node,
            "install_relay": install_relay,
            "mirror_node_port_rest": mirror_node_port_rest,
            "mirror_node_port_grpc": mirror_node_port_grpc,
            "mirror_node_port_web3_rest": mirror_node_port_web3_rest,
            "relay_port": relay_port,
            "hbar_amount": hbar_amount,
        }.items()
        if value is not None
    }

    try:
        version = VersionInput().hiero_version if hiero_version is None else hiero_version.strip()
        if not wants_network(version):
            return
        inputs = ActionInputs()
        if overrides:
            inputs = inputs.model_copy(update=overrides)
        display_config(inputs, NetworkContext())
        run_provision(inputs, workdir=workdir)
    except Exception as e:
        actions.set_failed(str(e))
        raise typer.Exit(code=1)
