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

"""Provision and teardown entry points built on the stage table."""

from __future__ import annotations

from pathlib import Path

from rich.panel import Panel

from solo_action import actions, console
from solo_action.config import ActionInputs, NetworkContext
from solo_action.constants import (
    HAPROXY_PORT,
    KEY_TYPE_ECDSA,
    KEY_TYPE_ED25519,
    KIND,
    KUBECTL,
    MIRROR_GRPC_CONTAINER_PORT,
    MIRROR_REST_CONTAINER_PORT,
    MIRROR_WEB3_CONTAINER_PORT,
    NUM_CONSENSUS_NODES,
    RELAY_CONTAINER_PORT,
    REQUIRED_COMMANDS,
    SOLO,
    STATE_CLUSTER_NAME,
    SVC_HAPROXY,
    SVC_MIRROR_GRPC,
    SVC_MIRROR_REST,
    SVC_MIRROR_WEB3,
    SVC_RELAY,
)
from solo_action.errors import CommandFailed, StateMissing
from solo_action.pipeline import Command, CreateAccount, PortForward, Stage, StageKind, StepSequencer
from solo_action.runner import CommandRunner

FATAL = StageKind.FATAL
BEST_EFFORT = StageKind.BEST_EFFORT


# ============================================================================
# Stage tables
# ============================================================================

def _solo(*args: str) -> Command:
    return Command(SOLO, args)


def network_stages(inputs: ActionInputs, ctx: NetworkContext) -> list[Stage]:
    """Stages that bring up the cluster and a single consensus node."""
    dep = ("--deployment", ctx.deployment)
    node = ("-i", ctx.node_id)
    return [
        Stage("Creating kind cluster", FATAL, (Command(KIND, ("create", "cluster", "-n", ctx.cluster_name)),)),
        Stage("Initializing Solo", FATAL, (_solo("init"),)),
        Stage("Connecting cluster reference", FATAL, (
            _solo("cluster-ref", "connect", "--cluster-ref", ctx.cluster_ref, "--context", ctx.cluster_ref),)),
        Stage("Creating deployment", FATAL, (
            _solo("deployment", "create", "-n", ctx.namespace, *dep),)),
        Stage("Adding cluster to deployment", FATAL, (
            _solo("deployment", "add-cluster", *dep, "--cluster-ref", ctx.cluster_ref,
                  "--num-consensus-nodes", str(NUM_CONSENSUS_NODES)),)),
        Stage("Generating node keys", FATAL, (
            _solo("node", "keys", "--gossip-keys", "--tls-keys", *node, *dep),)),
        Stage("Setting up cluster", FATAL, (_solo("cluster-ref", "setup", "-s", ctx.cluster_name),)),
        Stage("Deploying network", FATAL, (_solo("network", "deploy", *node, *dep),)),
        Stage("Setting up node", FATAL, (
            _solo("node", "setup", *node, *dep, "-t", inputs.hiero_version, "--quiet-mode"),)),
        Stage("Starting node", FATAL, (_solo("node", "start", *node, *dep),)),
        Stage("Listing services", BEST_EFFORT, (Command(KUBECTL, ("get", "svc", "-n", ctx.namespace)),)),
        Stage("Forwarding HAProxy", BEST_EFFORT, (
            PortForward(SVC_HAPROXY, f"{HAPROXY_PORT}:{HAPROXY_PORT}"),)),
    ]


def mirror_node_stages(inputs: ActionInputs, ctx: NetworkContext) -> list[Stage]:
    if not inputs.install_mirror_node:
        return []
    return [
        Stage("Deploying mirror node", FATAL, (
            _solo("mirror-node", "deploy", "--deployment", ctx.deployment,
                  "--mirror-node-version", inputs.mirror_node_version),)),
        Stage("Forwarding mirror node", BEST_EFFORT, (
            PortForward(SVC_MIRROR_REST, f"{inputs.mirror_node_port_rest}:{MIRROR_REST_CONTAINER_PORT}"),
            PortForward(SVC_MIRROR_GRPC, f"{inputs.mirror_node_port_grpc}:{MIRROR_GRPC_CONTAINER_PORT}"),
            PortForward(SVC_MIRROR_WEB3, f"{inputs.mirror_node_port_web3_rest}:{MIRROR_WEB3_CONTAINER_PORT}"),
        )),
    ]


def relay_stages(inputs: ActionInputs, ctx: NetworkContext) -> list[Stage]:
    if not inputs.install_relay:
        return []
    # Relay failures are reported as warnings; the ledger stays up.
    return [
        Stage("Deploying relay", BEST_EFFORT, (
            _solo("relay", "deploy", "-i", ctx.node_id, "--deployment", ctx.deployment),
            PortForward(SVC_RELAY, f"{inputs.relay_port}:{RELAY_CONTAINER_PORT}"),
        )),
    ]


def account_stages(inputs: ActionInputs) -> list[Stage]:
    # ED25519 goes last: it owns the unprefixed legacy outputs.
    return [
        Stage("Creating ECDSA account", FATAL, (CreateAccount(KEY_TYPE_ECDSA, inputs.hbar_amount),)),
        Stage("Creating ED25519 account", FATAL, (CreateAccount(KEY_TYPE_ED25519, inputs.hbar_amount),)),
    ]


def build_stages(inputs: ActionInputs, ctx: NetworkContext) -> list[Stage]:
    """Assemble the full provisioning stage table for ``inputs``.

    Args:
        inputs: Resolved action inputs.
        ctx: Network identifiers.

    Returns:
        Ordered stage table.
    """
    return [
        *network_stages(inputs, ctx),
        *mirror_node_stages(inputs, ctx),
        *relay_stages(inputs, ctx),
        *account_stages(inputs),
    ]


# ============================================================================
# Entry points
# ============================================================================

def _check_prerequisites(runner: CommandRunner) -> None:
    console.print(Panel.fit("Checking prerequisites", style="bold blue"))
    for cmd in REQUIRED_COMMANDS:
        runner.require(cmd)
    console.print("[green]\u2705 All required tools are available[/green]")


def wants_network(hiero_version: str) -> bool:
    """Return False, logging the skip, when no consensus node version is set."""
    if hiero_version:
        return True
    actions.info("No hieroVersion provided, skipping deployment")
    return False


def provision(
    inputs: ActionInputs,
    runner: CommandRunner | None = None,
    ctx: NetworkContext | None = None,
    workdir: Path | None = None,
) -> bool:
    """Provision the test network and publish account credentials.

    Args:
        inputs: Resolved action inputs.
        runner: Process runner, a fresh :class:`CommandRunner` by default.
        ctx: Network identifiers, the fixed defaults by default.
        workdir: Directory for account CLI output files.

    Returns:
        False if provisioning was skipped because no version was given.

    Raises:
        SoloActionError: If a fatal stage fails.
    """
    if not wants_network(inputs.hiero_version):
        return False

    runner = runner or CommandRunner()
    ctx = ctx or NetworkContext()

    actions.save_state(STATE_CLUSTER_NAME, ctx.cluster_name)

    _check_prerequisites(runner)
    StepSequencer(runner, ctx, workdir=workdir).run(build_stages(inputs, ctx))
    console.print("[green]\u2705 Solo test network is ready[/green]")
    return True


def saved_cluster_name() -> str:
    """Return the cluster name persisted by :func:`provision`.

    Raises:
        StateMissing: If no cluster name was saved.
    """
    cluster_name = actions.get_state(STATE_CLUSTER_NAME)
    if not cluster_name:
        raise StateMissing("No cluster name found in state, skipping cleanup")
    return cluster_name


def teardown(runner: CommandRunner | None = None) -> bool:
    """Delete the cluster recorded by :func:`provision`.

    Never raises for CLI failures: a failed delete is reported as a warning,
    since the cluster may never have been created or may already be gone.

    Args:
        runner: Process runner, a fresh :class:`CommandRunner` by default.

    Returns:
        True if the cluster was deleted.
    """
    try:
        cluster_name = saved_cluster_name()
    except StateMissing as err:
        actions.info(str(err))
        return False

    runner = runner or CommandRunner()
    console.print(f"[yellow]\u2139\ufe0f  Deleting kind cluster '{cluster_name}'...[/yellow]")
    try:
        runner.run_argv(KIND, ["delete", "cluster", "--name", cluster_name])
    except CommandFailed as err:
        actions.warning(f"Cleanup failed: {err}")
        return False
    console.print(f"[green]\u2705 Cluster '{cluster_name}' deleted[/green]")
    return True
