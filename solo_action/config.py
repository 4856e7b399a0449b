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

"""Action inputs, the network context record, and config display."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.panel import Panel

from solo_action import console
from solo_action.constants import (
    CLUSTER_NAME,
    CLUSTER_REF_PREFIX,
    DEFAULT_HBAR_AMOUNT,
    DEFAULT_MIRROR_NODE_PORT_GRPC,
    DEFAULT_MIRROR_NODE_PORT_REST,
    DEFAULT_MIRROR_NODE_PORT_WEB3_REST,
    DEFAULT_MIRROR_NODE_VERSION,
    DEFAULT_RELAY_PORT,
    DEPLOYMENT,
    NAMESPACE,
    NODE_ID,
)


def _input(name: str) -> AliasChoices:
    """Accept an input from its ``INPUT_<NAME>`` variable or its camelCase name.

    Args:
        name: Input name as declared by the action (e.g. ``hieroVersion``).

    Returns:
        Alias choices usable as a pydantic ``validation_alias``.
    """
    return AliasChoices(f"INPUT_{name.replace(' ', '_').upper()}", name)


# ============================================================================
# Configuration classes
# ============================================================================

class VersionInput(BaseSettings):
    """The consensus node version alone, read before any other input."""

    model_config = SettingsConfigDict(extra="ignore", env_ignore_empty=True, populate_by_name=True)

    hiero_version: str = Field(default="", validation_alias=_input("hieroVersion"))

    @field_validator("hiero_version", mode="before")
    @classmethod
    def _strip_version(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class ActionInputs(VersionInput):
    """Action inputs, auto-loaded from the runner's INPUT_* env vars.

    Attributes:
        hiero_version: Consensus node image tag; empty skips provisioning.
        mirror_node_version: Mirror node image tag.
        install_mirror_node: Whether to deploy the mirror node.
        install_relay: Whether to deploy the JSON-RPC relay.
        mirror_node_port_rest: Host port for the mirror node REST API.
        mirror_node_port_grpc: Host port for the mirror node gRPC API.
        mirror_node_port_web3_rest: Host port for the mirror node Web3 REST API.
        relay_port: Host port for the JSON-RPC relay.
        hbar_amount: Amount each created account is funded with.
    """

    mirror_node_version: str = Field(
        default=DEFAULT_MIRROR_NODE_VERSION, validation_alias=_input("mirrorNodeVersion"))
    install_mirror_node: bool = Field(default=False, validation_alias=_input("installMirrorNode"))
    install_relay: bool = Field(default=False, validation_alias=_input("installRelay"))
    mirror_node_port_rest: int = Field(
        default=DEFAULT_MIRROR_NODE_PORT_REST, ge=1, le=65535, validation_alias=_input("mirrorNodePortRest"))
    mirror_node_port_grpc: int = Field(
        default=DEFAULT_MIRROR_NODE_PORT_GRPC, ge=1, le=65535, validation_alias=_input("mirrorNodePortGrpc"))
    mirror_node_port_web3_rest: int = Field(
        default=DEFAULT_MIRROR_NODE_PORT_WEB3_REST, ge=1, le=65535,
        validation_alias=_input("mirrorNodePortWeb3Rest"))
    relay_port: int = Field(default=DEFAULT_RELAY_PORT, ge=1, le=65535, validation_alias=_input("relayPort"))
    hbar_amount: int = Field(default=DEFAULT_HBAR_AMOUNT, ge=0, validation_alias=_input("hbarAmount"))

    @field_validator("install_mirror_node", "install_relay", mode="before")
    @classmethod
    def _literal_true(cls, value: Any) -> bool:
        # Only the exact string "true" enables an optional component.
        return value is True or value == "true"

    @field_validator("mirror_node_version", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


@dataclass(frozen=True)
class NetworkContext:
    """Fixed identifiers of the provisioned network.

    Attributes:
        cluster_name: Name of the kind cluster.
        namespace: Kubernetes namespace the ledger is deployed into.
        deployment: Solo deployment name.
        node_id: Consensus node alias.
    """

    cluster_name: str = CLUSTER_NAME
    namespace: str = NAMESPACE
    deployment: str = DEPLOYMENT
    node_id: str = NODE_ID

    @property
    def cluster_ref(self) -> str:
        return f"{CLUSTER_REF_PREFIX}{self.cluster_name}"


# ============================================================================
# Display
# ============================================================================

def display_config(inputs: ActionInputs, ctx: NetworkContext) -> None:
    """Print only config relevant to the requested components.

    Args:
        inputs: Resolved action inputs.
        ctx: Network identifiers.
    """
    console.print(Panel.fit("Configuration", style="bold blue"))

    console.print("[yellow]Network:[/yellow]")
    console.print(f"  cluster_name    : {ctx.cluster_name}")
    console.print(f"  cluster_ref     : {ctx.cluster_ref}")
    console.print(f"  namespace       : {ctx.namespace}")
    console.print(f"  deployment      : {ctx.deployment}")
    console.print(f"  hiero_version   : {inputs.hiero_version or '(none)'}")
    console.print(f"  hbar_amount     : {inputs.hbar_amount}")

    if inputs.install_mirror_node:
        console.print("[yellow]Mirror node:[/yellow]")
        console.print(f"  version         : {inputs.mirror_node_version}")
        console.print(f"  port_rest       : {inputs.mirror_node_port_rest}")
        console.print(f"  port_grpc       : {inputs.mirror_node_port_grpc}")
        console.print(f"  port_web3_rest  : {inputs.mirror_node_port_web3_rest}")

    if inputs.install_relay:
        console.print("[yellow]Relay:[/yellow]")
        console.print(f"  port            : {inputs.relay_port}")
