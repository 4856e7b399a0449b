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

import pytest
from pydantic import ValidationError

from solo_action.config import ActionInputs, NetworkContext, VersionInput


def test_defaults(github):
    inputs = ActionInputs()

    assert inputs.hiero_version == ""
    assert inputs.install_mirror_node is False
    assert inputs.install_relay is False
    assert inputs.mirror_node_port_rest == 5551
    assert inputs.mirror_node_port_grpc == 5600
    assert inputs.mirror_node_port_web3_rest == 8545
    assert inputs.relay_port == 7546
    assert inputs.hbar_amount == 10000000


def test_inputs_are_read_from_runner_env(github, monkeypatch):
    monkeypatch.setenv("INPUT_HIEROVERSION", " v0.58.10 ")
    monkeypatch.setenv("INPUT_MIRRORNODEVERSION", "v0.133.0")
    monkeypatch.setenv("INPUT_INSTALLMIRRORNODE", "true")
    monkeypatch.setenv("INPUT_MIRRORNODEPORTREST", "6551")
    monkeypatch.setenv("INPUT_RELAYPORT", "17546")
    monkeypatch.setenv("INPUT_HBARAMOUNT", "42")

    inputs = ActionInputs()

    assert inputs.hiero_version == "v0.58.10"
    assert inputs.mirror_node_version == "v0.133.0"
    assert inputs.install_mirror_node is True
    assert inputs.mirror_node_port_rest == 6551
    assert inputs.relay_port == 17546
    assert inputs.hbar_amount == 42


@pytest.mark.parametrize("raw", ["True", "TRUE", "1", "yes", "false", ""])
def test_only_literal_true_enables_components(github, monkeypatch, raw):
    monkeypatch.setenv("INPUT_INSTALLRELAY", raw)

    assert ActionInputs().install_relay is False


def test_empty_port_falls_back_to_default(github, monkeypatch):
    monkeypatch.setenv("INPUT_MIRRORNODEPORTGRPC", "")

    assert ActionInputs().mirror_node_port_grpc == 5600


def test_invalid_port_is_rejected(github, monkeypatch):
    monkeypatch.setenv("INPUT_RELAYPORT", "70000")

    with pytest.raises(ValidationError):
        ActionInputs()


def test_network_context_identifiers():
    ctx = NetworkContext()

    assert ctx.cluster_name == "solo-e2e"
    assert ctx.namespace == "solo"
    assert ctx.deployment == "solo-deployment"
    assert ctx.node_id == "node1"
    assert ctx.cluster_ref == "kind-solo-e2e"
    assert NetworkContext(cluster_name="other").cluster_ref == "kind-other"


def test_version_input_ignores_other_inputs(github, monkeypatch):
    monkeypatch.setenv("INPUT_HIEROVERSION", " v0.58.10 ")
    monkeypatch.setenv("INPUT_RELAYPORT", "not-a-port")

    assert VersionInput().hiero_version == "v0.58.10"
