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

"""Constants for cluster identifiers, CLI names, ports and defaults."""

from __future__ import annotations

# -- Derived identifiers --
CLUSTER_NAME = "solo-e2e"
NAMESPACE = "solo"
DEPLOYMENT = "solo-deployment"
NODE_ID = "node1"
CLUSTER_REF_PREFIX = "kind-"
NUM_CONSENSUS_NODES = 1

# -- CLIs --
KIND = "kind"
SOLO = "solo"
KUBECTL = "kubectl"
BASH = "bash"
REQUIRED_COMMANDS = (KIND, SOLO, KUBECTL, BASH)

# -- Persisted state --
STATE_CLUSTER_NAME = "clusterName"

# -- Services --
SVC_HAPROXY = "haproxy-node1-svc"
SVC_MIRROR_REST = "mirror-rest"
SVC_MIRROR_GRPC = "mirror-grpc"
SVC_MIRROR_WEB3 = "mirror-web3"
SVC_RELAY = "relay-node1-hedera-json-rpc-relay"

# -- Ports (container side, and fixed host side) --
HAPROXY_PORT = 50211
MIRROR_REST_CONTAINER_PORT = 80
MIRROR_GRPC_CONTAINER_PORT = 5600
MIRROR_WEB3_CONTAINER_PORT = 80
RELAY_CONTAINER_PORT = 7546

# -- Input defaults --
DEFAULT_MIRROR_NODE_VERSION = "v0.133.0"
DEFAULT_MIRROR_NODE_PORT_REST = 5551
DEFAULT_MIRROR_NODE_PORT_GRPC = 5600
DEFAULT_MIRROR_NODE_PORT_WEB3_REST = 8545
DEFAULT_RELAY_PORT = 7546
DEFAULT_HBAR_AMOUNT = 10_000_000

# -- Accounts --
KEY_TYPE_ECDSA = "ecdsa"
KEY_TYPE_ED25519 = "ed25519"
ACCOUNT_OUTPUT_FILE_TEMPLATE = "account_create_output_{key_type}.txt"
ACCOUNT_SECRET_PREFIX = "account-key-"
ACCOUNT_JSON_KEYS = ("accountId", "publicKey", "balance")

# -- Runner --
STDERR_TAIL_LINES = 20
EXIT_CODE_NOT_FOUND = 127

# -- Port readiness --
PORT_READY_MAX_RETRIES = 30
PORT_READY_POLL_INTERVAL_SECONDS = 1
PORT_CONNECT_TIMEOUT_SECONDS = 1.0
