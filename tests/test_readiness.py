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

import socket

from solo_action.config import ActionInputs
from solo_action.readiness import expected_ports, is_listening, verify_ports, wait_for_port


def _free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_expected_ports_follow_inputs(github):
    assert expected_ports(ActionInputs()) == {"HAProxy": 50211}

    ports = expected_ports(ActionInputs(install_mirror_node=True, install_relay=True))
    assert ports == {
        "HAProxy": 50211,
        "Mirror Node REST": 5551,
        "Mirror Node gRPC": 5600,
        "Mirror Node Web3 REST": 8545,
        "JSON-RPC Relay": 7546,
    }


def test_listening_port_is_ready():
    with socket.socket() as server:
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        port = server.getsockname()[1]

        assert is_listening(port) is True
        assert wait_for_port(port, attempts=1, interval=0) is True


def test_closed_port_times_out():
    port = _free_port()

    assert wait_for_port(port, attempts=2, interval=0) is False


def test_verify_ports_reports_failures():
    with socket.socket() as server:
        server.bind(("127.0.0.1", 0))
        server.listen(1)
        open_port = server.getsockname()[1]
        closed_port = _free_port()

        failed = verify_ports({"open": open_port, "closed": closed_port}, attempts=1)

    assert failed == ["closed"]
