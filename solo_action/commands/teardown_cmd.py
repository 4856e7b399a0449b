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

"""Teardown subcommand (the action's post entry point)."""

from __future__ import annotations

from solo_action import actions
from solo_action.orchestrator import teardown as run_teardown


def teardown() -> None:
    """Delete the kind cluster recorded by provision. Never fails the job."""
    try:
        run_teardown()
    except Exception as e:
        actions.warning(f"Cleanup failed: {e}")
