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

"""
cli.py - Entry points of the Solo test network action.

Subcommands:
    provision     Create the cluster, deploy the ledger, create accounts (main)
    teardown      Delete the cluster recorded by provision (post)
    verify-ports  Wait until forwarded host ports accept connections

Examples:
    # Provision with inputs given as options instead of INPUT_* variables
    solo-action provision --hiero-version v0.58.10 --install-mirror-node

    # Post step
    solo-action teardown
"""

from __future__ import annotations

import logging
import sys

import typer

from solo_action import console
from solo_action.commands import provision_cmd, teardown_cmd, verify_cmd

app = typer.Typer(
    help="Ephemeral Solo ledger network for CI jobs.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.command("provision")(provision_cmd.provision)
app.command("teardown")(teardown_cmd.teardown)
app.command("verify-ports")(verify_cmd.verify)


def main() -> None:
    try:
        app()
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
