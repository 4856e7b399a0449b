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

"""CI platform adapter: workflow commands, outputs, and job state.

Outputs and state are appended to the files named by ``GITHUB_OUTPUT`` and
``GITHUB_STATE`` using the multi-line ``name<<delimiter`` syntax. The runner
exposes saved state to the post step as ``STATE_<name>`` variables; when
those are absent (local runs) the state file itself is read back.
"""

from __future__ import annotations

import os
import sys
import uuid
from pathlib import Path

from rich.markup import escape

from solo_action import console, logger


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str = "") -> None:
    """Write a ``::command::message`` workflow command to stdout.

    Args:
        command: Workflow command name (e.g. ``warning``).
        message: Command payload.
    """
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()


def _file_command_entry(name: str, value: str) -> str:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected delimiter collision for '{name}'")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def _append_file_command(env_var: str, name: str, value: str) -> bool:
    path = os.environ.get(env_var, "")
    if not path:
        return False
    with open(path, "a", encoding="utf-8") as f:
        f.write(_file_command_entry(name, value))
    return True


def parse_file_commands(text: str) -> dict[str, str]:
    """Parse the contents of a ``GITHUB_OUTPUT``/``GITHUB_STATE`` file.

    Both ``name<<delimiter`` blocks and single-line ``name=value`` entries are
    understood. Later entries override earlier ones.

    Args:
        text: File contents.

    Returns:
        Mapping of names to values.
    """
    values: dict[str, str] = {}
    lines = text.splitlines()
    i = 0
    while i < len(lines):
        line = lines[i]
        if "<<" in line and ("=" not in line or line.index("<<") < line.index("=")):
            name, delimiter = line.split("<<", 1)
            body: list[str] = []
            i += 1
            while i < len(lines) and lines[i] != delimiter:
                body.append(lines[i])
                i += 1
            values[name] = "\n".join(body)
        elif "=" in line:
            name, value = line.split("=", 1)
            values[name] = value
        i += 1
    return values


# ============================================================================
# Messages
# ============================================================================

def info(message: str) -> None:
    console.print(f"[yellow]\u2139\ufe0f  {escape(message)}[/yellow]")


def warning(message: str) -> None:
    issue_command("warning", message)


def error(message: str) -> None:
    issue_command("error", message)


def set_failed(message: str) -> None:
    """Mark the step failed; the caller is responsible for the exit code."""
    console.print(f"[red]\u274c {escape(message)}[/red]")
    error(message)


def set_secret(value: str) -> None:
    """Register a value to be masked in the job log."""
    if value:
        issue_command("add-mask", value)


# ============================================================================
# Outputs and state
# ============================================================================

def set_output(name: str, value: str) -> None:
    if not _append_file_command("GITHUB_OUTPUT", name, value):
        logger.warning("GITHUB_OUTPUT is not set, output %s was not recorded", name)
        return
    logger.info("Output %s set", name)


def save_state(name: str, value: str) -> None:
    if not _append_file_command("GITHUB_STATE", name, value):
        logger.warning("GITHUB_STATE is not set, state %s was not recorded", name)


def get_state(name: str) -> str:
    """Read a value saved by :func:`save_state` in an earlier entry point.

    Args:
        name: State name.

    Returns:
        The saved value, or an empty string if nothing was saved.
    """
    value = os.environ.get(f"STATE_{name}")
    if value is not None:
        return value
    path = os.environ.get("GITHUB_STATE", "")
    if path and Path(path).is_file():
        return parse_file_commands(Path(path).read_text(encoding="utf-8")).get(name, "")
    return ""
