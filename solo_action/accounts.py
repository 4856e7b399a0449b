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

"""Account JSON extraction and the account creation workflow."""

from __future__ import annotations

import json
import re
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.panel import Panel

from solo_action import actions, console, logger
from solo_action.config import NetworkContext
from solo_action.constants import (
    ACCOUNT_JSON_KEYS,
    ACCOUNT_OUTPUT_FILE_TEMPLATE,
    ACCOUNT_SECRET_PREFIX,
    KEY_TYPE_ECDSA,
    KEY_TYPE_ED25519,
    SOLO,
)
from solo_action.errors import IncompleteAccount, NoAccountJson
from solo_action.runner import CommandRunner

ACCOUNT_JSON_RE = re.compile(
    r'\{\s*"accountId"\s*:\s*"[^"]*"\s*,\s*"publicKey"\s*:\s*"[^"]*"\s*,\s*"balance"\s*:\s*\d+\s*\}',
    re.DOTALL,
)

_DECODER = json.JSONDecoder()


# ============================================================================
# Parsing
# ============================================================================

def _is_account_object(obj: Any) -> bool:
    if not isinstance(obj, dict) or tuple(obj) != ACCOUNT_JSON_KEYS:
        return False
    balance = obj["balance"]
    return (
        isinstance(obj["accountId"], str)
        and isinstance(obj["publicKey"], str)
        and isinstance(balance, int)
        and not isinstance(balance, bool)
        and balance >= 0
    )


def _scan_account_json(text: str) -> str | None:
    """Return the first ``{...}`` span that decodes to an account object."""
    start = text.find("{")
    while start != -1:
        try:
            obj, end = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            obj, end = None, start
        if _is_account_object(obj):
            return text[start:end]
        start = text.find("{", start + 1)
    return None


def extract_account_json(text: str) -> str:
    """Extract the account JSON object printed by ``solo account create``.

    The CLI prints progress chatter around a single object whose keys are
    ``accountId``, ``publicKey`` and ``balance`` in that order. Candidate
    spans are decoded in place; the regex is a fallback for output that is
    not strictly valid JSON around the match.

    Args:
        text: Raw CLI output.

    Returns:
        The matched JSON text, verbatim.

    Raises:
        NoAccountJson: If no account object is present.
    """
    found = _scan_account_json(text)
    if found is not None:
        return found
    match = ACCOUNT_JSON_RE.search(text)
    if match:
        return match.group(0)
    raise NoAccountJson("No JSON block found in output")


@dataclass(frozen=True)
class AccountRecord:
    """Account as reported by the ledger CLI.

    Attributes:
        account_id: Ledger account id (e.g. ``0.0.1027``).
        public_key: DER-encoded public key, hex.
        balance: Balance in tinybars.
    """

    account_id: str
    public_key: str
    balance: int = 0

    @classmethod
    def from_json(cls, text: str) -> AccountRecord:
        data = json.loads(text)
        return cls(
            account_id=data.get("accountId") or "",
            public_key=data.get("publicKey") or "",
            balance=int(data.get("balance") or 0),
        )

    def require_complete(self) -> None:
        if not self.account_id or not self.public_key:
            raise IncompleteAccount(
                f"Account record is missing accountId or publicKey (accountId={self.account_id!r})"
            )


def parse_account_output(text: str) -> AccountRecord:
    """Extract and decode the account record from CLI output.

    Raises:
        NoAccountJson: If no account object is present.
        json.JSONDecodeError: If the matched text is not valid JSON.
    """
    return AccountRecord.from_json(extract_account_json(text))


# ============================================================================
# Account creation
# ============================================================================

def _output_names(key_type: str) -> list[tuple[str, str, str]]:
    """Return (account id, public key, private key) output name triples."""
    names = [(f"{key_type}AccountId", f"{key_type}PublicKey", f"{key_type}PrivateKey")]
    if key_type == KEY_TYPE_ED25519:
        names.append(("accountId", "publicKey", "privateKey"))
    return names


def private_key_script(account_id: str, namespace: str) -> str:
    return (
        f"kubectl get secret {ACCOUNT_SECRET_PREFIX}{account_id} -n {namespace} "
        f"-o jsonpath='{{.data.privateKey}}' | base64 -d | xargs"
    )


def create_account(
    runner: CommandRunner,
    ctx: NetworkContext,
    key_type: str,
    hbar_amount: int,
    workdir: Path | None = None,
) -> AccountRecord | None:
    """Create a funded account and publish its credentials as outputs.

    ECDSA accounts set ``ecdsa*`` outputs; ED25519 accounts set the
    ``ed25519*`` outputs and the unprefixed legacy aliases.

    Args:
        runner: Process runner.
        ctx: Network identifiers.
        key_type: ``ecdsa`` or ``ed25519``.
        hbar_amount: Amount passed to ``solo account update``.
        workdir: Directory for the CLI output file, the current directory by default.

    Returns:
        The created account, or None if the CLI reported an incomplete record.

    Raises:
        CommandFailed: If any CLI invocation fails.
        NoAccountJson: If the CLI output carries no account object.
        ValueError: If ``key_type`` is unknown.
    """
    if key_type not in (KEY_TYPE_ECDSA, KEY_TYPE_ED25519):
        raise ValueError(f"Unknown key type '{key_type}'")

    console.print(Panel.fit(f"Creating {key_type.upper()} account", style="bold blue"))
    output_file = ACCOUNT_OUTPUT_FILE_TEMPLATE.format(key_type=key_type)
    output_path = Path(output_file) if workdir is None else workdir / output_file

    generate_flag = "--generate-ecdsa-key" if key_type == KEY_TYPE_ECDSA else ""
    target = shlex.quote(str(output_path))
    runner.run_shell(f'{SOLO} account create {generate_flag} --deployment "{ctx.deployment}" > {target}')

    record = parse_account_output(output_path.read_text(encoding="utf-8"))
    try:
        record.require_complete()
    except IncompleteAccount as err:
        actions.info(f"Skipping {key_type} account outputs: {err}")
        return None
    logger.info("Created %s account %s", key_type, record.account_id)

    private_key = runner.capture_shell(private_key_script(record.account_id, ctx.namespace)).rstrip()

    runner.run_argv(SOLO, [
        "account", "update",
        "--account-id", record.account_id,
        "--hbar-amount", str(hbar_amount),
        "--deployment", ctx.deployment,
    ])

    actions.set_secret(private_key)
    for id_name, public_name, private_name in _output_names(key_type):
        actions.set_output(id_name, record.account_id)
        actions.set_output(public_name, record.public_key)
        actions.set_output(private_name, private_key)
    console.print(f"[green]\u2705 {key_type.upper()} account {record.account_id} ready[/green]")
    return record
