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

from solo_action import actions


def test_set_output_appends_delimited_entries(github):
    actions.set_output("accountId", "0.0.1002")
    actions.set_output("multi", "line one\nline two")

    raw = github.output_path.read_text(encoding="utf-8")
    assert raw.startswith("accountId<<ghadelimiter_")
    assert github.outputs() == {"accountId": "0.0.1002", "multi": "line one\nline two"}


def test_set_output_without_file_only_logs(github, monkeypatch, capsys, caplog):
    monkeypatch.delenv("GITHUB_OUTPUT")

    actions.set_output("privateKey", "s3cret")

    out = capsys.readouterr().out
    assert "set-output" not in out
    assert "s3cret" not in out + caplog.text
    assert "output privateKey was not recorded" in caplog.text


def test_save_state_without_file_only_logs(github, monkeypatch, capsys, caplog):
    monkeypatch.delenv("GITHUB_STATE")

    actions.save_state("clusterName", "solo-e2e")

    assert "save-state" not in capsys.readouterr().out
    assert "state clusterName was not recorded" in caplog.text


def test_state_round_trip_through_state_file(github):
    actions.save_state("clusterName", "solo-e2e")

    assert github.state() == {"clusterName": "solo-e2e"}
    assert actions.get_state("clusterName") == "solo-e2e"


def test_state_env_var_takes_precedence(github, monkeypatch):
    actions.save_state("clusterName", "from-file")
    monkeypatch.setenv("STATE_clusterName", "from-env")

    assert actions.get_state("clusterName") == "from-env"


def test_missing_state_is_empty(github, monkeypatch):
    assert actions.get_state("clusterName") == ""
    monkeypatch.delenv("GITHUB_STATE")
    assert actions.get_state("clusterName") == ""


def test_parse_file_commands_accepts_single_line_entries():
    text = "clusterName=solo-e2e\nkey<<EOF\nvalue=with<<marks\nEOF\n"

    assert actions.parse_file_commands(text) == {"clusterName": "solo-e2e", "key": "value=with<<marks"}


def test_warning_escapes_newlines(capsys):
    actions.warning("first line\nsecond 100%")

    assert capsys.readouterr().out == "::warning::first line%0Asecond 100%25\n"


def test_set_failed_emits_error_command(capsys):
    actions.set_failed("Command failed with exit code 1: solo init")

    captured = capsys.readouterr()
    assert "::error::Command failed with exit code 1: solo init" in captured.out


def test_set_secret_skips_empty_values(capsys):
    actions.set_secret("")
    actions.set_secret("s3cret")

    assert capsys.readouterr().out == "::add-mask::s3cret\n"
