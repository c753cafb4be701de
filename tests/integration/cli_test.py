# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import os
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from commitwriter.cli import app
from commitwriter.constants import HOOK_DELIMITER, ExitCode
from commitwriter.core.exceptions import backend_unreachable

SUMMARY = "Add greeting\n\nPrint a greeting from app.py"
STYLED = "Title: Hark, a greeting\nBody: app.py now speaketh"

runner = CliRunner()


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run inside an empty directory with no config sources around."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("COMMIT_WRITER_") or key == "OLLAMA_URL":
            monkeypatch.delenv(key)
    monkeypatch.setattr(
        "commitwriter.commands.generate.GLOBAL_CONFIG_FILE", tmp_path / "global.toml"
    )
    return tmp_path


@pytest.fixture
def backend(monkeypatch):
    prober = Mock(return_value=None)
    generate = Mock(side_effect=[SUMMARY, STYLED])
    acquire_diff = Mock(return_value="diff --git a/app.py b/app.py\n+print('hi')\n")

    monkeypatch.setattr("commitwriter.pipelines.commit_init.probe_backend", prober)
    monkeypatch.setattr(
        "commitwriter.core.backend.client.BackendClient.generate",
        lambda self, request: generate(request),
    )
    monkeypatch.setattr(
        "commitwriter.core.git_interface.diff_source.DiffSource.acquire_diff",
        lambda self: acquire_diff(),
    )
    return prober, generate, acquire_diff


class TestBasicCLI:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "--load-summary" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "commit-writer version" in result.stdout


class TestGenerate:
    def test_prints_message(self, isolated, backend):
        result = runner.invoke(app, ["--tone", "pirate"])

        assert result.exit_code == 0
        assert STYLED in result.stdout

    def test_no_labels(self, isolated, backend):
        result = runner.invoke(app, ["--no-labels"])

        assert result.exit_code == 0
        assert "Hark, a greeting\napp.py now speaketh" in result.stdout

    def test_writes_hook_file(self, isolated, backend):
        hook = isolated / "COMMIT_EDITMSG"
        hook.write_text("# existing\n")

        result = runner.invoke(app, ["--hook", str(hook)])

        assert result.exit_code == 0
        assert hook.read_text() == f"# existing\n\n{HOOK_DELIMITER}\n{STYLED}\n"

    def test_force_overwrites_hook_file(self, isolated, backend):
        hook = isolated / "COMMIT_EDITMSG"
        hook.write_text("# existing\n")

        result = runner.invoke(app, ["--hook", str(hook), "--force"])

        assert result.exit_code == 0
        assert hook.read_text() == f"{STYLED}\n"

    def test_probe_failure_exit_code(self, isolated, backend):
        prober, generate, _ = backend
        prober.side_effect = backend_unreachable("http://localhost:11434/api/tags")

        result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.PROBE
        generate.assert_not_called()

    def test_load_summary_missing_exit_code(self, isolated, backend):
        result = runner.invoke(app, ["--load-summary", str(isolated / "nope.txt")])

        assert result.exit_code == ExitCode.SUMMARY_LOAD

    def test_load_summary_skips_summarizer(self, isolated, backend):
        prober, generate, acquire_diff = backend
        generate.side_effect = [STYLED]
        summary = isolated / "summary.txt"
        summary.write_text(SUMMARY)

        result = runner.invoke(app, ["--load-summary", str(summary)])

        assert result.exit_code == 0
        prober.assert_not_called()
        acquire_diff.assert_not_called()
        generate.assert_called_once()

    def test_config_file_is_used(self, isolated, backend):
        _, generate, _ = backend
        (isolated / "commitwriter.toml").write_text('style_model = "llama3:8b"\n')

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert generate.call_args_list[1].args[0].model == "llama3:8b"

    def test_install_hook_uses_configured_force(self, isolated, monkeypatch):
        installer = Mock()
        monkeypatch.setattr("commitwriter.commands.generate.install_hook", installer)
        (isolated / "commitwriter.toml").write_text('force = true\ntone = "noir"\n')

        result = runner.invoke(app, ["--install-hook"])

        assert result.exit_code == 0
        installer.assert_called_once()
        assert installer.call_args.args[1] == "noir"
        assert installer.call_args.kwargs["force"] is True
