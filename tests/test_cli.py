"""CLI commands driven through click's test runner with a stub gateway."""

import json
import logging

import pytest
from click.testing import CliRunner
from rich.logging import RichHandler

from cover_studio import AsyncCoverStudio, NoImageInResponse
from cover_studio.cli import main as cli_main

from conftest import StubGateway


@pytest.fixture
def stub(monkeypatch):
    gateway = StubGateway()

    def _get_client(on_change=None):
        return AsyncCoverStudio(gateway=gateway, on_change=on_change)

    monkeypatch.setattr(cli_main, "_get_client", _get_client)
    return gateway


@pytest.fixture
def runner():
    return CliRunner()


def test_generate_with_edits(runner, stub, tmp_path):
    result = runner.invoke(cli_main.main, [
        "generate", "--title", "AI Trends 2025",
        "-e", "make it brighter", "-e", "add sunset",
        "-o", str(tmp_path), "--json",
    ])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output.strip().splitlines()[-1])
    assert payload["versions"] == 3
    assert payload["prompt"] == stub.prompt
    saved = tmp_path / "blog-visual-16x9.png"
    assert payload["path"] == str(saved)
    assert saved.read_bytes() == b"generated-1 + make it brighter + add sunset"


def test_generate_body_file(runner, stub, tmp_path):
    body = tmp_path / "post.md"
    body.write_text("Gardening in small spaces", encoding="utf-8")
    result = runner.invoke(cli_main.main, ["generate", "--body-file", str(body), "-o", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert stub.calls[0] == ("describe", "", "Gardening in small spaces")


def test_generate_failure_exits_nonzero(runner, stub, tmp_path):
    stub.generate_error = NoImageInResponse()
    result = runner.invoke(cli_main.main, ["generate", "--title", "AI", "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert "No image data" in result.output
    assert not (tmp_path / "blog-visual-16x9.png").exists()


def test_generate_requires_input(runner, stub, tmp_path):
    result = runner.invoke(cli_main.main, ["generate", "-o", str(tmp_path)])
    assert result.exit_code == 1
    assert stub.calls == []


def test_studio_session(runner, stub, tmp_path):
    commands = "\n".join([
        "/title AI Trends 2025",
        "/generate",
        "make it brighter",
        "/restore 0",
        "/history",
        "/restore 9",
        "/save cover.png",
        "/quit",
    ]) + "\n"
    result = runner.invoke(cli_main.main, ["studio", "-o", str(tmp_path)], input=commands)
    assert result.exit_code == 0, result.output
    assert "out of range" in result.output
    assert (tmp_path / "cover.png").read_bytes() == b"generated-1"
    assert [c[0] for c in stub.calls] == ["describe", "generate", "edit"]


def test_studio_reset_confirmation(runner, stub, tmp_path):
    commands = "/title Hello\n/generate\n/reset\nn\n/save\n/reset\ny\n/save\n/quit\n"
    result = runner.invoke(cli_main.main, ["studio", "-o", str(tmp_path)], input=commands)
    assert result.exit_code == 0, result.output
    assert (tmp_path / "blog-visual-16x9.png").exists()
    assert "Nothing to save yet" in result.output


def test_config_set_key_and_show(runner, monkeypatch, tmp_path):
    import cover_studio.config as config_module

    for var in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)

    result = runner.invoke(cli_main.main, ["config", "set-key", "--api-key", "abcd-secret-wxyz"])
    assert result.exit_code == 0, result.output
    assert json.loads((tmp_path / "config.json").read_text())["api_key"] == "abcd-secret-wxyz"

    result = runner.invoke(cli_main.main, ["config", "set-model", "--image", "custom-image"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(cli_main.main, ["config", "show"])
    assert result.exit_code == 0, result.output
    assert "abcd" in result.output
    assert "secret" not in result.output
    assert "custom-image" in result.output


def test_generate_unwritable_output(runner, stub, tmp_path):
    (tmp_path / "blocker").write_text("not a directory")
    result = runner.invoke(cli_main.main, [
        "generate", "--title", "AI", "-o", str(tmp_path), "--filename", "blocker/cover.png",
    ])
    assert result.exit_code == 1
    assert not isinstance(result.exception, OSError)
    assert "Traceback" not in result.output


@pytest.mark.parametrize("verbose,level", [(False, logging.INFO), (True, logging.DEBUG)])
def test_logging_level(monkeypatch, verbose, level):
    pkg_logger = logging.getLogger("cover_studio")
    monkeypatch.setattr(pkg_logger, "level", pkg_logger.level)
    monkeypatch.setattr(pkg_logger, "handlers", list(pkg_logger.handlers))

    cli_main._setup_logging(verbose)
    assert pkg_logger.level == level
    cli_main._setup_logging(verbose)
    assert sum(isinstance(h, RichHandler) for h in pkg_logger.handlers) == 1
