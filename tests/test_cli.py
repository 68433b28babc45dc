import io
import json

from pypdf import PdfWriter
from rich.console import Console

from pdfassist.cli import build_parser, main

ENV_KEYS = [
    "PDFASSIST_API_KEY",
    "OPENAI_API_KEY",
    "API_KEY",
    "PDFASSIST_BASE_URL",
    "BASE_URL",
    "PDFASSIST_MODEL",
    "MODEL",
]


def clear_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def _console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def _blank_pdf(tmp_path):
    path = tmp_path / "blank.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.write(path)
    return path


def test_parser_reads_connection_overrides():
    args = build_parser().parse_args(
        ["chat", "Hello", "--base-url", "https://api.anthropic.com/v1", "--max-tokens", "64"]
    )

    assert args.command == "chat"
    assert args.prompt == "Hello"
    assert args.base_url == "https://api.anthropic.com/v1"
    assert args.max_tokens == 64
    assert args.show_reasoning is False


def test_analyze_prints_json_envelope(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    console = _console()

    exit_code = main(
        ["--dotenv", str(tmp_path / "missing.env"), "--json", "analyze", str(_blank_pdf(tmp_path))],
        console=console,
    )

    payload = json.loads(console.file.getvalue())
    assert exit_code == 0
    assert payload["pageCount"] == 1
    assert payload["title"] == "blank"
    assert payload["hasText"] is False
    assert payload["success"] is True


def test_summarize_without_api_key_fails(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    console = _console()

    exit_code = main(
        ["--dotenv", str(tmp_path / "missing.env"), "summarize", str(_blank_pdf(tmp_path))],
        console=console,
    )

    assert exit_code == 1
    assert "Please configure a valid API key in settings" in console.file.getvalue()


def test_extract_reports_missing_file(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    console = _console()

    exit_code = main(
        ["--dotenv", str(tmp_path / "missing.env"), "extract", str(tmp_path / "gone.pdf")],
        console=console,
    )

    assert exit_code == 1
    assert "File does not exist" in console.file.getvalue()
