"""CLI entrypoint for PDF summarization and provider chat."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import Settings, load_settings
from .exceptions import ConfigError
from .logging_config import setup_logging
from .models import (
    ChatResponse,
    ConnectionTestResponse,
    PdfAnalysisResponse,
    SummarizationResponse,
    TextExtractionResponse,
)
from .service import PdfAssistService

CommandResult = (
    SummarizationResponse
    | ChatResponse
    | ConnectionTestResponse
    | PdfAnalysisResponse
    | TextExtractionResponse
)


def _add_connection_args(parser: argparse.ArgumentParser, sampling: bool = True) -> None:
    parser.add_argument(
        "--api-key", type=str, default=None, help="Override PDFASSIST_API_KEY"
    )
    parser.add_argument(
        "--base-url", type=str, default=None, help="Override PDFASSIST_BASE_URL"
    )
    parser.add_argument("--model", type=str, default=None, help="Override PDFASSIST_MODEL")
    parser.add_argument(
        "--timeout", type=int, default=None, help="Request timeout in seconds"
    )
    if sampling:
        parser.add_argument(
            "--max-tokens", type=int, default=None, help="Completion token limit"
        )
        parser.add_argument(
            "--temperature", type=float, default=None, help="Sampling temperature"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdfassist",
        description="Summarize PDFs or chat through OpenAI- and Anthropic-compatible APIs",
    )
    parser.add_argument("--dotenv", type=Path, default=None, help="Path to .env file")
    parser.add_argument("--json", action="store_true", help="Print the raw result envelope")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-file", type=Path, default=None, help="Also write logs to this file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    summarize = subparsers.add_parser("summarize", help="Summarize a PDF file")
    summarize.add_argument("file", type=Path, help="PDF file to summarize")
    summarize.add_argument(
        "--prompt", type=str, default=None, help="Override PDFASSIST_SUMMARY_PROMPT"
    )
    _add_connection_args(summarize)

    chat = subparsers.add_parser("chat", help="Send one prompt to the provider")
    chat.add_argument("prompt", type=str, help="Prompt text")
    chat.add_argument(
        "--show-reasoning",
        action="store_true",
        help="Include the model's reasoning block when it emits one",
    )
    _add_connection_args(chat)

    test_connection = subparsers.add_parser(
        "test-connection", help="Check credentials and reachability"
    )
    _add_connection_args(test_connection, sampling=False)

    analyze = subparsers.add_parser("analyze", help="Show page count and text presence")
    analyze.add_argument("file", type=Path, help="PDF file to inspect")

    extract = subparsers.add_parser("extract", help="Print cleaned PDF text")
    extract.add_argument("file", type=Path, help="PDF file to extract")

    return parser


def _pick(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def _run_command(
    args: argparse.Namespace,
    settings: Settings,
    service: PdfAssistService,
) -> CommandResult:
    if args.command == "analyze":
        return service.analyze_pdf(args.file)
    if args.command == "extract":
        return service.extract_pdf_text(args.file)

    api_key = _pick(args.api_key, settings.api_key)
    base_url = _pick(args.base_url, settings.base_url)
    model = _pick(args.model, settings.model)
    timeout_sec = _pick(args.timeout, settings.timeout_sec)

    if args.command == "test-connection":
        return service.test_connection(
            api_key=api_key,
            base_url=base_url,
            model=model,
            timeout_sec=timeout_sec,
        )

    max_tokens = _pick(args.max_tokens, settings.max_tokens)
    temperature = _pick(args.temperature, settings.temperature)

    if args.command == "summarize":
        return service.summarize_pdf(
            file_path=args.file,
            prompt=_pick(args.prompt, settings.summary_prompt),
            api_key=api_key,
            base_url=base_url,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            timeout_sec=timeout_sec,
        )

    return service.chat(
        prompt=args.prompt,
        api_key=api_key,
        base_url=base_url,
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        timeout_sec=timeout_sec,
        include_reasoning=args.show_reasoning,
    )


def _render(console: Console, command: str, result: CommandResult) -> None:
    if not result.success:
        console.print(
            Panel(Text(result.error or "Unknown error"), title="Failed", border_style="red")
        )
        return

    if command == "summarize":
        console.print(Panel(Text(result.summary), title="Summary", border_style="blue"))
    elif command == "chat":
        if result.reasoning:
            console.print(
                Panel(Text(result.reasoning), title="Reasoning", border_style="dim")
            )
        console.print(Panel(Text(result.output), title="Response", border_style="blue"))
    elif command == "test-connection":
        console.print(
            Panel(Text(result.message or ""), title="Connection OK", border_style="green")
        )
    elif command == "analyze":
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_row("Title", result.title)
        table.add_row("Pages", str(result.page_count))
        table.add_row("Has text", "yes" if result.has_text else "no")
        table.add_row("File size", result.file_size)
        console.print(Panel(table, title="PDF", border_style="blue"))
    else:
        console.print(result.content, markup=False, highlight=False)


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    try:
        settings = load_settings(dotenv_path=args.dotenv)
    except ConfigError as exc:
        console.print(Panel(str(exc), title="Configuration error", border_style="red"))
        return 1

    service = PdfAssistService(
        max_file_size_mb=settings.max_file_size_mb,
        trust_env=settings.network_trust_env,
    )
    result = _run_command(args, settings, service)

    if args.json:
        console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))
    else:
        _render(console, args.command, result)
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
