import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from pdfassist.logging_config import setup_logging


def test_setup_logging_replaces_handlers_and_writes_file(tmp_path):
    log_file = tmp_path / "pdfassist.log"
    console = Console(file=io.StringIO(), width=120)

    setup_logging(level=logging.DEBUG, console=console)
    logger = setup_logging(level=logging.INFO, log_file=log_file, console=console)

    assert logger.name == "pdfassist"
    assert len(logger.handlers) == 2
    assert isinstance(logger.handlers[0], RichHandler)

    logging.getLogger("pdfassist.pdf_extractor").warning("page %d skipped", 3)
    for handler in logger.handlers:
        handler.flush()

    assert "page 3 skipped" in log_file.read_text(encoding="utf-8")
    assert "page 3 skipped" in console.file.getvalue()

    logger.handlers.clear()
