"""PDF text extraction built on PyMuPDF."""
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Tuple, Union

import fitz  # PyMuPDF

from core.errors import ParseError
from core.models import ParsedDocument
from utils.text import normalize_whitespace

logger = logging.getLogger(__name__)


def _extract_text(pdf_bytes: bytes, source_label: str) -> Tuple[str, int]:
    """Return (text, page count) for a PDF held in memory."""
    try:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            page_count = len(doc)
            if page_count == 0:
                # Damaged files are repaired into an empty document instead of failing
                raise ParseError(source_label, "document has no pages")
            text = "".join(page.get_text() for page in doc)
    except (RuntimeError, ValueError) as e:
        # FileDataError and EmptyFileError derive from RuntimeError
        raise ParseError(source_label, str(e)) from e

    return normalize_whitespace(text), page_count


def _parse(pdf_bytes: bytes, source_label: str) -> ParsedDocument:
    text, page_count = _extract_text(pdf_bytes, source_label)
    logger.debug("Parsed %s: %d page(s), %d chars", source_label, page_count, len(text))

    return ParsedDocument(
        source_label=source_label,
        text=text,
        page_count=page_count,
        parsed_at=datetime.now(timezone.utc)
    )


async def parse_pdf_buffer(pdf_bytes: bytes, label: str = "buffer") -> ParsedDocument:
    """Parse a PDF from raw bytes (e.g. downloaded from the web).

    Raises:
        ParseError: if the bytes are not a valid PDF
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _parse, pdf_bytes, label)


async def parse_pdf_file(file_path: Union[str, Path]) -> ParsedDocument:
    """Parse a PDF file from disk.

    Raises:
        FileNotFoundError: if the path does not point to a file
        ParseError: if the file is not a valid PDF
    """
    absolute_path = Path(file_path).resolve()
    if not absolute_path.is_file():
        raise FileNotFoundError(f"PDF not found: {absolute_path}")

    loop = asyncio.get_running_loop()
    pdf_bytes = await loop.run_in_executor(None, absolute_path.read_bytes)
    return await loop.run_in_executor(None, _parse, pdf_bytes, str(absolute_path))
