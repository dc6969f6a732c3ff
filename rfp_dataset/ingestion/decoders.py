"""Turn uploaded RFP and proposal files into plain-text documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict

import docx
import fitz
from bs4 import BeautifulSoup

from rfp_dataset.errors import DocumentDecodeError
from rfp_dataset.models.document import Document

logger = logging.getLogger(__name__)

UNSUPPORTED_PLACEHOLDER = "Unsupported file type."


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def read_html(path: Path) -> str:
    soup = BeautifulSoup(path.read_text(encoding="utf-8", errors="replace"), "html.parser")
    root = soup.body or soup
    return root.get_text()


def read_docx(path: Path) -> str:
    document = docx.Document(str(path))
    return "\n\n".join(paragraph.text for paragraph in document.paragraphs)


def read_pdf(path: Path) -> str:
    pages = []
    with fitz.open(str(path)) as pdf:
        for page in pdf:
            pages.append(page.get_text("text"))
    return "\n".join(pages)


READERS: Dict[str, Callable[[Path], str]] = {
    ".txt": read_text,
    ".md": read_text,
    ".html": read_html,
    ".htm": read_html,
    ".doc": read_docx,
    ".docx": read_docx,
    ".pdf": read_pdf,
}

ACCEPTED_EXTENSIONS = frozenset(READERS)


def decode_file(path: Path) -> Document:
    """Decode ``path`` by extension; unknown extensions yield a placeholder text."""
    path = Path(path)
    if not path.is_file():
        raise DocumentDecodeError(path.name, "file not found")
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        logger.warning("Unsupported file type: %s. Using placeholder content.", path.name)
        return Document(name=path.name, content=UNSUPPORTED_PLACEHOLDER)
    try:
        content = reader(path)
    except Exception as exc:
        logger.error("Error processing file %s: %s", path, exc)
        raise DocumentDecodeError(path.name, str(exc)) from exc
    logger.debug("Decoded %s characters from %s", len(content), path.name)
    return Document(name=path.name, content=content.strip())
