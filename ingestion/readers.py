from __future__ import annotations

from io import BytesIO
from pathlib import PurePath
from typing import List

from bs4 import BeautifulSoup
from langchain_core.documents import Document
from pypdf import PdfReader

from common.errors import ParseError
from common.logger import get_logger
from ingestion.cleaners import normalize_text, strip_bom
from ingestion.document_models import RawInput
from ingestion.hash_utils import sha1_bytes, sha1_text

log = get_logger(__name__)

_HTML_PREFIXES = (b"<!doctype html", b"<html")
_MARKUP_PREFIXES = (b"<?xml", b"<!--")
_HTML_EXTS = (".html", ".htm")


def _looks_like_html(head: bytes, source: str) -> bool:
    if head.startswith(_HTML_PREFIXES):
        return True
    # XML declaration or leading comment before the <html> tag
    if head.startswith(_MARKUP_PREFIXES) and b"<html" in head:
        return True
    return PurePath(source).suffix.lower() in _HTML_EXTS


class DocumentReader:
    """
    Turn one raw upload into one Document.
    The format is sniffed from the bytes themselves (PDF, HTML or UTF-8 text),
    falling back to the source's extension for HTML that opens with other markup.
    """

    def read(self, raw: RawInput | bytes) -> Document:
        if isinstance(raw, (bytes, bytearray)):
            raw = RawInput(data=bytes(raw))
        if not raw.data:
            raise ParseError("empty input", source=raw.source)

        documents = self._parse(raw)
        if not documents:
            raise ParseError("parser produced no document", source=raw.source)
        # Only the first logical document is kept.
        return documents[0]

    def _parse(self, raw: RawInput) -> List[Document]:
        content = strip_bom(raw.data)
        head = content[:1024].lstrip().lower()
        extra: dict = {}
        try:
            if head.startswith(b"%pdf"):
                kind = "pdf"
                text, extra = self._extract_pdf(content)
            elif _looks_like_html(head, raw.source):
                kind = "html"
                text, extra = self._extract_html(content)
            else:
                kind = "text"
                text = self._extract_text(content)
        except ParseError as e:
            e.source = e.source or raw.source
            raise
        except Exception as e:
            raise ParseError(f"could not parse input: {e}", source=raw.source) from e

        text = normalize_text(text)
        metadata = {
            "source": raw.source,
            "type": kind,
            "source_id": sha1_bytes(raw.data),
            "content_sha1": sha1_text(text),
            **extra,
        }
        log.debug("Parsed %s as %s (%d chars)", raw.source, kind, len(text))
        return [Document(page_content=text, metadata=metadata)]

    @staticmethod
    def _extract_pdf(content: bytes) -> tuple[str, dict]:
        with BytesIO(content) as buffer:
            reader = PdfReader(buffer)
            texts = [page.extract_text() or "" for page in reader.pages]
        return "\n".join(texts), {"pages": len(texts)}

    @staticmethod
    def _extract_html(content: bytes) -> tuple[str, dict]:
        soup = BeautifulSoup(
            content.decode("utf-8-sig", errors="ignore"), "html.parser"
        )
        title = soup.title.get_text(strip=True) if soup.title else ""
        for tag in soup(["script", "style", "noscript"]):
            tag.extract()
        text = "\n".join(
            t.strip() for t in soup.get_text("\n").splitlines() if t.strip()
        )
        return text, {"title": title} if title else {}

    @staticmethod
    def _extract_text(content: bytes) -> str:
        if b"\x00" in content:
            raise ParseError("binary content is not a supported format")
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError("unsupported or corrupt format (not UTF-8 text)") from e
