"""
PyMuPDF Document Decoder

This module implements the DocumentDecoder interface on top of PyMuPDF. It opens PDF
documents from a file path, raw bytes, a file-like object or an existing PyMuPDF
Document, and decodes a page into text fragments: the text spans of the page in
reading order (blocks, then lines, then spans), which is the granularity a viewer
paints its text layer in.

PyMuPDF calls are blocking and a Document must not be used from two threads at once,
so extraction runs in a worker thread behind an instance-level lock. The event loop is
free while a page decodes, and pages of one scan batch queue on the lock. Any failure
while decoding a page is reported as DecodeError for that page.
"""

import asyncio
import io
import threading
from typing import Any, BinaryIO, List, Union

import pymupdf

from pdfsearch.app.domain.interfaces import DecodeError, DocumentDecoder
from pdfsearch.app.utils.logging.logger import log_debug
from pdfsearch.app.utils.system_utils.error_handling import SecurityAwareErrorHandler


def open_document(pdf_input: Union[str, bytes, BinaryIO, pymupdf.Document]) -> pymupdf.Document:
    """
    Open a PDF document from a flexible input.

    Args:
        pdf_input: A file path, the PDF content as bytes, a file-like object with PDF
            content, or an already opened PyMuPDF Document.

    Returns:
        pymupdf.Document: The opened document.
    """
    try:
        if isinstance(pdf_input, pymupdf.Document):
            return pdf_input
        if isinstance(pdf_input, str):
            return pymupdf.open(pdf_input)
        if isinstance(pdf_input, (bytes, bytearray)):
            return pymupdf.open(stream=io.BytesIO(pdf_input), filetype="pdf")
        if hasattr(pdf_input, "read") and callable(pdf_input.read):
            return pymupdf.open(stream=pdf_input.read(), filetype="pdf")
        raise ValueError(
            "Invalid input! Expected a file path, PyMuPDF Document, bytes, or file-like object."
        )
    except Exception as e:
        SecurityAwareErrorHandler.log_processing_error(
            e,
            "pdf_document_open",
            pdf_input if isinstance(pdf_input, str) else "memory_buffer",
        )
        raise


class PyMuPDFDecoder(DocumentDecoder):
    """
    Decodes PDF pages into text fragments with PyMuPDF.
    """

    def __init__(self):
        # Serializes access to PyMuPDF documents across worker threads.
        self._instance_lock = threading.Lock()

    def page_count(self, document: pymupdf.Document) -> int:
        return len(document)

    async def decode_page(self, document: pymupdf.Document, page_number: int) -> List[str]:
        """
        Decode one page into its text spans.

        Args:
            document (pymupdf.Document): The opened document.
            page_number (int): 1-based page number.

        Returns:
            List[str]: Fragment strings in reading order.

        Raises:
            DecodeError: If the page is out of range or PyMuPDF fails on it.
        """
        if not 1 <= page_number <= len(document):
            raise DecodeError(page_number, f"Page {page_number} is out of range")
        try:
            return await asyncio.to_thread(self._extract_page_fragments, document, page_number)
        except Exception as e:
            raise DecodeError(page_number, str(e)) from e

    def _extract_page_fragments(self, document: pymupdf.Document, page_number: int) -> List[str]:
        with self._instance_lock:
            page = document[page_number - 1]
            page_dict = page.get_text("dict")
        fragments = []
        for block in page_dict.get("blocks", []):
            # Image blocks have type 1 and carry no lines.
            if block.get("type", 0) != 0:
                continue
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    fragments.append(span.get("text", ""))
        log_debug(f"[OK] Decoded page {page_number} into {len(fragments)} fragments")
        return fragments

    @staticmethod
    def close(document: Any) -> None:
        """
        Close a document and release its resources.
        """
        try:
            if document is not None:
                document.close()
        except Exception as e:
            SecurityAwareErrorHandler.log_processing_error(e, "pdf_document_close", "document")
