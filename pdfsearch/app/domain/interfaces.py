"""
Core domain interfaces for the document search system.
"""
from abc import ABC, abstractmethod
from typing import Any, List


class DecodeError(Exception):
    """Raised when a single page of a document cannot be decoded into text fragments."""

    def __init__(self, page_number: int, message: str = ""):
        self.page_number = page_number
        super().__init__(message or f"Failed to decode page {page_number}")


class DocumentFetchError(Exception):
    """Raised when a document cannot be retrieved from its source."""

    def __init__(self, message: str, status_code: int = 500):
        self.status_code = status_code
        super().__init__(message)


class DocumentDecoder(ABC):
    """Interface for turning the pages of a loaded document into text fragments."""

    @abstractmethod
    async def decode_page(self, document: Any, page_number: int) -> List[str]:
        """
        Decode the text fragments of one page, in document order.

        Args:
            document: Handle of the loaded document.
            page_number: 1-based page number.

        Returns:
            List of fragment strings.

        Raises:
            DecodeError: If the page cannot be decoded.
        """
        pass

    @abstractmethod
    def page_count(self, document: Any) -> int:
        """Return the total number of pages of the document."""
        pass
