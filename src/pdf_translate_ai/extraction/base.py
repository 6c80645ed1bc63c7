"""
Base classes and interfaces for page text extractors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class ExtractionResult:
    """Result of extracting a single page."""

    content: str
    page_number: int
    success: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        """
        Whether the page exists and produced text.

        Only a literally empty string counts as missing; a page that renders
        to whitespace (e.g. a lone form feed) is still a page.
        """
        return self.success and self.content != ""

    @classmethod
    def not_found(cls, page_number: int, **metadata: Any) -> ExtractionResult:
        return cls(content="", page_number=page_number, success=False, metadata=metadata)


class PageExtractor(ABC):
    """Abstract base class for page extractors."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Extractor name."""
        ...

    @abstractmethod
    async def extract_page(
        self,
        file_path: Path,
        page_number: int,
        **kwargs: Any,
    ) -> ExtractionResult:
        """
        Extract text from a single page.

        Args:
            file_path: Path to the document.
            page_number: Page number (1-indexed).
            **kwargs: Extractor-specific options.

        Returns:
            ExtractionResult; ``found`` is False past the last page or on any
            extraction failure.
        """
        ...
