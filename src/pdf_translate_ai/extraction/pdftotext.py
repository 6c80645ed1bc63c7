"""
pdftotext-based text extraction for native PDFs.

Runs the poppler ``pdftotext`` executable once per page.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from pathlib import Path
from typing import Any

from pdf_translate_ai.extraction.base import ExtractionResult, PageExtractor

logger = logging.getLogger(__name__)


class PdftotextExtractor(PageExtractor):
    """
    Extract text from PDF pages with ``pdftotext``.

    Each call selects a single page (identical first and last page) and reads
    the text from standard output.
    """

    def __init__(self, executable: str = "pdftotext", *, layout: bool = True):
        """
        Initialize extractor.

        Args:
            executable: Name or path of the pdftotext binary.
            layout: Ask pdftotext to preserve the physical layout.
        """
        self._executable = executable
        self._layout = layout

    @property
    def name(self) -> str:
        return "pdftotext"

    def build_command(self, file_path: Path, page_number: int) -> list[str]:
        """Command line for extracting one page to stdout."""
        command = [self._executable]
        if self._layout:
            command.append("-layout")
        command += ["-f", str(page_number), "-l", str(page_number), str(file_path), "-"]
        return command

    async def extract_page(
        self,
        file_path: Path,
        page_number: int,
        **kwargs: Any,
    ) -> ExtractionResult:
        """
        Extract text from a single page.

        Args:
            file_path: Path to PDF file.
            page_number: Page number (1-indexed).

        Returns:
            ExtractionResult with the page text, or a not-found result when
            pdftotext fails or prints nothing.
        """
        command = self.build_command(file_path, page_number)

        try:
            completed = await asyncio.to_thread(subprocess.run, command, capture_output=True)
        except OSError as e:
            logger.warning("Could not run %s: %s", self._executable, e)
            return ExtractionResult.not_found(page_number, error=str(e))

        stderr = completed.stderr.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            logger.debug(
                "pdftotext exited with %d on page %d: %s",
                completed.returncode,
                page_number,
                stderr.strip(),
            )
            return ExtractionResult.not_found(
                page_number, returncode=completed.returncode, stderr=stderr
            )

        content = completed.stdout.decode("utf-8", errors="replace")
        if not content:
            logger.debug("pdftotext produced no text for page %d", page_number)
            return ExtractionResult.not_found(page_number, returncode=0, error="No text extracted")

        return ExtractionResult(
            content=content,
            page_number=page_number,
            metadata={"returncode": 0, "extractor": self.name},
        )
