"""
Pytest Configuration and Shared Fixtures
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import pytest

from pdf_translate_ai.extraction import ExtractionResult, PageExtractor


class FakeExtractor(PageExtractor):
    """Serves a fixed list of pages; anything past the end is not found."""

    def __init__(self, pages: list[str]):
        self.pages = pages
        self.calls: list[int] = []

    @property
    def name(self) -> str:
        return "fake"

    async def extract_page(self, file_path: Path, page_number: int, **kwargs: Any) -> ExtractionResult:
        self.calls.append(page_number)
        if page_number > len(self.pages):
            return ExtractionResult.not_found(page_number, returncode=99)
        return ExtractionResult(content=self.pages[page_number - 1], page_number=page_number)


class StubTranslator:
    """Stands in for PageTranslator: prefixes text with the target language."""

    def __init__(
        self,
        target_language: str = "French",
        *,
        delays: dict[str, float] | None = None,
        failures: set[str] | None = None,
    ):
        self.target_language = target_language
        self.delays = delays or {}
        self.failures = failures or set()
        self.completed: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def translate(self, text: str) -> str:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(text, 0))
            if text in self.failures:
                raise RuntimeError(f"translation failed for {text!r}")
            self.completed.append(text)
            return f"[{self.target_language}] {text}"
        finally:
            self.in_flight -= 1


@pytest.fixture
def three_pages() -> list[str]:
    return ["Page 1 body", "Page 2 body", "Page 3 body"]


@pytest.fixture
def fake_downloader():
    """Writes a placeholder file where the real downloader would."""
    calls: list[tuple[str, Path]] = []

    async def download(url: str, path: Path) -> Path:
        calls.append((url, path))
        path.write_bytes(b"%PDF-1.4 fake")
        return path

    download.calls = calls
    return download


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no credential in the environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPENAI_KEY", raising=False)
    monkeypatch.delenv("TRANSLATION__API_KEY", raising=False)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to streams that CliRunner closes after each call."""
    yield
    logger = logging.getLogger("pdf_translate_ai")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
