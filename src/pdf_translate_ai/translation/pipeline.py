"""
Page-by-page translation pipeline.

Download the document, probe pages in order while dispatching one translation
task per page, then wait for every task and join the results in page order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pdf_translate_ai.download import download_pdf
from pdf_translate_ai.extraction import PageExtractor
from pdf_translate_ai.translation.translator import PageTranslator

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Pipeline processing stages."""

    DOWNLOAD = "download"
    DOWNLOADED = "downloaded"
    DISPATCH = "dispatch"
    QUEUED = "queued"
    COLLECT = "collect"


@dataclass
class ProgressInfo:
    """Progress information for callbacks."""

    stage: PipelineStage
    stage_display: str  # Human-readable line shown to the user
    page_total: int | None = None
    detail: str | None = None


# Type alias for progress callback
ProgressCallback = Callable[[ProgressInfo], None] | None

Downloader = Callable[[str, Path], Awaitable[Path]]


@dataclass
class PendingTranslation:
    """A dispatched, not yet joined, translation of one page."""

    page_number: int
    task: asyncio.Task[str]


@dataclass
class PageOutcome:
    """Terminal state of one page translation."""

    page_number: int
    content: str = ""
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class PipelineResult:
    """Aggregate output of a pipeline run."""

    text: str
    outcomes: list[PageOutcome] = field(default_factory=list)

    @property
    def pages_queued(self) -> int:
        return len(self.outcomes)

    @property
    def failed_pages(self) -> list[int]:
        return [o.page_number for o in self.outcomes if not o.succeeded]

    @property
    def is_degraded(self) -> bool:
        """True when at least one page was dropped from ``text``."""
        return bool(self.failed_pages)


@dataclass
class PipelineConfig:
    """Configuration for the translation pipeline."""

    document_path: Path = Path("file.pdf")
    max_pages: int | None = None
    max_concurrent_pages: int | None = None


async def _translate_gated(
    translator: PageTranslator,
    text: str,
    semaphore: asyncio.Semaphore | None,
) -> str:
    if semaphore is None:
        return await translator.translate(text)
    async with semaphore:
        return await translator.translate(text)


async def discover_and_dispatch(
    document_path: Path,
    extractor: PageExtractor,
    translator: PageTranslator,
    *,
    max_pages: int | None = None,
    semaphore: asyncio.Semaphore | None = None,
) -> list[PendingTranslation]:
    """
    Probe pages 1, 2, 3, ... and start a translation task for each one found.

    The first page that cannot be extracted marks the end of the document;
    it is not reported as an error. Tasks are started but never awaited here,
    unless extraction raises: then the tasks already started are cancelled
    and the error propagates.

    Args:
        document_path: Local PDF path.
        extractor: Page extractor to probe with.
        translator: Translator each task calls.
        max_pages: Optional cap on the number of pages dispatched.
        semaphore: Optional gate bounding concurrent translation calls.

    Returns:
        Pending translations in page order.
    """
    pending: list[PendingTranslation] = []
    page_number = 1

    try:
        while max_pages is None or page_number <= max_pages:
            result = await extractor.extract_page(document_path, page_number)
            if not result.found:
                logger.info("Page discovery stopped at page %d", page_number)
                break

            task = asyncio.create_task(
                _translate_gated(translator, result.content, semaphore),
                name=f"translate-page-{page_number}",
            )
            pending.append(PendingTranslation(page_number=page_number, task=task))
            page_number += 1
        else:
            logger.info("Page discovery reached the configured limit of %d pages", max_pages)
    except BaseException:
        for item in pending:
            item.task.cancel()
        await asyncio.gather(*(p.task for p in pending), return_exceptions=True)
        raise

    return pending


async def join(pending: list[PendingTranslation]) -> PipelineResult:
    """
    Wait for every pending translation, then concatenate in dispatch order.

    A failed translation contributes nothing to the text; its error is kept in
    the matching ``PageOutcome``.
    """
    results = await asyncio.gather(*(p.task for p in pending), return_exceptions=True)

    outcomes: list[PageOutcome] = []
    parts: list[str] = []
    for item, result in zip(pending, results):
        if isinstance(result, BaseException):
            logger.warning("Translation of page %d failed: %s", item.page_number, result)
            outcomes.append(PageOutcome(page_number=item.page_number, error=result))
            continue
        outcomes.append(PageOutcome(page_number=item.page_number, content=result))
        parts.append(result)

    return PipelineResult(text="".join(parts), outcomes=outcomes)


class TranslationPipeline:
    """
    One-shot document translation.

    The document file exists only while pages are being discovered; it is
    removed as soon as discovery stops, whatever the outcome.
    """

    def __init__(
        self,
        config: PipelineConfig,
        *,
        extractor: PageExtractor,
        translator: PageTranslator,
        downloader: Downloader = download_pdf,
        progress_callback: ProgressCallback = None,
    ):
        """
        Initialize pipeline.

        Args:
            config: Pipeline configuration.
            extractor: Page extractor.
            translator: Page translator.
            downloader: Coroutine function fetching (url, path) to disk.
            progress_callback: Optional callback for progress updates.
        """
        self.config = config
        self.extractor = extractor
        self.translator = translator
        self.downloader = downloader
        self._progress_callback = progress_callback

    def _report_progress(
        self,
        stage: PipelineStage,
        stage_display: str,
        page_total: int | None = None,
        detail: str | None = None,
    ) -> None:
        """Report progress via callback if set."""
        if self._progress_callback:
            self._progress_callback(
                ProgressInfo(
                    stage=stage,
                    stage_display=stage_display,
                    page_total=page_total,
                    detail=detail,
                )
            )

    async def run(self, url: str) -> PipelineResult:
        """
        Translate the document at ``url``.

        Raises:
            DownloadError: If the document cannot be fetched.
        """
        document_path = self.config.document_path

        self._report_progress(PipelineStage.DOWNLOAD, "Downloading pdf")
        try:
            await self.downloader(url, document_path)
        except Exception:
            document_path.unlink(missing_ok=True)
            raise
        self._report_progress(PipelineStage.DOWNLOADED, "Pdf downloaded")

        semaphore = None
        if self.config.max_concurrent_pages:
            semaphore = asyncio.Semaphore(self.config.max_concurrent_pages)

        self._report_progress(PipelineStage.DISPATCH, "Starting translations page by page")
        try:
            pending = await discover_and_dispatch(
                document_path,
                self.extractor,
                self.translator,
                max_pages=self.config.max_pages,
                semaphore=semaphore,
            )
        finally:
            document_path.unlink(missing_ok=True)

        self._report_progress(
            PipelineStage.QUEUED,
            f"{len(pending)} pages queued for translation",
            page_total=len(pending),
        )

        result = await join(pending)

        self._report_progress(
            PipelineStage.COLLECT,
            "Translations collected... printing",
            page_total=result.pages_queued,
            detail=f"{len(result.failed_pages)} failed" if result.is_degraded else None,
        )
        return result
