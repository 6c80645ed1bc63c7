"""
CLI for pdf-translate-ai.

Downloads a PDF, translates it page by page and prints the result.
"""

from __future__ import annotations

import asyncio
import functools
import logging

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from pdf_translate_ai.config import CREDENTIAL_ENV_VAR, Settings, load_config, setup_logging
from pdf_translate_ai.download import DownloadError, download_pdf
from pdf_translate_ai.extraction import PdftotextExtractor
from pdf_translate_ai.llm import OpenAIProvider
from pdf_translate_ai.translation import PageTranslator, PipelineConfig, TranslationPipeline
from pdf_translate_ai.translation.pipeline import ProgressInfo

app = typer.Typer(
    name="translate-pdf",
    help="Translate a PDF page by page with an LLM.",
    add_completion=False,
)

console = Console()
logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    """Load settings from config.yaml in the working directory, env, or defaults."""
    return load_config()


def _print_progress(info: ProgressInfo) -> None:
    console.print(info.stage_display, highlight=False)


def build_pipeline(
    settings: Settings,
    language: str,
    additional_prompts: str | None = None,
) -> TranslationPipeline:
    """Wire extractor, translator and downloader from settings."""
    provider = OpenAIProvider(
        api_key=settings.translation.api_key,
        model=settings.translation.model,
        base_url=settings.translation.base_url,
        timeout=settings.translation.timeout_seconds,
    )
    translator = PageTranslator(
        provider,
        language,
        additional_instructions=additional_prompts,
    )
    extractor = PdftotextExtractor(
        settings.extraction.pdftotext_path,
        layout=settings.extraction.layout,
    )
    downloader = functools.partial(
        download_pdf,
        timeout=settings.download.timeout_seconds,
        chunk_size=settings.download.chunk_size,
    )
    config = PipelineConfig(
        document_path=settings.paths.document_path,
        max_pages=settings.processing.max_pages,
        max_concurrent_pages=settings.processing.max_concurrent_pages,
    )
    return TranslationPipeline(
        config,
        extractor=extractor,
        translator=translator,
        downloader=downloader,
        progress_callback=_print_progress,
    )


@app.command()
def translate(
    pdf_url: str = typer.Argument(..., help="URL of the PDF to translate"),
    language: str = typer.Argument(..., help="Language to translate into, e.g. French"),
    additional_prompts: str | None = typer.Argument(
        None, help="Additional instructions (reserved, currently unused)"
    ),
) -> None:
    """Translate a PDF and print the translated text."""
    try:
        settings = get_settings()
    except (ValidationError, yaml.YAMLError) as e:
        console.print("[red]Invalid configuration:[/red]")
        console.print(str(e), markup=False, highlight=False)
        raise typer.Exit(1) from None

    setup_logging(settings.logging)

    if not settings.translation.api_key:
        console.print(f"[red]{CREDENTIAL_ENV_VAR} not set[/red]")
        console.print(f"Set the {CREDENTIAL_ENV_VAR} environment variable or add it to config")
        raise typer.Exit(1)

    if additional_prompts:
        logger.info("Additional instructions received but not used: %r", additional_prompts)

    pipeline = build_pipeline(settings, language, additional_prompts)

    try:
        result = asyncio.run(pipeline.run(pdf_url))
    except DownloadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if result.is_degraded:
        logger.warning(
            "%d of %d pages could not be translated: %s",
            len(result.failed_pages),
            result.pages_queued,
            result.failed_pages,
        )

    # Raw write: rich would expand tabs and drop control characters
    typer.echo(result.text)


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
