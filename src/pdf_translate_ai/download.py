"""
Source document download.

Fetches the PDF once with a streaming GET and writes it to a local path.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)


class DownloadError(Exception):
    """Raised when the source document cannot be fetched or written."""


async def download_pdf(
    url: str,
    path: Path,
    *,
    timeout: float | None = None,
    chunk_size: int = 128 * 1024,
    client: httpx.AsyncClient | None = None,
) -> Path:
    """
    Download a document to a local file.

    Args:
        url: Source URL.
        path: Destination file; overwritten if present.
        timeout: Request timeout in seconds (None for no timeout).
        chunk_size: Streaming chunk size in bytes.
        client: Optional pre-configured client (used as-is, not closed).

    Returns:
        The destination path.

    Raises:
        DownloadError: On network failure, non-2xx status, or write failure.
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    try:
        async with client.stream("GET", url) as response:
            response.raise_for_status()
            path.parent.mkdir(parents=True, exist_ok=True)
            written = 0
            with open(path, "wb") as f:
                async for chunk in response.aiter_bytes(chunk_size=chunk_size):
                    f.write(chunk)
                    written += len(chunk)
    except httpx.HTTPStatusError as exc:
        raise DownloadError(
            f"Download of {url} returned {exc.response.status_code}"
        ) from exc
    except httpx.RequestError as exc:
        raise DownloadError(f"Download of {url} failed: {exc}") from exc
    except OSError as exc:
        raise DownloadError(f"Could not write {path}: {exc}") from exc
    finally:
        if owns_client:
            await client.aclose()

    logger.info("Downloaded %s (%d bytes) to %s", url, written, path)
    return path
