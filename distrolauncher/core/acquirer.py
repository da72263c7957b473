"""Artifact acquisition — resolve an install source into a local file.

Remote sources (``http://`` / ``https://``) are streamed into a uniquely
named temporary file with the SHA-256 digest computed on the fly, so the
artifact is never read twice. The temporary file belongs to the
``acquire_artifact`` context and is removed when it exits, whatever the
outcome. Local sources are used as-is.
"""

from __future__ import annotations

import hashlib
import logging
import os
import posixpath
import random
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import unquote, urlsplit

import httpx

from distrolauncher.config import LauncherConfig, config
from distrolauncher.core.errors import AcquisitionError
from distrolauncher.core.reporting import NULL_REPORTER, ProgressReporter
from distrolauncher.models.install import ResolvedArtifact

logger = logging.getLogger(__name__)

_REMOTE_SCHEMES = ("http://", "https://")


def is_remote_source(location: str) -> bool:
    """Return True if ``location`` is an http(s) URL (scheme is case-insensitive)."""
    return location.lower().startswith(_REMOTE_SCHEMES)


def _url_basename(url: str) -> str:
    name = posixpath.basename(unquote(urlsplit(url).path))
    return name or "download"


def make_temp_download_path(url: str, temp_dir: Path | None = None) -> Path:
    """Build a unique temporary path for downloading ``url``.

    Layout: ``{temp_dir}/{random 0-9999}{basename of url}``. The original
    base name is kept so suffix-based classification still works on the
    downloaded file.
    """
    base = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
    if not base.is_dir() or not os.access(base, os.W_OK):
        raise AcquisitionError(f"No writable temporary directory available: {base}")
    prefix = random.randint(0, 9999)
    return base / f"{prefix}{_url_basename(url)}"


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("Content-Length")
    if value is None or not value.isdigit():
        return None
    return int(value)


def download_file(
    url: str,
    dest: Path,
    *,
    client: httpx.Client | None = None,
    reporter: ProgressReporter = NULL_REPORTER,
    chunk_size: int = 64 * 1024,
    timeout: float | None = None,
    user_agent: str | None = None,
) -> str:
    """Stream ``url`` into ``dest`` and return the SHA-256 hex digest.

    Parameters
    ----------
    client:
        An existing ``httpx.Client`` to use. When omitted a client is
        created for this call and closed afterwards.
    timeout:
        Per-operation network timeout in seconds. None disables it.

    Raises
    ------
    AcquisitionError
        On HTTP error status, transport failure, interrupted stream or
        a local write failure. A partially written ``dest`` is removed
        before the error propagates.
    """
    owns_client = client is None
    if client is None:
        headers = {"User-Agent": user_agent} if user_agent else {}
        client = httpx.Client(
            follow_redirects=True,
            timeout=httpx.Timeout(timeout),
            headers=headers,
        )

    h = hashlib.sha256()
    try:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            total = _content_length(response)
            logger.info("Downloading %s (%s bytes) to %s", url, total, dest)
            with open(dest, "wb") as out, reporter.download_progress(total) as advance:
                for chunk in response.iter_bytes(chunk_size):
                    out.write(chunk)
                    h.update(chunk)
                    advance(len(chunk))
    except httpx.HTTPStatusError as exc:
        _discard_partial(dest)
        raise AcquisitionError(
            f"Download of {url} failed with HTTP {exc.response.status_code}"
        ) from exc
    except (httpx.HTTPError, httpx.StreamError, OSError) as exc:
        _discard_partial(dest)
        raise AcquisitionError(f"Download of {url} failed: {exc}") from exc
    finally:
        if owns_client:
            client.close()

    digest = h.hexdigest()
    logger.debug("Downloaded %s, sha256=%s", url, digest)
    return digest


def _discard_partial(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove temporary file %s: %s", path, exc)


def _check_local_artifact(path: Path) -> None:
    if not path.is_file():
        raise AcquisitionError(f"Install artifact not found: {path}")
    if not os.access(path, os.R_OK):
        raise AcquisitionError(f"Install artifact is not readable: {path}")


@contextmanager
def acquire_artifact(
    source: str,
    *,
    settings: LauncherConfig | None = None,
    client: httpx.Client | None = None,
    reporter: ProgressReporter = NULL_REPORTER,
) -> Iterator[ResolvedArtifact]:
    """Resolve ``source`` into a local artifact for the duration of the block.

    Downloaded artifacts carry their digest; local ones do not (the
    verifier decides whether hashing them is needed).
    """
    settings = settings or config

    if not is_remote_source(source):
        _check_local_artifact(Path(source))
        yield ResolvedArtifact(local_path=source)
        return

    dest = make_temp_download_path(source, settings.temp_dir)
    try:
        reporter.info("Downloading...")
        digest = download_file(
            source,
            dest,
            client=client,
            reporter=reporter,
            chunk_size=settings.download_chunk_size,
            timeout=settings.download_timeout,
            user_agent=settings.user_agent,
        )
        yield ResolvedArtifact(local_path=dest, actual_digest=digest, downloaded=True)
    finally:
        _discard_partial(dest)
