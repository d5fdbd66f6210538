"""Download service — HTTP transport and GitHub URL normalisation."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import SplitResult, urlsplit, urlunsplit

import httpx

from skillsync.config import settings
from skillsync.errors import InvalidPathError, StorageIOError
from skillsync.utils.fs import atomic_write, ensure_dir

logger = logging.getLogger(__name__)

GITHUB_HOST = "github.com"
RAW_GITHUB_HOST = "raw.githubusercontent.com"
MANIFEST_SUFFIXES = (".json", ".yaml", ".yml")
URL_SCHEMES = ("http", "https")


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


async def _get(url: str, headers: dict[str, str] | None = None) -> httpx.Response:
    try:
        async with _client() as client:
            resp = await client.get(url, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise StorageIOError(f"HTTP request failed: {exc}") from exc
    if not resp.is_success:
        raise StorageIOError(f"HTTP {resp.status_code} for {url}")
    return resp


async def fetch_text(url: str) -> str:
    resp = await _get(url)
    return resp.text


async def download_file(url: str, dest: Path) -> int:
    """Download ``url`` to ``dest`` (parents created, written atomically). Returns byte count."""
    resp = await _get(url)
    ensure_dir(dest.parent)
    atomic_write(dest, resp.content)
    logger.info("Downloaded %s → %s (%d bytes)", url, dest, len(resp.content))
    return len(resp.content)


async def get_with_auth(url: str, token: str) -> str:
    resp = await _get(url, headers={"Authorization": f"Bearer {token}", "Accept": "application/json"})
    return resp.text


# ── URL helpers ──────────────────────────────────────────────────────


def _split(url: str) -> SplitResult:
    try:
        return urlsplit(url)
    except ValueError as exc:
        raise InvalidPathError(f"Invalid URL {url!r}: {exc}") from exc


def validate_url(url: str) -> str:
    """Reject anything that is not an absolute http(s) URL."""
    parts = _split(url)
    if parts.scheme not in URL_SCHEMES or not parts.hostname:
        raise InvalidPathError(f"Invalid URL {url!r}")
    return url


def convert_github_url_to_raw(url: str) -> str:
    """``github.com/<u>/<r>/blob/<ref>/<path>`` → ``raw.githubusercontent.com/<u>/<r>/<ref>/<path>``."""
    parts = _split(url)
    if parts.netloc != GITHUB_HOST or "/blob/" not in parts.path:
        return url
    path = parts.path.replace("/blob/", "/", 1)
    return urlunsplit((parts.scheme, RAW_GITHUB_HOST, path, parts.query, parts.fragment))


def convert_github_repo_to_registry(url: str) -> str:
    """Turn a GitHub repo/tree/blob URL into the raw URL of its registry manifest.

    Non-GitHub URLs are returned unchanged.
    """
    parts = _split(url)
    if parts.netloc != GITHUB_HOST:
        return url

    path = parts.path.replace("/tree/", "/", 1).replace("/blob/", "/", 1).rstrip("/")
    if not path.endswith(MANIFEST_SUFFIXES):
        segments = [s for s in path.split("/") if s]
        if len(segments) == 2:
            # Bare owner/repo: assume the default branch
            segments.append(settings.default_branch)
        segments.append(settings.manifest_filename)
        path = "/" + "/".join(segments)

    return urlunsplit((parts.scheme, RAW_GITHUB_HOST, path, "", ""))


def registry_base_url(registry_url: str) -> str:
    """Directory URL of a registry's manifest, without the trailing slash."""
    manifest = convert_github_repo_to_registry(registry_url).rstrip("/")
    head, _, last = manifest.rpartition("/")
    if last.endswith(MANIFEST_SUFFIXES):
        return head
    return manifest


def resolve_file_url(registry_url: str, reference: str) -> str:
    """Absolute raw URL for a per-agent file reference from a manifest."""
    validate_url(registry_url)
    if reference.startswith(("http://", "https://")):
        url = reference
    else:
        url = f"{registry_base_url(registry_url)}/{reference.lstrip('/')}"
    return validate_url(convert_github_url_to_raw(url))
