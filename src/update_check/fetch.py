"""Version file retrieval."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx
from httpx import HTTPStatusError

from update_check import messages
from update_check.errors import FetchError
from update_check.models.settings import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from update_check.utils import uris

logger = logging.getLogger(__name__)

GITHUB_RELEASES_LATEST = "/releases/latest"
HTTP_PREFIX = "http"


class ContentFetcher(Protocol):
    """Retrieves raw version file contents, raising FetchError on failure."""

    def fetch_url(self, url: str) -> bytes:
        ...

    def read_file(self, path: str | Path) -> bytes:
        ...


class HttpContentFetcher:
    """Fetches over http(s) with httpx, and reads local files."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._owns_client = client is None
        self.client = client or httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": user_agent},
        )

    def __enter__(self) -> HttpContentFetcher:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        if self._owns_client:
            self.client.close()

    def fetch_url(self, url: str) -> bytes:
        logger.debug("Downloading %s", url)
        try:
            # no-cache to make sure we get the latest version file
            response = self.client.get(url, headers={"Cache-Control": "no-cache"})
            response.raise_for_status()
        except HTTPStatusError as e:
            raise FetchError(
                f"{messages.FAILED_TO_DOWNLOAD_VERSION_FILE} "
                f"{url!r} -> ({e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"{messages.FAILED_TO_DOWNLOAD_VERSION_FILE} {e}") from e

        logger.debug("%r -> (%d)", url, response.status_code)
        return ensure_not_empty(response.content)

    def read_file(self, path: str | Path) -> bytes:
        logger.debug("Reading %s", path)
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            raise FetchError(f"{messages.FAILED_TO_LOAD_VERSION_FILE} {e}") from e

        return ensure_not_empty(content)


def ensure_not_empty(content: bytes) -> bytes:
    if not content:
        raise FetchError(messages.DOWNLOADED_AN_EMPTY_VERSION_FILE)
    return content


def find_asset_download_url(latest_release: Any, asset_name: str) -> str:
    """Find the download url of a named asset in a GitHub release document."""
    if not isinstance(latest_release, dict) or "assets" not in latest_release:
        raise FetchError(messages.MISSING_ASSETS_TAG)

    asset = next(
        (
            a
            for a in latest_release["assets"] or []
            if isinstance(a, dict) and a.get("name") == asset_name
        ),
        None,
    )
    if asset is None:
        raise FetchError(messages.ASSET_NOT_FOUND)

    download_url = asset.get("browser_download_url")
    if not isinstance(download_url, str):
        raise FetchError(messages.DOWNLOAD_URL_NOT_FOUND_IN_ASSET)

    return download_url


def load_json_from_latest_release(
    fetcher: ContentFetcher, url: str, asset_name: str
) -> bytes:
    """Download a version file attached to the latest release of a GitHub repo.

    ``url`` is the GitHub API latest release url, the version file is the
    release asset named ``asset_name``.
    """
    content = fetcher.fetch_url(url)

    # Networks that limit internet access can hand back an html page here.
    try:
        latest_release = json.loads(content)
    except ValueError as e:
        raise FetchError(
            f"{messages.FAILED_TO_LOAD_LATEST_RELEASE_INFORMATION} {e}"
        ) from e

    try:
        download_url = find_asset_download_url(latest_release, asset_name)
    except FetchError as e:
        # GitHub API errors come back as {"message": "..."}
        api_message = (
            latest_release.get("message") if isinstance(latest_release, dict) else None
        )
        if isinstance(api_message, str):
            raise FetchError(f"{e}{api_message}") from e
        raise

    logger.debug("Found asset %r at %s", asset_name, download_url)
    return fetcher.fetch_url(download_url)


def fetch_version_file(
    fetcher: ContentFetcher, latest_release_url: str, json_filename: str
) -> bytes:
    """Retrieve a version file from a GitHub release, a url or the local disk."""
    if GITHUB_RELEASES_LATEST in latest_release_url:
        logger.info("Loading %s from latest release %s", json_filename, latest_release_url)
        return load_json_from_latest_release(fetcher, latest_release_url, json_filename)

    if latest_release_url.startswith(HTTP_PREFIX):
        url = uris.join(latest_release_url, json_filename)
        logger.info("Downloading version file %s", url)
        return fetcher.fetch_url(url)

    path = uris.join(latest_release_url, json_filename)
    logger.info("Loading version file %s", path)
    return fetcher.read_file(path)
