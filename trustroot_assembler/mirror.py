# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Resolve and download top-level metadata from a TUF repository mirror.

``Mirror`` wraps a ``FetcherInterface`` with the mirror specific knowledge:
where the listing lives, how versioned files are named and where downloaded
files go. All download failures are reported as ``FetchError`` (or
``DiscoveryError`` for the listing) with the URL that failed.
"""

import logging
import os
from typing import Dict, Iterator, Optional

from tuf.api import exceptions as tuf_exceptions
from tuf.ngclient import FetcherInterface

from trustroot_assembler.config import METADATA_ROLES, UNVERSIONED_ROLES
from trustroot_assembler.discovery import (
    latest_metadata_name,
    list_metadata_filenames,
)
from trustroot_assembler.exceptions import (
    DiscoveryError,
    FetchError,
    FilesystemError,
)

logger = logging.getLogger(__name__)


class Mirror:
    """A TUF repository mirror publishing metadata at its base URL.

    Args:
        url: Base URL of the mirror, e.g. ``https://tuf-repo-cdn.sigstore.dev``
        fetcher: ``FetcherInterface`` implementation used for all downloads
    """

    def __init__(self, url: str, fetcher: FetcherInterface):
        self.url = url.rstrip("/")
        self._fetcher = fetcher
        self._listing: Optional[str] = None

    def file_url(self, filename: str) -> str:
        return f"{self.url}/{filename}"

    def _fetch(self, url: str) -> Iterator[bytes]:
        """Start downloading ``url`` and return its body chunks.

        HTTP and connection errors are raised here. Errors while reading the
        body are raised from the iterator as ``DownloadError``, whatever the
        fetcher implementation raises.
        """
        chunks = self._fetcher.fetch(url)
        return self._body(url, chunks)

    @staticmethod
    def _body(url: str, chunks: Iterator[bytes]) -> Iterator[bytes]:
        try:
            yield from chunks
        except tuf_exceptions.DownloadError:
            raise
        except Exception as e:
            raise tuf_exceptions.DownloadError(
                f"Failed to read body of {url}: {e}"
            ) from e

    @staticmethod
    def _fetch_error(url: str, e: tuf_exceptions.DownloadError) -> FetchError:
        if isinstance(e, tuf_exceptions.DownloadHTTPError):
            return FetchError(
                f"Failed to download {url}: HTTP {e.status_code}",
                url,
                e.status_code,
            )
        return FetchError(f"Failed to download {url}: {e}", url)

    def listing(self) -> str:
        """Return the text of the mirror's directory listing.

        The listing is downloaded on first use and reused afterwards.

        Raises:
            DiscoveryError: The listing could not be downloaded.
        """
        if self._listing is None:
            url = f"{self.url}/"
            try:
                data = b"".join(self._fetch(url))
            except tuf_exceptions.DownloadError as e:
                raise DiscoveryError(
                    f"Failed to fetch mirror listing {url}: {e}"
                ) from e
            self._listing = data.decode("utf-8", errors="replace")

        return self._listing

    def resolve(self, role: str) -> str:
        """Return the filename of the latest published version of ``role``.

        Raises:
            DiscoveryError: Listing unavailable or no versioned file found.
        """
        if role in UNVERSIONED_ROLES:
            return f"{role}.json"

        candidates = list_metadata_filenames(self.listing(), f"{role}.json")
        name = latest_metadata_name(candidates)
        logger.info("Latest %s metadata is %s", role, name)
        return name

    def download(self, filename: str, directory: str) -> str:
        """Download ``filename`` from the mirror into ``directory``.

        The destination must not exist yet. Returns the local path.

        Raises:
            FetchError: HTTP error or failure while receiving the body.
            FilesystemError: The destination file could not be written.
        """
        url = self.file_url(filename)
        path = os.path.join(directory, filename)
        logger.debug("Downloading: %s", url)

        try:
            chunks = self._fetch(url)
        except tuf_exceptions.DownloadError as e:
            raise self._fetch_error(url, e) from e

        try:
            destination_file = open(path, "xb")  # noqa: SIM115
        except OSError as e:
            raise FilesystemError(f"Could not create {path}: {e}") from e

        with destination_file:
            try:
                for chunk in chunks:
                    destination_file.write(chunk)
            except tuf_exceptions.DownloadError as e:
                raise self._fetch_error(url, e) from e
            except OSError as e:
                raise FilesystemError(f"Could not write {path}: {e}") from e

        return path

    def fetch_metadata(self, directory: str) -> Dict[str, str]:
        """Download the latest metadata of every top-level role.

        Returns a dict of role name to local file path.
        """
        paths = {}
        for role in METADATA_ROLES:
            filename = self.resolve(role)
            paths[role] = self.download(filename, directory)

        return paths
