# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Trust root assembly workflow.

``assemble()`` runs the whole pipeline once, from a clean slate:

  * the latest root, snapshot and targets metadata are resolved from the
    mirror listing and downloaded, together with ``timestamp.json``, into a
    temporary working repository
  * the downloaded root seeds a ``TrustInitializer``, which verifies the
    mirror with ``tuf.ngclient`` and downloads all target files
  * the verified targets are moved into the working repository, which is
    then archived, base64-encoded and embedded in a ``TrustRootManifest``

Any failure aborts the run with an ``AssemblyError``. Temporary directories
and the trust store are removed on every exit path.
"""

import contextlib
import json
import logging
import os
import tempfile
from typing import Optional

from tuf.ngclient import FetcherInterface
from tuf.ngclient.requests_fetcher import RequestsFetcher

from trustroot_assembler import __version__
from trustroot_assembler.config import AssemblerConfig
from trustroot_assembler.exceptions import FilesystemError
from trustroot_assembler.manifest import TrustRootManifest
from trustroot_assembler.mirror import Mirror
from trustroot_assembler.repository import (
    compress_directory,
    encode_base64,
    move_targets,
)
from trustroot_assembler.trust import TrustInitializer

logger = logging.getLogger(__name__)


def _temporary_directory(prefix: str) -> "tempfile.TemporaryDirectory[str]":
    try:
        return tempfile.TemporaryDirectory(prefix=prefix)
    except OSError as e:
        raise FilesystemError(
            f"Could not create temporary directory: {e}"
        ) from e


def assemble(
    config: Optional[AssemblerConfig] = None,
    fetcher: Optional[FetcherInterface] = None,
) -> TrustRootManifest:
    """Build a ``TrustRootManifest`` for the mirror in ``config``.

    Args:
        config: ``Optional``; assembler configuration. Default is
            ``AssemblerConfig()``.
        fetcher: ``Optional``; ``FetcherInterface`` used for every download.
            Default is a ``RequestsFetcher`` configured from ``config``.

    Raises:
        AssemblyError: Any stage of the pipeline failed.
    """
    config = config or AssemblerConfig()
    if fetcher is None:
        fetcher = RequestsFetcher(
            socket_timeout=config.socket_timeout,
            chunk_size=config.chunk_size,
            app_user_agent=config.app_user_agent
            or f"trustroot-assembler/{__version__}",
        )

    mirror = Mirror(config.mirror, fetcher)

    with contextlib.ExitStack() as stack:
        working_repository = stack.enter_context(
            _temporary_directory("tuf-repository-")
        )
        scratch_dir = stack.enter_context(_temporary_directory("trustroot-"))

        trust_store_dir = config.trust_store_dir
        if trust_store_dir is None:
            trust_store_dir = os.path.join(scratch_dir, "trust-store")
        initializer = TrustInitializer(mirror.url, trust_store_dir, fetcher)
        stack.callback(initializer.cleanup)

        logger.info("Assembling trust root from mirror %s", mirror.url)
        paths = mirror.fetch_metadata(working_repository)
        root_path = paths["root"]
        logger.info(
            "mirror %s, root %s",
            mirror.url,
            mirror.file_url(os.path.basename(root_path)),
        )

        try:
            with open(root_path, "rb") as f:
                root = f.read()
        except OSError as e:
            raise FilesystemError(f"Could not read {root_path}: {e}") from e

        initializer.initialize(root)
        status = initializer.get_status()
        logger.info(
            "Root status: %s", json.dumps(status.to_dict(), indent=2)
        )

        move_targets(initializer.targets_dir, working_repository)

        archive_path = os.path.join(scratch_dir, "repository.tar.gz")
        compress_directory(working_repository, archive_path)

        return TrustRootManifest.create(
            mirror.url,
            root=encode_base64(root_path),
            mirror_fs=encode_base64(archive_path),
        )
