# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Bootstrap a verified local trust store with ``tuf.ngclient``.

All verification (root chain, timestamp, snapshot and targets consistency,
target hashes) is done by ``tuf.ngclient.Updater``. ``TrustInitializer``
only prepares the trust store directory, runs the update, downloads every
target named by the top-level targets metadata and reports what ended up
in the store.

Trust store layout::

    <trust_store_dir>/
        metadata/   root.json, timestamp.json, snapshot.json, targets.json
        targets/    one file per target
"""

import logging
import os
import shutil
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from tuf.api import exceptions as tuf_exceptions
from tuf.api.metadata import Metadata, Root, Snapshot, Targets, Timestamp
from tuf.api.serialization import DeserializationError
from tuf.ngclient import FetcherInterface, Updater

from trustroot_assembler.exceptions import (
    FilesystemError,
    TrustInitializationError,
)

logger = logging.getLogger(__name__)

# Top level entries of a trust store
_STORE_ENTRIES = ("metadata", "targets")


@dataclass
class RoleStatus:
    """Version, expiry and file length of one trusted metadata file."""

    version: int
    expires: str
    length: int


@dataclass
class TrustStatus:
    """Contents of an initialized trust store."""

    mirror: str
    metadata: Dict[str, RoleStatus] = field(default_factory=dict)
    targets: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TrustInitializer:
    """Initializes a trust store from a root document and a mirror.

    Args:
        mirror_url: Base URL of the mirror. Metadata is downloaded from it
            directly, target files from its ``targets/`` path.
        trust_store_dir: Directory owned by this initializer. It is deleted
            by ``initialize()`` and ``cleanup()``, which refuse to touch a
            directory holding anything but ``metadata/`` and ``targets/``.
        fetcher: ``Optional``; ``FetcherInterface`` passed on to the
            ``Updater``. Default is the ``Updater`` default fetcher.
    """

    def __init__(
        self,
        mirror_url: str,
        trust_store_dir: str,
        fetcher: Optional[FetcherInterface] = None,
    ):
        self.mirror_url = mirror_url.rstrip("/")
        self.trust_store_dir = trust_store_dir
        self._fetcher = fetcher
        self._initialized = False

    @property
    def metadata_dir(self) -> str:
        return os.path.join(self.trust_store_dir, "metadata")

    @property
    def targets_dir(self) -> str:
        """Directory the verified target files are downloaded into."""
        return os.path.join(self.trust_store_dir, "targets")

    def _check_store(self) -> None:
        entries = set(os.listdir(self.trust_store_dir))
        unknown = entries - set(_STORE_ENTRIES)
        if unknown:
            raise FilesystemError(
                f"Refusing to remove {self.trust_store_dir}: not a trust "
                f"store (contains {', '.join(sorted(unknown))})"
            )

    def cleanup(self) -> None:
        """Remove the trust store directory if it exists.

        Only a directory holding nothing but ``metadata/`` and ``targets/``
        is removed.

        Raises:
            FilesystemError: The path is not a trust store or could not be
                removed.
        """
        try:
            self._check_store()
            shutil.rmtree(self.trust_store_dir)
        except FileNotFoundError:
            pass
        except NotADirectoryError as e:
            raise FilesystemError(
                f"Refusing to remove {self.trust_store_dir}: not a directory"
            ) from e
        except OSError as e:
            raise FilesystemError(
                f"Could not remove trust store {self.trust_store_dir}: {e}"
            ) from e

    def _prepare(self) -> None:
        self.cleanup()
        try:
            os.makedirs(self.metadata_dir)
            os.makedirs(self.targets_dir)
        except OSError as e:
            raise FilesystemError(
                f"Could not create trust store {self.trust_store_dir}: {e}"
            ) from e

    def initialize(self, root: bytes) -> None:
        """Bootstrap the trust store from ``root`` and the mirror.

        Refreshes all top-level metadata and downloads every target of the
        top-level targets role into ``targets_dir``.

        Raises:
            FilesystemError: The trust store could not be prepared.
            TrustInitializationError: The trust library failed to verify or
                download metadata or targets.
        """
        self._initialized = False
        self._prepare()

        try:
            updater = Updater(
                metadata_dir=self.metadata_dir,
                metadata_base_url=f"{self.mirror_url}/",
                target_dir=self.targets_dir,
                target_base_url=f"{self.mirror_url}/targets/",
                fetcher=self._fetcher,
                bootstrap=root,
            )
            updater.refresh()

            _, targets = self._load(Targets.type)
            for target_path in targets.signed.targets:
                targetinfo = updater.get_targetinfo(target_path)
                if targetinfo is None:
                    raise tuf_exceptions.RepositoryError(
                        f"Target {target_path} vanished during update"
                    )
                path = updater.download_target(targetinfo)
                logger.info("Downloaded target %s to %s", target_path, path)
        except (
            OSError,
            ValueError,
            DeserializationError,
            tuf_exceptions.DownloadError,
            tuf_exceptions.RepositoryError,
        ) as e:
            raise TrustInitializationError(
                f"Could not initialize TUF from {self.mirror_url}: {e}"
            ) from e

        self._initialized = True

    def _load(self, rolename: str) -> Tuple[str, Metadata]:
        """Return path and deserialized content of a trusted metadata file."""
        path = os.path.join(self.metadata_dir, f"{rolename}.json")
        return path, Metadata.from_file(path)

    def get_status(self) -> TrustStatus:
        """Return the status of the initialized trust store.

        Raises:
            TrustInitializationError: ``initialize()`` has not succeeded or
                the stored metadata cannot be read.
        """
        if not self._initialized:
            raise TrustInitializationError("Trust store is not initialized")

        status = TrustStatus(mirror=self.mirror_url)
        try:
            for role in (Root, Timestamp, Snapshot, Targets):
                path, md = self._load(role.type)
                status.metadata[role.type] = RoleStatus(
                    version=md.signed.version,
                    expires=md.signed.expires.isoformat(),
                    length=os.path.getsize(path),
                )
            status.targets = sorted(os.listdir(self.targets_dir))
        except (OSError, DeserializationError) as e:
            raise TrustInitializationError(
                f"Could not read trust store status: {e}"
            ) from e

        return status
