# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Lay out, package and encode the working repository.

The working repository holds the top-level metadata files fetched from the
mirror and, once ``move_targets()`` has run, a ``targets/`` directory with
the verified target files. ``compress_directory()`` turns it into a
``.tar.gz`` whose member names are relative to the repository root, so it
extracts back into the same layout.
"""

import base64
import logging
import os
import tarfile
from typing import Iterator

from trustroot_assembler.exceptions import FilesystemError, PackagingError

logger = logging.getLogger(__name__)

TARGETS_DIRNAME = "targets"


def move_targets(source: str, working_repository: str) -> str:
    """Move the ``source`` targets directory into ``working_repository``.

    This is a rename: ``source`` does not exist afterwards.

    Raises:
        FilesystemError: ``source`` is not a directory, the destination
            already exists or the rename failed.
    """
    destination = os.path.join(working_repository, TARGETS_DIRNAME)

    if not os.path.isdir(source):
        raise FilesystemError(f"Targets directory {source} does not exist")
    if os.path.lexists(destination):
        raise FilesystemError(f"Destination {destination} already exists")

    try:
        os.rename(source, destination)
    except OSError as e:
        raise FilesystemError(
            f"Failed to move {source} to {destination}: {e}"
        ) from e

    logger.debug("Moved %s to %s", source, destination)
    return destination


def _walk(root: str, relpath: str = "") -> Iterator[str]:
    """Yield paths below ``root`` relative to it, depth-first, in lexical
    order, parents before children."""
    with os.scandir(os.path.join(root, relpath)) as entries:
        names = sorted(entry.name for entry in entries)

    for name in names:
        child = os.path.join(relpath, name) if relpath else name
        yield child
        full_path = os.path.join(root, child)
        if os.path.isdir(full_path) and not os.path.islink(full_path):
            yield from _walk(root, child)


def compress_directory(src: str, dst: str) -> None:
    """Write the contents of directory ``src`` as a gzip tar to ``dst``.

    Every file and directory below ``src`` becomes a member named by its
    path relative to ``src``; ``src`` itself is not included. An empty
    ``src`` produces a valid empty archive.

    Raises:
        PackagingError: ``src`` is not a directory or writing failed.
    """
    if not os.path.isdir(src):
        raise PackagingError(f"Cannot archive {src}: not a directory")

    try:
        with tarfile.open(dst, "w:gz") as archive:
            for relpath in _walk(src):
                archive.add(
                    os.path.join(src, relpath), arcname=relpath, recursive=False
                )
    except (OSError, tarfile.TarError) as e:
        raise PackagingError(f"Failed to archive {src} to {dst}: {e}") from e

    logger.info("Archived %s (%d bytes)", src, os.path.getsize(dst))


def encode_base64(path: str) -> str:
    """Return the standard base64 encoding of the contents of ``path``.

    Raises:
        PackagingError: The file could not be read.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise PackagingError(f"Could not base64-encode {path}: {e}") from e

    return base64.b64encode(data).decode("ascii")
