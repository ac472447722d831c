# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Find the authoritative versioned metadata files in a mirror listing.

A mirror publishes every version of root, snapshot and targets metadata as
``<version>.<role>.json``. The listing page is treated as opaque text: any
line containing such a filename contributes a candidate, and the candidate
with the highest version wins.
"""

import logging
import re
from typing import Iterable, List, Tuple

from trustroot_assembler.exceptions import DiscoveryError

logger = logging.getLogger(__name__)

_VERSION_PREFIX = re.compile(r"^(\d+)\.")


def list_metadata_filenames(listing: str, suffix: str) -> List[str]:
    """Return versioned filenames ending in ``suffix`` found in ``listing``.

    Every line is searched for ``<digits>.<suffix>``; the first match of a
    line is collected.

    Args:
        listing: Body of the mirror's directory listing.
        suffix: Role filename without version, e.g. ``root.json``.

    Raises:
        DiscoveryError: No line of the listing matches.
    """
    pattern = re.compile(rf"\d+\.{re.escape(suffix)}")

    filenames = []
    for line in listing.splitlines():
        match = pattern.search(line)
        if match:
            filenames.append(match.group(0))

    if not filenames:
        raise DiscoveryError(
            f"No metadata files matching pattern {suffix} found in mirror "
            "listing"
        )

    logger.debug("Metadata files found for %s: %s", suffix, filenames)
    return filenames


def _version_key(filename: str) -> Tuple[int, str]:
    match = _VERSION_PREFIX.match(filename)
    if match is None:
        raise DiscoveryError(f"Metadata file {filename} has no version prefix")
    return int(match.group(1)), filename


def latest_metadata_name(candidates: Iterable[str]) -> str:
    """Return the candidate filename with the highest version number.

    Versions are compared as integers, so ``10.root.json`` is newer than
    ``9.root.json``.

    Raises:
        DiscoveryError: ``candidates`` is empty or contains a filename
            without a version prefix.
    """
    names = list(candidates)
    if not names:
        raise DiscoveryError("No metadata file candidates to choose from")

    return max(names, key=_version_key)
