# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Configuration options for the trust root assembler."""

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_MIRROR = "https://tuf-repo-cdn.sigstore.dev"

# Top-level roles in the order they are fetched. Only timestamp is published
# under an unversioned name.
METADATA_ROLES: Tuple[str, ...] = ("root", "snapshot", "targets", "timestamp")
UNVERSIONED_ROLES: Tuple[str, ...] = ("timestamp",)


@dataclass
class AssemblerConfig:
    """Used to store assembler configuration.

    Args:
        mirror: Base URL of the TUF repository mirror. Metadata is expected
            directly under it and target files under ``targets/``.
        socket_timeout: Timeout in seconds for every HTTP request, used both
            for connecting and for the delay between received bytes.
        chunk_size: Chunk size in bytes used when downloading.
        trust_store_dir: Directory for the trust library's verified metadata
            and targets. It is wiped before initialization and removed when
            the run ends. If ``None`` a fresh temporary directory is used.
        app_user_agent: Application user agent, e.g. "MyApp/1.0.0". This will
            be prefixed to the assembler user agent.
    """

    mirror: str = DEFAULT_MIRROR
    socket_timeout: int = 30  # seconds
    chunk_size: int = 400000  # bytes
    trust_store_dir: Optional[str] = None
    app_user_agent: Optional[str] = None
