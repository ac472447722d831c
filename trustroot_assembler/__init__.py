# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Assemble a Sigstore ``TrustRoot`` resource from a TUF repository mirror."""

# If updating version, also update it in setup.py
__version__ = "0.1.0"

from trustroot_assembler.assembler import assemble  # noqa: E402
from trustroot_assembler.config import AssemblerConfig  # noqa: E402
from trustroot_assembler.manifest import TrustRootManifest  # noqa: E402
from trustroot_assembler.mirror import Mirror  # noqa: E402
from trustroot_assembler.trust import TrustInitializer, TrustStatus  # noqa: E402

__all__ = [
    AssemblerConfig.__name__,
    Mirror.__name__,
    TrustInitializer.__name__,
    TrustRootManifest.__name__,
    TrustStatus.__name__,
    assemble.__name__,
]
