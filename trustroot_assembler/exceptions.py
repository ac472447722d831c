# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""
Define the exceptions raised by the trust root assembly pipeline.
Every failure is fatal for a run, so all of them derive from AssemblyError
and the command line front end only needs to handle that one class.
"""

from typing import Optional


class AssemblyError(Exception):
    """An error that aborts assembling the trust root."""


#### Mirror errors ####


class DiscoveryError(AssemblyError):
    """The mirror listing could not be read or contains no usable metadata
    file for a role.
    """


class FetchError(AssemblyError):
    """A metadata file could not be downloaded from the mirror.

    Args:
        message: Description of the failure
        url: URL that was being downloaded
        status_code: HTTP status code, if the server answered with one
    """

    def __init__(
        self, message: str, url: str, status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


#### Local errors ####


class TrustInitializationError(AssemblyError):
    """The trust library rejected the root metadata or failed to update."""


class FilesystemError(AssemblyError):
    """A required file or directory could not be created, moved or removed."""


class PackagingError(AssemblyError):
    """The repository archive or the encoded artifacts could not be made."""
