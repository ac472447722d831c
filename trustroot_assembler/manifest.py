# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Render the Sigstore policy-controller ``TrustRoot`` resource.

The resource embeds a TUF repository for the policy-controller: the trusted
root metadata and a gzip tar of the mirror's files, both base64-encoded::

    apiVersion: policy.sigstore.dev/v1alpha1
    kind: TrustRoot
    metadata:
      name: tuf-repo-cdn.sigstore.dev-1729300000
    spec:
      repository:
        root: |-
          <base64>
        mirrorFS: |-
          <base64>
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

API_VERSION = "policy.sigstore.dev/v1alpha1"
KIND = "TrustRoot"

_SCHEME_PREFIX = "https://"


class _LiteralStr(str):
    """A string dumped as a literal block scalar."""


class _ManifestDumper(yaml.SafeDumper):
    pass


def _represent_literal(dumper: yaml.SafeDumper, data: str) -> yaml.Node:
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")


_ManifestDumper.add_representer(_LiteralStr, _represent_literal)


def manifest_name(mirror: str, timestamp: int) -> str:
    """Return the resource name for ``mirror`` generated at ``timestamp``.

    >>> manifest_name("https://tuf-repo-cdn.sigstore.dev", 1729300000)
    'tuf-repo-cdn.sigstore.dev-1729300000'
    """
    host = mirror
    if host.startswith(_SCHEME_PREFIX):
        host = host[len(_SCHEME_PREFIX) :]
    return f"{host.rstrip('/')}-{timestamp}"


@dataclass
class TrustRootManifest:
    """A ``TrustRoot`` resource.

    Attributes:
        name: Resource name.
        root: Base64 of the trusted root metadata.
        mirror_fs: Base64 of the gzip tar of the repository.
    """

    name: str
    root: str
    mirror_fs: str

    @classmethod
    def create(
        cls,
        mirror: str,
        root: str,
        mirror_fs: str,
        timestamp: Optional[int] = None,
    ) -> "TrustRootManifest":
        """Create a manifest for ``mirror``, named after the current time
        unless ``timestamp`` (Unix seconds) is given."""
        if timestamp is None:
            timestamp = int(time.time())
        return cls(manifest_name(mirror, timestamp), root, mirror_fs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiVersion": API_VERSION,
            "kind": KIND,
            "metadata": {"name": self.name},
            "spec": {
                "repository": {
                    "root": _LiteralStr(self.root),
                    "mirrorFS": _LiteralStr(self.mirror_fs),
                },
            },
        }

    def to_yaml(self) -> str:
        return yaml.dump(
            self.to_dict(),
            Dumper=_ManifestDumper,
            sort_keys=False,
            default_flow_style=False,
        )
