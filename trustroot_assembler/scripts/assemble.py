#!/usr/bin/env python

# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Command line interface: print a TrustRoot resource for a TUF mirror.

Example::

    $ trustroot-assemble --mirror https://tuf-repo-cdn.sigstore.dev > trustroot.yaml
"""

import argparse
import logging
import sys
from typing import List, Optional

from trustroot_assembler import __version__
from trustroot_assembler.assembler import assemble
from trustroot_assembler.config import DEFAULT_MIRROR, AssemblerConfig
from trustroot_assembler.exceptions import AssemblyError

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Assemble a Sigstore TrustRoot resource from a TUF mirror"
    )

    parser.add_argument(
        "--mirror",
        default=DEFAULT_MIRROR,
        help=f"Sigstore TUF repository mirror (default: {DEFAULT_MIRROR})",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=AssemblerConfig.socket_timeout,
        help="Timeout in seconds for each HTTP request",
    )
    parser.add_argument(
        "--trust-store-dir",
        help="Directory for the local trust store. It is deleted before and "
        "after the run, so it must be missing, empty or a previous trust "
        "store (default: a temporary directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the TrustRoot to this file instead of standard output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        help="Output verbosity level (-v, -vv, ...)",
        action="count",
        default=0,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Assemble the trust root and print it. Returns the exit code."""
    args = _parse_args(argv)

    if args.verbose == 0:
        loglevel = logging.ERROR
    elif args.verbose == 1:
        loglevel = logging.WARNING
    elif args.verbose == 2:
        loglevel = logging.INFO
    else:
        loglevel = logging.DEBUG

    logging.basicConfig(level=loglevel, format="%(levelname)s: %(message)s")

    config = AssemblerConfig(
        mirror=args.mirror,
        socket_timeout=args.timeout,
        trust_store_dir=args.trust_store_dir,
    )

    try:
        manifest = assemble(config)
    except AssemblyError as e:
        logger.error("Failed to assemble trust root: %s", e)
        return 1

    document = manifest.to_yaml()
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(document)
        except OSError as e:
            logger.error("Could not write %s: %s", args.output, e)
            return 1
    else:
        sys.stdout.write(document)

    return 0


if __name__ == "__main__":
    sys.exit(main())
