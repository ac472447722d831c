# Copyright New York University and the TUF contributors
# SPDX-License-Identifier: MIT OR Apache-2.0

"""Test the trustroot-assemble command line interface."""

import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import Mock, patch

from tests import utils
from trustroot_assembler.config import DEFAULT_MIRROR
from trustroot_assembler.exceptions import DiscoveryError
from trustroot_assembler.manifest import TrustRootManifest
from trustroot_assembler.scripts import assemble as cli

MANIFEST = TrustRootManifest("mirror.example.test-1", "cm9vdA==", "ZnM=")


class TestCli(unittest.TestCase):
    @patch.object(cli, "assemble", return_value=MANIFEST)
    def test_prints_manifest(self, mock_assemble: Mock) -> None:
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            code = cli.main([])

        self.assertEqual(code, 0)
        self.assertEqual(stdout.getvalue(), MANIFEST.to_yaml())

        config = mock_assemble.call_args.args[0]
        self.assertEqual(config.mirror, DEFAULT_MIRROR)
        self.assertIsNone(config.trust_store_dir)

    @patch.object(cli, "assemble", return_value=MANIFEST)
    def test_options(self, mock_assemble: Mock) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            output = os.path.join(temp_dir, "trustroot.yaml")
            code = cli.main(
                [
                    "--mirror",
                    "https://mirror.example.test",
                    "--timeout",
                    "5",
                    "--trust-store-dir",
                    os.path.join(temp_dir, "store"),
                    "--output",
                    output,
                ]
            )
            self.assertEqual(code, 0)
            with open(output, encoding="utf-8") as f:
                self.assertEqual(f.read(), MANIFEST.to_yaml())

        config = mock_assemble.call_args.args[0]
        self.assertEqual(config.mirror, "https://mirror.example.test")
        self.assertEqual(config.socket_timeout, 5)
        self.assertTrue(config.trust_store_dir.endswith("store"))

    @patch.object(
        cli, "assemble", side_effect=DiscoveryError("no root.json found")
    )
    def test_failure_exit_code(self, mock_assemble: Mock) -> None:
        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertLogs(
            cli.logger, "ERROR"
        ) as logs:
            code = cli.main([])

        self.assertEqual(code, 1)
        self.assertEqual(stdout.getvalue(), "")
        self.assertIn("no root.json found", logs.output[0])
        mock_assemble.assert_called_once()

    def test_help(self) -> None:
        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertRaises(SystemExit) as cm:
            cli.main(["--help"])

        self.assertEqual(cm.exception.code, 0)
        self.assertIn("--mirror", stdout.getvalue())

    def test_bad_arguments(self) -> None:
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as cm:
            cli.main(["--timeout", "soon"])
        self.assertEqual(cm.exception.code, 2)


# Run unit test.
if __name__ == "__main__":
    utils.configure_test_logging(sys.argv)
    unittest.main()
