"""
Integration test for CLI command invocation.

Runs the installed `docmerge` entry point as a subprocess.
"""

import os
import subprocess
import unittest

import pytest

COMMAND = "docmerge"


@pytest.mark.integration
class TestCLIIntegration(unittest.TestCase):
    """CLI integration test class."""

    def test_cli_help_invocation(self) -> None:
        """Test command line interface help flag."""
        rtn = os.system(f"{COMMAND} --help")
        self.assertEqual(0, rtn)

    def test_cli_version_series(self) -> None:
        """Test the version subcommand through the entry point."""
        result = subprocess.run(
            [COMMAND, "version", "--series", "8.1.0-SNAPSHOT"],
            capture_output=True,
            text=True,
        )
        self.assertEqual(0, result.returncode)
        self.assertEqual("8.1", result.stdout.strip())

    def test_cli_invalid_version(self) -> None:
        """Test that a malformed version exits with 1."""
        result = subprocess.run([COMMAND, "version", "1.2"], capture_output=True, text=True)
        self.assertEqual(1, result.returncode)


if __name__ == "__main__":
    unittest.main()
