"""
Ruff formatter for Python code.
"""

from __future__ import annotations

import subprocess

from ..config import FormatterConfig
from .base import Formatter, FormattingFailed


class RuffFormatter(Formatter):
    """Formatter running ``ruff format`` on stdin."""

    tool = "ruff"

    def _detect(self) -> bool:
        try:
            result = subprocess.run(
                ["ruff", "--version"],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (subprocess.SubprocessError, FileNotFoundError):
            return False
        return result.returncode == 0

    def _format(self, code: str, config: FormatterConfig) -> str:
        cmd = ["ruff", "format", "--stdin-filename", "code.py"]

        if config.line_length:
            cmd.extend(["--line-length", str(config.line_length)])

        if config.target_version:
            cmd.extend(["--target-version", config.target_version])

        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.SubprocessError as e:
            raise FormattingFailed(f"ruff format did not complete: {e}") from e

        if result.returncode != 0:
            raise FormattingFailed(result.stderr.strip())
        return result.stdout
