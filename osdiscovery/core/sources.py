"""
osdiscovery - Source Adapters

This module is the only place the discovery core touches the machine.
Strategies ask a SourceAdapter to run a command or read a file and get
raw bytes back, or a SourceError when the source is unavailable.
"""

from abc import ABC, abstractmethod
import logging
import os
from pathlib import Path
import subprocess

from .errors import SourceError

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """Access to external programs and files.

    Implementations never distinguish between "not found" and "failed":
    both surface as SourceError.
    """

    @abstractmethod
    def run_command(self, name: str, *args: str) -> bytes:
        """Run a program and return its standard output.

        Args:
            name: Program name, resolved through PATH
            *args: Program arguments

        Returns:
            Raw stdout bytes

        Raises:
            SourceError: If the program cannot be launched or exits non-zero
        """
        ...

    @abstractmethod
    def read_file(self, path: str) -> bytes:
        """Read a whole file.

        Args:
            path: Absolute file path

        Returns:
            Raw file content

        Raises:
            SourceError: If the file is missing or unreadable
        """
        ...


def _command_env() -> dict[str, str]:
    """Caller environment with the C locale, so tool labels stay untranslated."""
    return {**os.environ, "LC_ALL": "C"}


class SystemSource(SourceAdapter):
    """SourceAdapter backed by subprocess and the local filesystem."""

    def run_command(self, name: str, *args: str) -> bytes:
        command = [name, *args]
        try:
            result = subprocess.run(command, capture_output=True, env=_command_env())
        except OSError as e:
            logger.debug("cannot launch %s: %s", " ".join(command), e)
            raise SourceError(f"cannot run {name}") from e

        if result.returncode != 0:
            logger.debug("%s exited with status %d", " ".join(command), result.returncode)
            raise SourceError(f"{name} exited with status {result.returncode}")

        return result.stdout

    def read_file(self, path: str) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            logger.debug("cannot read %s: %s", path, e)
            raise SourceError(f"cannot read {path}") from e


def decode(data: bytes) -> str:
    """Decode source output as UTF-8, replacing undecodable bytes."""
    return data.decode("utf-8", errors="replace")
