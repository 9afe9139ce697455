"""Shared fixtures for osdiscovery tests."""

import sys
from pathlib import Path
from typing import Optional, Union

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from osdiscovery.core.errors import SourceError
from osdiscovery.core.sources import SourceAdapter

StubValue = Union[bytes, str, Exception]


class StubSource(SourceAdapter):
    """In-memory SourceAdapter.

    Commands are keyed by (name, *args), files by path. A value may be
    bytes, str, or an exception to raise. Anything not stubbed fails like
    a missing source. Every call is recorded in `calls`.
    """

    def __init__(
        self,
        commands: Optional[dict[tuple[str, ...], StubValue]] = None,
        files: Optional[dict[str, StubValue]] = None,
    ) -> None:
        self.commands = dict(commands or {})
        self.files = dict(files or {})
        self.calls: list[tuple[str, ...]] = []

    def run_command(self, name: str, *args: str) -> bytes:
        key = (name, *args)
        self.calls.append(key)
        return self._resolve(self.commands.get(key), " ".join(key))

    def read_file(self, path: str) -> bytes:
        self.calls.append(("read", path))
        return self._resolve(self.files.get(path), path)

    @staticmethod
    def _resolve(value: Optional[StubValue], what: str) -> bytes:
        if value is None:
            raise SourceError(f"no stub for {what}")
        if isinstance(value, Exception):
            raise value
        if isinstance(value, str):
            return value.encode("utf-8")
        return value


@pytest.fixture
def stub_source():
    """Factory building a StubSource from command and file maps."""
    def factory(
        commands: Optional[dict[tuple[str, ...], StubValue]] = None,
        files: Optional[dict[str, StubValue]] = None,
    ) -> StubSource:
        return StubSource(commands=commands, files=files)

    return factory


@pytest.fixture
def healthy_source(stub_source):
    """A SLES 12 host where every attribute resolves."""
    return stub_source(
        commands={
            ("uname", "-m"): "x86_64\n",
            ("uname", "-r"): "4.4.21-69-default\n",
            ("hostname", "-f"): "db01.example.com\n",
        },
        files={
            "/etc/issue": "unknown 8 \n \\l",
            "/etc/redhat-release": "unknown 8 \n \\l",
            "/etc/SuSE-release": (
                "SUSE Linux Enterprise\n"
                "VERSION = 12\n"
                "PATCHLEVEL = 0\n"
                "# This file is deprecated\n"
            ),
        },
    )
