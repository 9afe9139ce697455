"""
osdiscovery - JSON Output Formatter

This module serializes an OsInfo record and an optional package list
into a JSON report.
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..core.inventory import OsInfo
from ..core.packages import Package


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder to handle datetime serialization."""

    def default(self, o: Any) -> Any:
        """Convert datetime objects to ISO format strings."""
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


class JSONFormatter:
    """Formatter for discovery results in JSON format.

    Example:
        formatter = JSONFormatter(pretty=True)
        print(formatter.format(get(), get_packages()))
    """

    SCHEMA_VERSION = "1.0"
    TOOL = "osdiscovery"

    def __init__(self, pretty: bool = False) -> None:
        """Initialize the JSON formatter.

        Args:
            pretty: If True, output formatted JSON with indentation
        """
        self._pretty = pretty

    def format(
        self,
        os_info: OsInfo,
        packages: Optional[list[Package]] = None,
    ) -> str:
        """Format discovery results as JSON.

        Args:
            os_info: System identity
            packages: Installed packages; the package sections are omitted
                when None

        Returns:
            JSON string
        """
        output = self._build_output(os_info, packages)

        if self._pretty:
            return json.dumps(output, cls=DateTimeEncoder, indent=2, sort_keys=False)
        else:
            return json.dumps(output, cls=DateTimeEncoder, separators=(',', ':'))

    def _build_output(
        self,
        os_info: OsInfo,
        packages: Optional[list[Package]],
    ) -> dict[str, Any]:
        output: dict[str, Any] = {
            "metadata": self._build_metadata(),
            "os": os_info.to_dict(),
        }
        if packages is not None:
            output["summary"] = self._build_summary(packages)
            output["packages"] = [package.to_dict() for package in packages]
        return output

    def _build_metadata(self) -> dict[str, Any]:
        return {
            "schema_version": self.SCHEMA_VERSION,
            "timestamp": datetime.now(timezone.utc),
            "tool": self.TOOL,
        }

    def _build_summary(self, packages: list[Package]) -> dict[str, Any]:
        """Build the package summary section.

        Args:
            packages: Listed packages

        Returns:
            Dictionary with total, official and local counts
        """
        official = sum(1 for p in packages if p.official)
        return {
            "total_packages": len(packages),
            "official": official,
            "local": len(packages) - official,
        }

    def write_to_file(
        self,
        output_path: Path,
        os_info: OsInfo,
        packages: Optional[list[Package]] = None,
    ) -> None:
        """Write the formatted report to a file."""
        output_path.write_text(self.format(os_info, packages), encoding='utf-8')

    def write_to_stdout(
        self,
        os_info: OsInfo,
        packages: Optional[list[Package]] = None,
    ) -> None:
        """Write the formatted report to stdout."""
        sys.stdout.write(self.format(os_info, packages))
        if self._pretty:
            sys.stdout.write('\n')
