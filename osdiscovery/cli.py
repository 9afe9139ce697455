"""
osdiscovery - Command Line Interface

This module provides the CLI argument parsing and main entry point for
the discovery tool.
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

from .core.errors import DiscoveryError
from .core.inventory import OsInfo, get
from .core.packages import Package, PackageCatalog, get_packages, list_package_families
from .core.registry import default_registry
from .core.sources import SourceAdapter, SystemSource
from .logging_config import setup_logging
from .output.json_formatter import JSONFormatter

logger = logging.getLogger(__name__)


class CLI:
    """Command Line Interface for the discovery tool.

    Handles argument parsing, runs the inventory and package listing, and
    writes the JSON report.
    """

    def __init__(self, source: Optional[SourceAdapter] = None) -> None:
        """Initialize the CLI.

        Args:
            source: Source adapter passed to every query (defaults to the
                local system)
        """
        self.args: Optional[argparse.Namespace] = None
        self.source = source or SystemSource()
        self.os_info: Optional[OsInfo] = None
        self.packages: Optional[list[Package]] = None
        self._warnings: list[str] = []

    def parse_args(self, argv: Optional[list[str]] = None) -> argparse.Namespace:
        """Parse command line arguments.

        Args:
            argv: Command line arguments (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace
        """
        parser = argparse.ArgumentParser(
            prog="osdiscovery",
            description="Linux host discovery: distribution, kernel, architecture, hostname and packages",
            epilog="Exit codes: 0=success, 1=error, 2=report written without packages"
        )

        parser.add_argument(
            "--output", "-o",
            type=str,
            default=None,
            help="Output file path (default: stdout)"
        )

        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Log every probed source to stderr"
        )

        parser.add_argument(
            "--pretty",
            action="store_true",
            help="Pretty-print JSON output with indentation"
        )

        parser.add_argument(
            "--packages",
            action="store_true",
            help="Include the list of installed packages"
        )

        parser.add_argument(
            "--package-family",
            type=str,
            default=None,
            help=(
                "Package family override (e.g., yum). "
                "Defaults to the family of the detected distribution"
            ),
        )

        self.args = parser.parse_args(argv)
        return self.args

    def _resolve_catalog(self) -> Optional[type[PackageCatalog]]:
        """Return the catalog class forced by --package-family, if any.

        Raises:
            ValueError: If the requested family is not registered
        """
        if self.args is None or not self.args.package_family:
            return None

        catalog_class = default_registry().get_family(self.args.package_family)
        if catalog_class is None:
            available = ", ".join(list_package_families())
            raise ValueError(
                f"Unknown package family '{self.args.package_family}'. "
                f"Available families: {available}"
            )
        return catalog_class

    def collect(self) -> OsInfo:
        """Run the inventory and, when requested, the package listing.

        A failed package listing is recorded as a warning; a failed
        inventory propagates.

        Returns:
            The collected OsInfo
        """
        catalog_class = self._resolve_catalog()

        self.os_info = get(self.source)

        if self.args and self.args.packages:
            try:
                if catalog_class is not None:
                    self.packages = catalog_class(self.source).list_packages()
                else:
                    self.packages = get_packages(self.source, self.os_info.distribution)
            except DiscoveryError as e:
                logger.debug("package listing failed", exc_info=True)
                self._warnings.append(f"Package list unavailable: {e}")

        return self.os_info

    def print_warnings(self) -> None:
        """Print any collection warnings to stderr."""
        for warning in self._warnings:
            print(f"WARNING: {warning}", file=sys.stderr)

    def write_report(self) -> int:
        """Write the JSON report to the requested destination.

        Returns:
            Exit code (0=written, 1=output error)
        """
        if self.os_info is None:
            raise RuntimeError("Nothing collected; call collect() first")

        formatter = JSONFormatter(pretty=self.args.pretty if self.args else False)

        try:
            if self.args and self.args.output:
                output_path = Path(self.args.output)
                formatter.write_to_file(output_path, self.os_info, self.packages)
                logger.info("report written to %s", output_path)
            else:
                formatter.write_to_stdout(self.os_info, self.packages)
        except BrokenPipeError:
            # Common when piping to tools like `head`; treat as graceful termination.
            return 0
        except (OSError, UnicodeError) as e:
            print(f"Error writing report: {e}", file=sys.stderr)
            return 1

        return 0

    def main(self, argv: Optional[list[str]] = None) -> int:
        """Main entry point for the CLI.

        Args:
            argv: Command line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code (0=success, 1=error, 2=warnings)
        """
        try:
            self.parse_args(argv)
            setup_logging(verbose=self.args.verbose if self.args else False)

            self.collect()
            self.print_warnings()

            exit_code = self.write_report()
            if exit_code != 0:
                return exit_code

            if self._warnings:
                return 2

            return 0

        except DiscoveryError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print("\nDiscovery interrupted by user", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            if self.args and self.args.verbose:
                traceback.print_exc()
            return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the discovery CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=warnings)
    """
    cli = CLI()
    return cli.main(argv)


if __name__ == "__main__":
    sys.exit(main())
