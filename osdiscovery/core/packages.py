"""
osdiscovery - Package Catalog

Lists installed packages by running a package manager's bulk "info"
command and turning its output into Package records.

The pipeline is shared by every package family: the output is split on
blank lines into one block per package, then each block is scanned for
"Label : value" lines. Only the meaning of the captured fields differs
between families, so a family is a PackageCatalog subclass that declares
its command and labels and implements build_package().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
import re
from typing import Any, ClassVar, Optional

from .distribution import get_distribution_release
from .errors import UnsupportedDistributionError
from .registry import default_registry
from .sources import SourceAdapter, SystemSource, decode

logger = logging.getLogger(__name__)

_BLOCK_SEPARATOR = re.compile(r"(?:\r?\n[ \t]*){2,}")


@dataclass(frozen=True)
class Package:
    """One installed package.

    Attributes:
        name: Package name
        version: "[epoch:]version-release"
        architecture: Package architecture (e.g. "x86_64", "noarch")
        official: True if installed from a remote repository
    """
    name: str
    version: str
    architecture: str
    official: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert the package to a dictionary for JSON serialization."""
        return {
            "name": self.name,
            "version": self.version,
            "architecture": self.architecture,
            "official": self.official,
        }


def split_blocks(output: str) -> list[str]:
    """Split package manager output into per-package text blocks."""
    return [block for block in _BLOCK_SEPARATOR.split(output) if block.strip()]


def compose_version(fields: dict[str, str]) -> str:
    """Build "epoch:version-release", dropping the epoch when absent."""
    version = f"{fields.get('Version', '')}-{fields.get('Release', '')}"
    epoch = fields.get("Epoch", "")
    if epoch:
        return f"{epoch}:{version}"
    return version


class PackageCatalog(ABC):
    """Abstract base class for a package family.

    Example:
        @register_catalog
        class YumCatalog(PackageCatalog):
            name = "yum"
            distributions = ("rhel", "centos")
            command = ("yum", "info", "installed")
            labels = ("Name", "Arch", "Version", "Release", "From repo", "Epoch")

            def build_package(self, fields):
                ...
    """

    name: ClassVar[str] = ""  # Family identifier (e.g., "yum")
    distributions: ClassVar[tuple[str, ...]] = ()  # Distributions using this family
    command: ClassVar[tuple[str, ...]] = ()  # Bulk listing command
    labels: ClassVar[tuple[str, ...]] = ()  # Labels captured from each block

    _field_pattern: ClassVar[re.Pattern]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Validate the family declaration and compile its field pattern."""
        super().__init_subclass__(**kwargs)

        if not cls.name:
            raise ValueError(f"Catalog class {cls.__name__} must define 'name'")
        if not cls.command:
            raise ValueError(f"Catalog class {cls.__name__} must define 'command'")
        if "Name" not in cls.labels:
            raise ValueError(f"Catalog class {cls.__name__} must capture the 'Name' label")

        alternatives = "|".join(re.escape(label) for label in cls.labels)
        cls._field_pattern = re.compile(
            rf"^({alternatives})[ \t]*:[ \t]?(.*?)[ \t\r]*$", re.MULTILINE
        )

    def __init__(self, source: Optional[SourceAdapter] = None) -> None:
        """Initialize the catalog.

        Args:
            source: Source adapter used to run the listing command
        """
        self._source = source or SystemSource()

    def extract_fields(self, block: str) -> dict[str, str]:
        """Capture the known labels of one block; the last occurrence wins."""
        return {label: value for label, value in self._field_pattern.findall(block)}

    def parse(self, output: str) -> list[Package]:
        """Turn raw listing output into packages, in listing order.

        Blocks without a Name are skipped.
        """
        packages: list[Package] = []
        for block in split_blocks(output):
            fields = self.extract_fields(block)
            if not fields.get("Name"):
                continue
            packages.append(self.build_package(fields))
        return packages

    def list_packages(self) -> list[Package]:
        """Run the listing command and parse its output.

        Raises:
            SourceError: If the listing command fails
        """
        output = decode(self._source.run_command(*self.command))
        packages = self.parse(output)
        logger.debug("%s: %d packages", self.name, len(packages))
        return packages

    @abstractmethod
    def build_package(self, fields: dict[str, str]) -> Package:
        """Build a Package from one block's captured fields.

        Args:
            fields: Map of label to raw value; always contains "Name"

        Returns:
            Package record
        """
        pass


def get_packages(
    source: Optional[SourceAdapter] = None,
    distribution: Optional[str] = None,
) -> list[Package]:
    """List installed packages.

    Args:
        source: Source adapter (defaults to the local system)
        distribution: Distribution whose package family to use; detected
            when omitted

    Returns:
        Packages in the package manager's listing order

    Raises:
        UnsupportedDistributionError: If no catalog handles the distribution
        SourceError: If the listing command fails
        UnknownDistributionError: If detection is needed and fails
        UnknownReleaseError: If detection is needed and fails
    """
    source = source or SystemSource()
    if distribution is None:
        distribution, _ = get_distribution_release(source)

    catalog_class = default_registry().get_catalog(distribution)
    if catalog_class is None:
        raise UnsupportedDistributionError(f"no package catalog for distribution '{distribution}'")

    return catalog_class(source).list_packages()


def get_catalog(distribution: str) -> Optional[type[PackageCatalog]]:
    """Return the catalog class handling a distribution, if any."""
    return default_registry().get_catalog(distribution)


def list_package_families() -> list[str]:
    """Return the names of all registered package families."""
    return default_registry().get_families()
