"""
osdiscovery - Core Module

This module contains the detection engine: source adapters, the ordered
fallback runner, the distribution detector, attribute probes, the package
catalog and the inventory aggregator.
"""

from .errors import (
    DiscoveryError,
    SourceError,
    UnknownArchitectureError,
    UnknownDistributionError,
    UnknownFqdnError,
    UnknownKernelError,
    UnknownReleaseError,
    UnsupportedDistributionError,
)
from .sources import SourceAdapter, SystemSource
from .distribution import get_distribution_release
from .attributes import get_architecture, get_fqdn, get_kernel
from .inventory import OsInfo, get
from .packages import (
    Package,
    PackageCatalog,
    get_catalog,
    get_packages,
    list_package_families,
)
from .registry import CatalogRegistry, register_catalog

__all__ = [
    "DiscoveryError",
    "SourceError",
    "UnknownArchitectureError",
    "UnknownDistributionError",
    "UnknownFqdnError",
    "UnknownKernelError",
    "UnknownReleaseError",
    "UnsupportedDistributionError",
    "SourceAdapter",
    "SystemSource",
    "get_distribution_release",
    "get_architecture",
    "get_fqdn",
    "get_kernel",
    "OsInfo",
    "get",
    "Package",
    "PackageCatalog",
    "get_catalog",
    "get_packages",
    "list_package_families",
    "CatalogRegistry",
    "register_catalog",
]
