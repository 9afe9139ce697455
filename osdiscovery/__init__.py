"""
osdiscovery

Identifies the Linux distribution, release, kernel, architecture and
hostname of the running machine, and lists its installed packages.
"""

__version__ = "1.0.0"
__author__ = "osdiscovery Project"

from .core import (
    DiscoveryError,
    SourceError,
    UnknownArchitectureError,
    UnknownDistributionError,
    UnknownFqdnError,
    UnknownKernelError,
    UnknownReleaseError,
    UnsupportedDistributionError,
    SourceAdapter,
    SystemSource,
    OsInfo,
    Package,
    get,
    get_architecture,
    get_distribution_release,
    get_fqdn,
    get_kernel,
    get_packages,
)

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
    "OsInfo",
    "Package",
    "get",
    "get_architecture",
    "get_distribution_release",
    "get_fqdn",
    "get_kernel",
    "get_packages",
]
