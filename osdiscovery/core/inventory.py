"""
osdiscovery - Inventory

Assembles the full OsInfo record from the distribution detector and the
attribute probes.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .attributes import get_architecture, get_fqdn, get_kernel
from .distribution import get_distribution_release
from .sources import SourceAdapter, SystemSource


@dataclass(frozen=True)
class OsInfo:
    """Identity of the running system.

    Attributes:
        distribution: Normalized distribution identifier (e.g. "ubuntu")
        release: Distribution release as reported by the source
        architecture: Machine hardware name
        kernel: Kernel release
        fqdn: Fully-qualified hostname
    """
    distribution: str
    release: str
    architecture: str
    kernel: str
    fqdn: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for JSON serialization."""
        return {
            "distribution": self.distribution,
            "release": self.release,
            "architecture": self.architecture,
            "kernel": self.kernel,
            "fqdn": self.fqdn,
        }


def get(source: Optional[SourceAdapter] = None) -> OsInfo:
    """Collect the full system identity.

    Probes run in order (distribution, architecture, kernel, fqdn); the
    first failure propagates unchanged and nothing partial is returned.

    Args:
        source: Source adapter (defaults to the local system)

    Returns:
        OsInfo for the running system
    """
    source = source or SystemSource()

    distribution, release = get_distribution_release(source)
    architecture = get_architecture(source)
    kernel = get_kernel(source)
    fqdn = get_fqdn(source)

    return OsInfo(
        distribution=distribution,
        release=release,
        architecture=architecture,
        kernel=kernel,
        fqdn=fqdn,
    )
