"""
osdiscovery - Error Taxonomy

Every failure raised by the discovery core derives from DiscoveryError.
The Unknown* errors form the closed set a caller can receive from the
query functions; SourceError is what a source adapter raises when a file
or command is unavailable.
"""


class DiscoveryError(Exception):
    """Base class for all discovery failures."""

    message = "discovery failed"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.message)


class SourceError(DiscoveryError):
    """A file could not be read or a command could not be run."""

    message = "source unavailable"


class UnknownDistributionError(DiscoveryError):
    message = "unknown distribution"


class UnknownReleaseError(DiscoveryError):
    message = "unknown release"


class UnknownArchitectureError(DiscoveryError):
    message = "unknown architecture"


class UnknownKernelError(DiscoveryError):
    message = "unknown kernel"


class UnknownFqdnError(DiscoveryError):
    message = "unknown fqdn"


class UnsupportedDistributionError(DiscoveryError):
    """No package catalog is registered for the distribution."""

    message = "no package catalog for distribution"
