"""
osdiscovery - Attribute Probes

Architecture, kernel and hostname resolvers. Each one is an ordered
fallback over one or two sources and returns the trimmed source text.
"""

from typing import Optional

from .errors import UnknownArchitectureError, UnknownFqdnError, UnknownKernelError
from .probe import command_output, file_content, first_match
from .sources import SourceAdapter, SystemSource


ARCHITECTURE_STRATEGIES = (command_output("uname", "-m"),)

KERNEL_STRATEGIES = (command_output("uname", "-r"),)

FQDN_STRATEGIES = (
    command_output("hostname", "-f"),
    file_content("/etc/hostname"),
)


def get_architecture(source: Optional[SourceAdapter] = None) -> str:
    """Return the machine hardware name (`uname -m`).

    Raises:
        UnknownArchitectureError: If the command fails or prints nothing
    """
    return first_match(ARCHITECTURE_STRATEGIES, source or SystemSource(), UnknownArchitectureError)


def get_kernel(source: Optional[SourceAdapter] = None) -> str:
    """Return the kernel release (`uname -r`).

    Raises:
        UnknownKernelError: If the command fails or prints nothing
    """
    return first_match(KERNEL_STRATEGIES, source or SystemSource(), UnknownKernelError)


def get_fqdn(source: Optional[SourceAdapter] = None) -> str:
    """Return the fully-qualified hostname.

    `hostname -f` is tried first; /etc/hostname is read only when the
    command fails or prints nothing.

    Raises:
        UnknownFqdnError: If neither source yields a hostname
    """
    return first_match(FQDN_STRATEGIES, source or SystemSource(), UnknownFqdnError)
