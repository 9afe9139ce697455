"""
osdiscovery - Distribution Detection

Determines the (distribution, release) pair of the running system.

Sources are tried in a fixed order. The order matters: /etc/os-release is
trusted over lsb_release, and both over the legacy per-distribution
release files, several of which can coexist on one machine (a CentOS host
ships both /etc/centos-release and /etc/redhat-release).

Once a source has identified a distribution, a missing release is terminal
(UnknownReleaseError). An unrecognized distribution only falls through to
the next source.
"""

import logging
import re
from typing import Optional

from .errors import UnknownDistributionError, UnknownReleaseError
from .probe import first_match
from .sources import SourceAdapter, SystemSource, decode

logger = logging.getLogger(__name__)


DISTRIBUTIONS = frozenset({
    "ubuntu",
    "debian",
    "rhel",
    "centos",
    "fedora",
    "amzn",
    "sles",
    "suse",
})

# lsb_release "Distributor ID" values, lower-cased
LSB_DISTRIBUTORS: dict[str, str] = {
    "ubuntu": "ubuntu",
    "debian": "debian",
    "redhatenterpriseserver": "rhel",
    "redhatenterpriseworkstation": "rhel",
    "redhatenterpriseclient": "rhel",
    "redhatenterprise": "rhel",
    "scientific": "rhel",
    "scientificsl": "rhel",
    "centos": "centos",
    "fedora": "fedora",
    "amazonami": "amzn",
    "amazon": "amzn",
    "suse linux": "sles",
    "suse": "sles",
    "opensuse project": "suse",
    "opensuse": "suse",
}

# Leading product names of /etc/*-release free text
RELEASE_PRODUCTS: list[tuple[str, str]] = [
    ("Red Hat Enterprise Linux", "rhel"),
    ("Scientific Linux", "rhel"),
    ("CentOS", "centos"),
    ("Fedora", "fedora"),
    ("Amazon Linux", "amzn"),
]

# (vendor, product) pairs of /etc/system-release-cpe
CPE_PRODUCTS: dict[tuple[str, str], str] = {
    ("redhat", "enterprise_linux"): "rhel",
    ("centos", "centos"): "centos",
    ("centos", "linux"): "centos",
    ("fedoraproject", "fedora"): "fedora",
    ("amazon", "linux"): "amzn",
    ("amazon", "amazon_linux"): "amzn",
    ("suse", "sles"): "sles",
    ("suse", "sled"): "sles",
    ("opensuse", "leap"): "suse",
    ("opensuse", "opensuse"): "suse",
}

_RELEASE_NUMBER = re.compile(r"\d+(?:\.\d+)*")
_LSB_FIELD = re.compile(r"^[ \t]*(Distributor ID|Release)[ \t]*:[ \t]*(.*?)[ \t]*$", re.MULTILINE)
_SUSE_FIELD = re.compile(r"^[ \t]*([A-Z_]+)[ \t]*=[ \t]*(.*?)[ \t]*$", re.MULTILINE)


def parse_os_release(content: str) -> dict[str, str]:
    """Parse os-release content into a dictionary.

    Args:
        content: Text of an os-release file

    Returns:
        Parsed key/value map (upper-case keys as in file)
    """
    data: dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip().strip('"').strip("'")
        data[key.strip()] = value
    return data


def parse_lsb_release(content: str) -> dict[str, str]:
    """Parse `lsb_release -ir` output into {label: value}."""
    return {label: value.strip() for label, value in _LSB_FIELD.findall(content)}


def parse_suse_release(content: str) -> dict[str, str]:
    """Parse the KEY = VALUE lines of /etc/SuSE-release."""
    return {key: value.strip() for key, value in _SUSE_FIELD.findall(content)}


def release_number(text: str) -> Optional[str]:
    """Return the first integer-like token of text, if any."""
    match = _RELEASE_NUMBER.search(text)
    return match.group(0) if match else None


def from_os_release(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """/etc/os-release: ID and VERSION_ID."""
    data = parse_os_release(decode(source.read_file("/etc/os-release")))

    os_id = data.get("ID", "").lower()
    if not os_id:
        return None
    if os_id not in DISTRIBUTIONS:
        logger.debug("os-release: unrecognized ID %r", os_id)
        return None

    release = data.get("VERSION_ID", "")
    if not release:
        logger.debug("os-release: %s without VERSION_ID", os_id)
        raise UnknownReleaseError()

    return os_id, release


def from_lsb_release(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """`lsb_release -ir`: Distributor ID and Release."""
    fields = parse_lsb_release(decode(source.run_command("lsb_release", "-ir")))

    distributor = fields.get("Distributor ID", "")
    if not distributor:
        return None

    distribution = LSB_DISTRIBUTORS.get(distributor.lower())
    if distribution is None:
        logger.debug("lsb_release: unrecognized distributor %r", distributor)
        return None

    release = fields.get("Release", "")
    if not release or release.lower() == "n/a":
        logger.debug("lsb_release: %s without Release", distribution)
        raise UnknownReleaseError()

    return distribution, release


def from_debian_issue(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """/etc/issue: "Debian GNU/Linux <release> \\n \\l"."""
    tokens = decode(source.read_file("/etc/issue")).split()
    if not tokens or tokens[0] != "Debian":
        return None

    # skip the rest of the product name
    rest = tokens[2:] if tokens[1:2] == ["GNU/Linux"] else tokens[1:]
    if not rest or rest[0].startswith("\\"):
        logger.debug("issue: Debian without release")
        raise UnknownReleaseError()

    return "debian", rest[0]


def _from_release_text(content: str, path: str) -> Optional[tuple[str, str]]:
    text = content.strip()
    for product, distribution in RELEASE_PRODUCTS:
        if text.startswith(product):
            break
    else:
        return None

    release = release_number(text[len(product):])
    if release is None:
        logger.debug("%s: %s without release number", path, distribution)
        raise UnknownReleaseError()

    return distribution, release


def from_centos_release(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """/etc/centos-release free text."""
    path = "/etc/centos-release"
    return _from_release_text(decode(source.read_file(path)), path)


def from_redhat_release(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """/etc/redhat-release free text."""
    path = "/etc/redhat-release"
    return _from_release_text(decode(source.read_file(path)), path)


def from_suse_release(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """/etc/SuSE-release: product line followed by a KEY = VALUE block."""
    content = decode(source.read_file("/etc/SuSE-release"))

    if "SUSE Linux Enterprise" in content:
        distribution = "sles"
    elif "openSUSE" in content:
        distribution = "suse"
    else:
        return None

    fields = parse_suse_release(content)
    version = fields.get("VERSION", "")
    if not version:
        logger.debug("SuSE-release: %s without VERSION", distribution)
        raise UnknownReleaseError()

    patchlevel = fields.get("PATCHLEVEL", "")
    if patchlevel and patchlevel != "0":
        return distribution, f"{version}.{patchlevel}"
    return distribution, version


def from_system_release(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """/etc/system-release free text."""
    path = "/etc/system-release"
    return _from_release_text(decode(source.read_file(path)), path)


def from_system_release_cpe(source: SourceAdapter) -> Optional[tuple[str, str]]:
    """/etc/system-release-cpe: cpe:/o:vendor:product:version[:...]."""
    parts = decode(source.read_file("/etc/system-release-cpe")).strip().split(":")
    if len(parts) < 4 or parts[0] != "cpe":
        return None

    # CPE 2.3 carries the part ("o") as its own field
    if parts[1] == "2.3":
        fields = parts[3:]
    else:
        fields = parts[2:]

    if len(fields) < 2:
        return None

    distribution = CPE_PRODUCTS.get((fields[0].lower(), fields[1].lower()))
    if distribution is None:
        logger.debug("system-release-cpe: unrecognized %s:%s", fields[0], fields[1])
        return None

    release = fields[2] if len(fields) > 2 else ""
    if release in ("", "*", "-"):
        logger.debug("system-release-cpe: %s without version", distribution)
        raise UnknownReleaseError()

    return distribution, release


STRATEGIES = (
    from_os_release,
    from_lsb_release,
    from_debian_issue,
    from_centos_release,
    from_redhat_release,
    from_suse_release,
    from_system_release,
    from_system_release_cpe,
)


def get_distribution_release(source: Optional[SourceAdapter] = None) -> tuple[str, str]:
    """Detect the distribution and its release.

    Args:
        source: Source adapter (defaults to the local system)

    Returns:
        Tuple of (distribution, release)

    Raises:
        UnknownDistributionError: If no source identifies a known distribution
        UnknownReleaseError: If a distribution was identified without a release
    """
    return first_match(STRATEGIES, source or SystemSource(), UnknownDistributionError)
