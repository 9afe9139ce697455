"""yum-based distributions (RHEL, CentOS, Fedora, Amazon Linux)."""

from ..core.packages import Package, PackageCatalog, compose_version
from ..core.registry import register_catalog

# "From repo" values recorded for packages that did not come from a repository
LOCAL_REPOS = frozenset({"local", "@commandline"})


def is_official_repo(repo: str) -> bool:
    """Whether a "From repo" value names a remote repository.

    `yum localinstall` records either "local" or the path of the rpm file.
    """
    if not repo:
        return False
    return repo not in LOCAL_REPOS and not repo.startswith("/")


@register_catalog
class YumCatalog(PackageCatalog):
    """Parses `yum info installed`."""

    name = "yum"
    distributions = ("rhel", "centos", "fedora", "amzn")
    command = ("yum", "info", "installed")
    labels = ("Name", "Arch", "Version", "Release", "From repo", "Epoch")

    def build_package(self, fields: dict[str, str]) -> Package:
        return Package(
            name=fields["Name"],
            version=compose_version(fields),
            architecture=fields.get("Arch", ""),
            official=is_official_repo(fields.get("From repo", "")),
        )
