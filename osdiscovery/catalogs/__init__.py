"""
osdiscovery - Package Catalogs

One module per package family. Importing this package registers every
family with the default catalog registry.
"""

# Import catalog modules to trigger registration
from . import yum  # noqa: F401
from .yum import YumCatalog

__all__ = [
    "YumCatalog",
]
