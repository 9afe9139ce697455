"""
osdiscovery - Package Catalog Registry

Maps distribution identifiers to the PackageCatalog class that knows how
to list packages on them.
"""

import inspect
from typing import Optional, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from .packages import PackageCatalog


class CatalogRegistry:
    """Registry of package catalog classes keyed by family and distribution.

    Example:
        registry = CatalogRegistry()
        registry.register(YumCatalog)

        catalog_class = registry.get_catalog("centos")
        packages = catalog_class().list_packages()
    """

    def __init__(self) -> None:
        """Initialize an empty catalog registry."""
        self._families: dict[str, Type["PackageCatalog"]] = {}
        self._distributions: dict[str, Type["PackageCatalog"]] = {}

    def register(self, catalog_class: Type["PackageCatalog"]) -> None:
        """Register a catalog class under its family name and distributions.

        Args:
            catalog_class: A class that inherits from PackageCatalog

        Raises:
            TypeError: If catalog_class is not a PackageCatalog subclass
            ValueError: If the family or one of its distributions is taken
        """
        from .packages import PackageCatalog

        if not inspect.isclass(catalog_class):
            raise TypeError(f"Expected a class, got {type(catalog_class).__name__}")

        if not issubclass(catalog_class, PackageCatalog):
            raise TypeError(
                f"Catalog class must inherit from PackageCatalog, "
                f"got {catalog_class.__name__}"
            )

        family = catalog_class.name
        if family in self._families:
            raise ValueError(
                f"Package family '{family}' is already registered "
                f"({self._families[family].__name__})"
            )

        for distribution in catalog_class.distributions:
            if distribution in self._distributions:
                raise ValueError(
                    f"Distribution '{distribution}' already has a catalog "
                    f"({self._distributions[distribution].__name__})"
                )

        self._families[family] = catalog_class
        for distribution in catalog_class.distributions:
            self._distributions[distribution] = catalog_class

    def unregister(self, family: str) -> None:
        """Remove a catalog family from the registry.

        Raises:
            KeyError: If the family is not registered
        """
        if family not in self._families:
            raise KeyError(f"Package family '{family}' is not registered")

        catalog_class = self._families.pop(family)
        for distribution in catalog_class.distributions:
            self._distributions.pop(distribution, None)

    def get_catalog(self, distribution: str) -> Optional[Type["PackageCatalog"]]:
        """Get the catalog class for a distribution.

        Args:
            distribution: Normalized distribution identifier

        Returns:
            The catalog class if one handles the distribution, None otherwise
        """
        return self._distributions.get(distribution)

    def get_family(self, family: str) -> Optional[Type["PackageCatalog"]]:
        """Get a catalog class by its family name."""
        return self._families.get(family)

    def get_families(self) -> list[str]:
        """Get a sorted list of registered family names."""
        return sorted(self._families)

    def __len__(self) -> int:
        """Return the number of registered families."""
        return len(self._families)

    def __contains__(self, family: str) -> bool:
        """Check if a family is registered."""
        return family in self._families


_REGISTRY = CatalogRegistry()


def register_catalog(cls: Type["PackageCatalog"]) -> Type["PackageCatalog"]:
    """Decorator registering a catalog class with the default registry."""
    _REGISTRY.register(cls)
    return cls


def default_registry() -> CatalogRegistry:
    """Return the registry populated by @register_catalog."""
    from .. import catalogs  # noqa: F401

    return _REGISTRY
