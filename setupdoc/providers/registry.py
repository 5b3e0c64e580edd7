"""In-memory catalog of capability providers.

The registry indexes ``CapabilityDescriptor`` objects by name and by
category, manufactures provider instances on request, and answers pairwise
compatibility questions.  It never holds on to the instances it creates.

Registries are constructed explicitly and passed to the generator; there is
no module-level default so that independent compositions (tests in
particular) never share registrations.
"""

from __future__ import annotations

from itertools import combinations
from typing import Optional

from pydantic import BaseModel, Field

from setupdoc.config import ProjectConfig
from setupdoc.errors import RegistryError

from .contract import CapabilityDescriptor, CapabilityProvider, Category, supports


class CompatibilityConflict(BaseModel):
    """Two selected providers that refuse to be composed together."""

    a: str = Field(..., description="First provider name, in selection order")
    b: str = Field(..., description="Second provider name")
    reason: str = Field(default="Incompatible providers")


class ProviderRegistry:
    """Catalog of capability descriptors, organised by category."""

    REQUIRED_FIELDS: tuple[str, ...] = ("name", "display_name", "category")

    def __init__(self) -> None:
        self._descriptors: dict[str, CapabilityDescriptor] = {}
        self._categories: dict[Category, list[str]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    # -- Registration --------------------------------------------------------

    def register(self, descriptor: CapabilityDescriptor) -> "ProviderRegistry":
        """Add *descriptor* to the catalog.

        Raises:
            RegistryError: If a required metadata field is empty, the
                category is unknown, or the name is already registered.
        """
        missing = [f for f in self.REQUIRED_FIELDS if not getattr(descriptor, f, None)]
        if missing:
            raise RegistryError(
                f"Invalid provider descriptor: missing {', '.join(missing)}",
                name=getattr(descriptor, "name", None),
            )
        if not isinstance(descriptor.category, Category):
            raise RegistryError(
                f"Invalid category for provider {descriptor.name}: {descriptor.category!r}",
                name=descriptor.name,
            )
        if descriptor.name in self._descriptors:
            raise RegistryError(
                f"Provider {descriptor.name} is already registered", name=descriptor.name
            )

        self._descriptors[descriptor.name] = descriptor
        self._categories.setdefault(descriptor.category, []).append(descriptor.name)
        return self

    def unregister(self, name: str) -> "ProviderRegistry":
        """Remove *name* from both indices.  Unknown names are ignored."""
        descriptor = self._descriptors.pop(name, None)
        if descriptor is not None:
            names = self._categories.get(descriptor.category, [])
            if name in names:
                names.remove(name)
            if not names:
                self._categories.pop(descriptor.category, None)
        return self

    # -- Lookup --------------------------------------------------------------

    def get(self, name: str) -> Optional[CapabilityDescriptor]:
        return self._descriptors.get(name)

    def by_category(self, category: Category | str) -> list[CapabilityDescriptor]:
        try:
            key = Category(category)
        except ValueError:
            return []
        return [self._descriptors[name] for name in self._categories.get(key, [])]

    def all_categories(self) -> list[Category]:
        return list(self._categories)

    def all(self) -> list[CapabilityDescriptor]:
        return list(self._descriptors.values())

    def find_by_feature(self, feature: str) -> list[CapabilityDescriptor]:
        """Descriptors whose (unconfigured) instance declares *feature*."""
        return [d for d in self.all() if supports(d.create(ProjectConfig()), feature)]

    def find_by_language(self, language: str) -> list[CapabilityDescriptor]:
        return [d for d in self.all() if language in d.languages]

    def find_by_project_type(self, project_type: str) -> list[CapabilityDescriptor]:
        return [d for d in self.all() if project_type in d.project_types]

    # -- Instantiation -------------------------------------------------------

    def instantiate(
        self, name: str, config: Optional[ProjectConfig] = None
    ) -> CapabilityProvider:
        """Bind the descriptor called *name* to *config*.

        Raises:
            RegistryError: If *name* is not registered.
        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise RegistryError(f"Provider {name} not found", name=name)
        return descriptor.create(config if config is not None else ProjectConfig())

    # -- Compatibility -------------------------------------------------------

    def compatible_pairs(self, name: str) -> list[CapabilityDescriptor]:
        """Every other descriptor that both accepts and is accepted by *name*."""
        if name not in self._descriptors:
            return []
        target = self.instantiate(name)
        result: list[CapabilityDescriptor] = []
        for descriptor in self.all():
            if descriptor.name == name:
                continue
            other = descriptor.create(ProjectConfig())
            if other.is_compatible_with(name) and target.is_compatible_with(descriptor.name):
                result.append(descriptor)
        return result

    def validate_compatibility(self, names: list[str]) -> list[CompatibilityConflict]:
        """Report every incompatible pair among *names*.

        A pair conflicts when either side rejects the other.  Names that are
        not registered are skipped.
        """
        instances = [(n, self.instantiate(n)) for n in names if n in self._descriptors]
        conflicts: list[CompatibilityConflict] = []
        for (name_a, a), (name_b, b) in combinations(instances, 2):
            if not a.is_compatible_with(name_b):
                reason = f"{name_a} is incompatible with {name_b}"
            elif not b.is_compatible_with(name_a):
                reason = f"{name_b} is incompatible with {name_a}"
            else:
                continue
            conflicts.append(CompatibilityConflict(a=name_a, b=name_b, reason=reason))
        return conflicts
