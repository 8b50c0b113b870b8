"""Typed repository catalogue structures."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import types
import typing as typ

import msgspec


class CatalogueDocument(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """On-disk catalogue shape decoded from YAML.

    Attributes
    ----------
    organizations : dict[str, list[str]]
        GitHub organization names mapped to the repositories checked for
        contributions, in scan order.

    """

    organizations: dict[str, list[str]] = msgspec.field(default_factory=dict)


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryTarget:
    """A single ``(organization, repository)`` pair to query."""

    organization: str
    repository: str

    @property
    def slug(self) -> str:
        """Return the GitHub-style ``owner/name`` identifier."""
        return f"{self.organization}/{self.repository}"


class RepositoryCatalogue:
    """Immutable mapping of organizations to ordered repository names.

    The catalogue is loaded once at process start and shared read-only by
    every resolution. Organizations and their repositories are scanned in
    the order they were configured.
    """

    __slots__ = ("_organizations",)

    def __init__(
        self,
        organizations: cabc.Mapping[str, cabc.Iterable[str]] | None = None,
    ) -> None:
        """Copy ``organizations`` into an immutable view."""
        frozen = {
            organization: tuple(repositories)
            for organization, repositories in (organizations or {}).items()
        }
        self._organizations: cabc.Mapping[str, tuple[str, ...]] = (
            types.MappingProxyType(frozen)
        )

    @classmethod
    def from_mapping(
        cls, organizations: cabc.Mapping[str, cabc.Iterable[str]]
    ) -> RepositoryCatalogue:
        """Build a catalogue from any organization -> repositories mapping."""
        return cls(organizations)

    @classmethod
    def from_document(cls, document: CatalogueDocument) -> RepositoryCatalogue:
        """Build a catalogue from a decoded YAML document."""
        return cls(document.organizations)

    def organizations(self) -> cabc.Mapping[str, tuple[str, ...]]:
        """Return the read-only organization -> repositories mapping."""
        return self._organizations

    def iter_targets(self) -> typ.Iterator[RepositoryTarget]:
        """Yield every configured pair lazily in scan order."""
        for organization, repositories in self._organizations.items():
            for repository in repositories:
                yield RepositoryTarget(organization, repository)

    def __len__(self) -> int:
        """Return the number of repository targets across all organizations."""
        return sum(len(repositories) for repositories in self._organizations.values())

    def __bool__(self) -> bool:
        return any(self._organizations.values())

    def __repr__(self) -> str:
        return f"RepositoryCatalogue({dict(self._organizations)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RepositoryCatalogue):
            return NotImplemented
        return list(self._organizations.items()) == list(
            other._organizations.items()
        )

    def __hash__(self) -> int:
        return hash(tuple(self._organizations.items()))
