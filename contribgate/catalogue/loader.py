"""Loaders that build a :class:`RepositoryCatalogue` from configuration.

Two sources are supported:

- a YAML 1.2 file named by ``CONTRIBGATE_CATALOGUE_PATH``::

      organizations:
        acme: [core, site]
        beta: [widgets]

- a slug list in ``CONTRIBGATE_REPOSITORIES`` such as
  ``acme/core, acme/site, beta/widgets``.

The file wins when both are set. With neither, the catalogue is empty and
every resolution is ineligible.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from contribgate.common.slug import parse_repo_slug

from .models import CatalogueDocument, RepositoryCatalogue
from .validation import CatalogueValidationError, validate_organizations

YAML_VERSION = (1, 2)
CATALOGUE_PATH_ENV = "CONTRIBGATE_CATALOGUE_PATH"
REPOSITORIES_ENV = "CONTRIBGATE_REPOSITORIES"

_SLUG_SEPARATOR = re.compile(r"[\s,]+")


def load_catalogue(path: Path | str) -> RepositoryCatalogue:
    """Parse and validate a YAML catalogue file."""
    yaml = _yaml()
    path_obj = Path(path)

    try:
        loaded = yaml.load(path_obj.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise CatalogueValidationError([f"failed to parse YAML: {exc}"]) from exc

    if loaded is None:
        return RepositoryCatalogue()

    try:
        document = msgspec.convert(loaded, type=CatalogueDocument)
    except msgspec.ValidationError as exc:
        raise CatalogueValidationError([f"schema validation failed: {exc}"]) from exc

    validate_organizations(document.organizations)
    return RepositoryCatalogue.from_document(document)


def parse_repository_slugs(text: str) -> RepositoryCatalogue:
    """Group ``owner/name`` slugs by organization in first-seen order."""
    organizations: dict[str, list[str]] = {}
    issues: list[str] = []
    for raw in _SLUG_SEPARATOR.split(text.strip()):
        if not raw:
            continue
        try:
            organization, repository = parse_repo_slug(raw)
        except ValueError as exc:
            issues.append(str(exc))
            continue
        organizations.setdefault(organization, []).append(repository)

    if issues:
        raise CatalogueValidationError(issues)

    validate_organizations(organizations)
    return RepositoryCatalogue.from_mapping(organizations)


def catalogue_from_env() -> RepositoryCatalogue:
    """Build the process-wide catalogue from environment variables."""
    path = os.environ.get(CATALOGUE_PATH_ENV, "").strip()
    if path:
        return load_catalogue(path)

    slugs = os.environ.get(REPOSITORIES_ENV, "")
    if slugs.strip():
        return parse_repository_slugs(slugs)

    return RepositoryCatalogue()


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml
