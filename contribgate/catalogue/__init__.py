"""Repository catalogue: which organizations and repositories prove eligibility."""

from __future__ import annotations

from .loader import catalogue_from_env, load_catalogue, parse_repository_slugs
from .models import CatalogueDocument, RepositoryCatalogue, RepositoryTarget
from .validation import CatalogueValidationError, validate_organizations

__all__ = [
    "CatalogueDocument",
    "CatalogueValidationError",
    "RepositoryCatalogue",
    "RepositoryTarget",
    "catalogue_from_env",
    "load_catalogue",
    "parse_repository_slugs",
    "validate_organizations",
]
