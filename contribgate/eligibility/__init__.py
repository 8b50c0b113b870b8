"""Eligibility resolution: catalogue scan over GitHub contributor listings."""

from __future__ import annotations

from .errors import CallerContractViolation, ResolverConfigError
from .models import EligibilityVerdict, ResolverConfig
from .observability import EligibilityEventLogger, EligibilityEventType
from .resolver import EligibilityResolver

__all__ = [
    "CallerContractViolation",
    "EligibilityEventLogger",
    "EligibilityEventType",
    "EligibilityResolver",
    "EligibilityVerdict",
    "ResolverConfig",
    "ResolverConfigError",
]
