"""Catalog schema - validation of rule catalogs."""

from .validation import validate_catalog, CatalogValidationError, ValidationResult

__all__ = [
    "validate_catalog",
    "CatalogValidationError",
    "ValidationResult",
]
