"""Fatal catalog errors.

Both signal a corrupt or incompatible registry build. Callers are expected
to abort startup rather than serve derivations from a broken catalog.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog load and integrity failures."""


class RegistryLoadError(CatalogError):
    """The registry artifact could not be read or parsed."""


class CatalogIntegrityError(CatalogError):
    """The registry loaded but its references are inconsistent.

    ``issues`` holds every problem found; the message names the first.
    """

    def __init__(self, issues: list[str]) -> None:
        self.issues = list(issues)
        first = self.issues[0] if self.issues else "Catalog integrity check failed"
        extra = len(self.issues) - 1
        msg = f"{first} (+{extra} more)" if extra > 0 else first
        super().__init__(msg)
