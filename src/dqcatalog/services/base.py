"""BaseService: shared foundation for catalog services.

Every service receives a validated :class:`Catalog` at construction time,
plus the ``[derive]`` config so organisation-wide exclusions apply
uniformly to every derivation a service performs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from dqcatalog.config.models import DeriveConfig

if TYPE_CHECKING:
    from dqcatalog.domain.catalog import Catalog

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CatalogService(BaseService):
            def lineage(self, name: str) -> ServiceResult:
                chain = self._catalog.lineage(name)
                ...
    """

    def __init__(self, catalog: Catalog, derive_config: DeriveConfig | None = None) -> None:
        self._catalog = catalog
        self._derive_config = derive_config or DeriveConfig()

    def _exclusions(self, extra: Iterable[str] = ()) -> frozenset[str]:
        """Configured exclusions merged with per-call ids (upper-cased)."""
        ids = {rid.strip().upper() for rid in extra if rid.strip()}
        return frozenset(self._derive_config.exclude) | ids

    def _fallback_warning(self, type_name: str) -> str | None:
        """Warning text when *type_name* is unknown to the catalog."""
        if self._catalog.registry.knows(type_name):
            return None
        fallback = self._catalog.resolver.fallback_type
        logger.debug("Type %r unknown; derivation uses %r lineage", type_name, fallback)
        return f"Unknown type '{type_name}', using '{fallback}' lineage"

    def _catalog_meta(self) -> dict[str, Any]:
        registry = self._catalog.registry
        return {"catalog": registry.source, "digest": registry.digest}
