"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dqcat.toml only contains
overrides. With no config file at all, the packaged catalog is used with
``string`` as the fallback type.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from dqcatalog.domain.types import KeyType

# --- dqcat.toml sections ---


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    path: str | None = None
    fallback_type: str = "string"
    eager_lineage: bool = True
    max_depth: int = Field(default=64, ge=1)


class DeriveConfig(BaseModel):
    """[derive] section.

    ``exclude`` applies to every derivation run through the CLI and
    services, on top of any per-call exclusions.
    """

    model_config = {"frozen": True}

    exclude: list[str] = Field(default_factory=list)
    default_key_type: KeyType = KeyType.NONE
    default_nullable: bool = True

    @field_validator("exclude")
    @classmethod
    def _normalize_rule_ids(cls, value: list[str]) -> list[str]:
        return [rid.strip().upper() for rid in value if rid.strip()]
