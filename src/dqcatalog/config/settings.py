"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  -- CLI flags passed by Click
  2. Env vars     -- ``DQCAT_*`` prefix
  3. TOML file    -- ``dqcat.toml`` discovered via walk-up
  4. Code defaults -- baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``resolve_config`` lookup from
:mod:`dqcatalog.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from dqcatalog.config.discovery import resolve_config
from dqcatalog.config.models import CatalogConfig, DeriveConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``dqcat.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
        self._resolve_catalog_path(toml_path)

    def _resolve_catalog_path(self, toml_path: Path | None) -> None:
        """Make a relative ``[catalog] path`` relative to the config file."""
        section = self._data.get("catalog")
        if toml_path is None or not isinstance(section, dict):
            return
        raw_path = section.get("path")
        if isinstance(raw_path, str) and not Path(raw_path).is_absolute():
            section["path"] = str(toml_path.parent / raw_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class DqSettings(BaseSettings):
    """Unified settings for the dqcat CLI and the service layer.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    :class:`~dqcatalog.commands._context.AppContext` at the CLI root.

    Attributes:
        project_root: Directory holding ``dqcat.toml`` (or CWD if none).
        config_path: The config file actually used, if any.
        catalog_path: ``--catalog`` override for the registry artifact.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DQCAT_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved paths (not in TOML -- derived from config location) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None
    catalog_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    derive: DeriveConfig = Field(default_factory=DeriveConfig)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def effective_catalog_path(self) -> Path | None:
        """``--catalog`` wins over ``[catalog] path``; None means packaged."""
        if self.catalog_path is not None:
            return self.catalog_path
        if self.catalog.path:
            return Path(self.catalog.path)
        return None

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> DqSettings:
        """Construct settings from CLI invocation.

        Discovers ``dqcat.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path = resolve_config(config_path, project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        flags = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **flags,
            )
        finally:
            _tls.toml_path = None
