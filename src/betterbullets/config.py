"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.

Every model is frozen: the decoration core receives one Settings value per
recompute and never mutates it.  Changing a setting means building a new
value (``settings.model_copy(update=...)``) and handing it to the host.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# src/betterbullets/config.py  ->  parent x3  ->  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

MAX_HIERARCHY_LEVELS = 10

# Characters that would break out of a single CSS declaration value.
_FORBIDDEN_CSS_CHARS = frozenset(";{}")


class LevelStyle(StrEnum):
    """Text style preset applied to a bullet's text at a given depth."""

    NONE = "none"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold-italic"
    UNDERLINE = "underline"
    BOLD_UNDERLINE = "bold-underline"


class OffsetUnit(StrEnum):
    """How document offsets are counted in emitted decorations."""

    CODEPOINT = "codepoint"
    UTF16 = "utf16"


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class LevelPreset(BaseModel):
    """Glyph, font-size multiplier and text style for one depth."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(default="-", min_length=1)
    size: float = Field(default=1.0, gt=0)
    style: LevelStyle = LevelStyle.NONE


def _default_levels() -> tuple[LevelPreset, ...]:
    return (
        LevelPreset(symbol="-", size=1.0),
        LevelPreset(symbol="→", size=1.2),
        LevelPreset(symbol="⇒", size=1.4),
    )


class FormattingConfig(BaseModel):
    """Structural and content-rule formatting options."""

    model_config = ConfigDict(frozen=True)

    bold_non_leaf_text: bool = True
    use_definition_symbol: bool = False
    exclamation_text_color: str = "#773757"
    hierarchy_levels: int = Field(default=3, ge=1, le=MAX_HIERARCHY_LEVELS)
    levels: tuple[LevelPreset, ...] = Field(
        default_factory=_default_levels, validate_default=True
    )
    root_bullets_in_hierarchy: bool = False

    @field_validator("exclamation_text_color")
    @classmethod
    def _color_is_single_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "exclamation_text_color must not be empty"
            raise ValueError(msg)
        if _FORBIDDEN_CSS_CHARS & set(value):
            msg = f"exclamation_text_color is not a single CSS value: {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("levels")
    @classmethod
    def _fit_levels_to_count(
        cls, levels: tuple[LevelPreset, ...], info: ValidationInfo
    ) -> tuple[LevelPreset, ...]:
        """Pad ``levels`` with the deepest preset, or trim it, to match the count."""
        count = info.data.get("hierarchy_levels")
        if count is None:
            # hierarchy_levels failed its own validation; that error is reported.
            return levels
        if not levels:
            levels = _default_levels()[:1]
        if len(levels) < count:
            levels = levels + (levels[-1],) * (count - len(levels))
        return levels[:count]

    def preset_for_depth(self, depth: int) -> LevelPreset:
        """Return the preset for *depth*; deeper depths reuse the last preset."""
        return self.levels[min(max(depth, 0), len(self.levels) - 1)]


class SymbolsConfig(BaseModel):
    """Glyphs used by the content rules."""

    model_config = ConfigDict(frozen=True)

    note: str = Field(default="*", min_length=1)
    definition: str = Field(default="@", min_length=1)
    important: str = Field(default="!", min_length=1)


class EditorConfig(BaseModel):
    """Host editor parameters."""

    model_config = ConfigDict(frozen=True)

    tab_width: int = Field(default=4, ge=1)
    offset_unit: OffsetUnit = OffsetUnit.CODEPOINT


class AppConfig(BaseModel):
    """Application runtime configuration."""

    model_config = ConfigDict(frozen=True)

    log_dir: Path | None = None


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``FORMATTING__HIERARCHY_LEVELS``, ``SYMBOLS__NOTE``, ``EDITOR__TAB_WIDTH``.
    Per-depth presets are given as JSON, e.g.
    ``FORMATTING__LEVELS='[{"symbol": "-"}, {"symbol": "→", "size": 1.3}]'``.
    """

    model_config = SettingsConfigDict(
        env_file=_PROJECT_ROOT / ".env",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    formatting: FormattingConfig = FormattingConfig()
    symbols: SymbolsConfig = SymbolsConfig()
    editor: EditorConfig = EditorConfig()
    app: AppConfig = AppConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()

    env_file = settings.model_config.get("env_file")
    if env_file is not None and Path(str(env_file)).is_file():
        logger.info("Settings loaded .env from: %s", env_file)
    else:
        logger.info("Settings: no .env file found, using env vars and defaults")

    return settings
