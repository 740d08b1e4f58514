"""
Configuration for the alge.serde module.

Defines SerdeSettings, a frozen dataclass carrying runtime configuration for
deserialization and logging. Defaults are sourced from alge.core.constants (the
single source of truth).

Source of truth
- alge.core.constants.DEFAULT_MAX_DEPTH, PARSE_NUMERIC_STRINGS

Import DAG discipline
- Depends only on stdlib, alge.core.constants and alge.serde.options/errors.
- Does not import alge.cli.

Notes
- Precedence: env > TOML > defaults.
- Unlike option typos in code (which pydantic rejects), bad values in env/TOML
  raise SerdeConfigError naming the offending key.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from alge.core.constants import DEFAULT_MAX_DEPTH, PARSE_NUMERIC_STRINGS

from .errors import SerdeConfigError
from .options import DeserializeOptions

__all__ = ["SerdeSettings"]

_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FALSE = {"0", "false", "f", "no", "n", "off"}


def _bool(key: str, v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        lo = v.strip().lower()
        if lo in _TRUE:
            return True
        if lo in _FALSE:
            return False
    raise SerdeConfigError(f"{key}: expected a boolean, got {v!r}")


def _positive_int(key: str, v: Any) -> int:
    if isinstance(v, bool):
        raise SerdeConfigError(f"{key}: expected an integer, got {v!r}")
    try:
        n = int(v)
    except (TypeError, ValueError) as exc:
        raise SerdeConfigError(f"{key}: expected an integer, got {v!r}") from exc
    if n < 1:
        raise SerdeConfigError(f"{key}: must be >= 1, got {n}")
    return n


@dataclass(frozen=True)
class SerdeSettings:
    """
    Runtime settings for the alge.serde layer.

    Attributes:
        max_depth (int): Maximum nesting depth before DepthExceeded.
        parse_numeric_strings (bool): Accept numeric strings for Integer/Float.
        log_json (bool): Render logs as JSON lines instead of console output.
        verbose (bool): Emit DEBUG logs from the ``alge`` logger.

    Examples:
        >>> SerdeSettings(max_depth=50).to_options().max_depth
        50
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    parse_numeric_strings: bool = PARSE_NUMERIC_STRINGS
    log_json: bool = False
    verbose: bool = False

    @classmethod
    def _apply_mapping(cls, base: SerdeSettings, cfg: dict[str, Any] | None) -> SerdeSettings:
        """Apply a loose config mapping onto SerdeSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base
        if "max_depth" in cfg:
            s = replace(s, max_depth=_positive_int("max_depth", cfg["max_depth"]))
        for key in ("parse_numeric_strings", "log_json", "verbose"):
            if key in cfg:
                s = replace(s, **{key: _bool(key, cfg[key])})
        return s

    @classmethod
    def from_env(
        cls, base: SerdeSettings | None = None, prefix: str = "ALGE_SERDE_"
    ) -> SerdeSettings:
        """
        Build SerdeSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - ALGE_SERDE_MAX_DEPTH
            - ALGE_SERDE_PARSE_NUMERIC_STRINGS (1/0/true/false/yes/no/on/off)
            - ALGE_SERDE_LOG_JSON
            - ALGE_SERDE_VERBOSE
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in ("max_depth", "parse_numeric_strings", "log_json", "verbose"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> SerdeSettings:
        """
        Build SerdeSettings from a TOML file.

        Search order when `path` is None:
            1) ./alge.toml (with either a [serde] table or top-level keys)
            2) ./pyproject.toml under [tool.alge.serde]

        Returns defaults if no file is present.

        Raises:
            SerdeConfigError: If a file exists but is not valid TOML, or holds bad values.
        """
        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "alge.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise SerdeConfigError(f"{p}: invalid TOML ({exc})") from exc
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("alge", {}).get("serde") if isinstance(tool, dict) else None
            elif isinstance(data.get("serde"), dict):
                cfg = data["serde"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(cls(), cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> SerdeSettings:
        """
        Load SerdeSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (alge.toml, pyproject.toml).
        """
        return cls.from_env(base=cls.from_toml(path))

    def to_options(self, **overrides: Any) -> DeserializeOptions:
        """Build DeserializeOptions from these settings; keyword overrides win."""
        params: dict[str, Any] = {
            "max_depth": self.max_depth,
            "parse_numeric_strings": self.parse_numeric_strings,
        }
        params.update(overrides)
        return DeserializeOptions(**params)
