"""Run configuration for completion file export.

Settings come from an optional YAML/JSON file and are overridden by
command-line flags. Strict mode can also be switched on through the
``APIDOC_STRICT`` environment variable.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

STRICT_ENV_VAR = "APIDOC_STRICT"
DEFAULT_FORMAT = "zerobrane"
DEFAULT_HEADER = "API documentation generated from annotated C++ sources."


class ConfigValidationError(RuntimeError):
    """Raised when a run configuration is invalid."""


@dataclass(frozen=True)
class ExportConfig:
    """Settings of one export run."""

    input_dir: str = ""
    output_dir: str = ""
    format: str = DEFAULT_FORMAT
    header: str = DEFAULT_HEADER
    # None means the extraction defaults
    extensions: tuple[str, ...] | None = None
    excluded_dirs: tuple[str, ...] | None = None
    report_dir: str | None = None
    strict: bool = False

    def with_overrides(self, **overrides: Any) -> "ExportConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def validate(self) -> "ExportConfig":
        """Check that the settings needed to run are present."""
        if not self.input_dir:
            raise ConfigValidationError("input_dir is required")
        if not self.output_dir:
            raise ConfigValidationError("output_dir is required")
        if not self.format:
            raise ConfigValidationError("format is required")
        return self


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def resolve_strict_mode(default: bool = False) -> bool:
    """Resolve strict mode from the ``APIDOC_STRICT`` environment variable."""
    return _env_flag(STRICT_ENV_VAR, default=default)


def _expect_dict(payload: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ConfigValidationError(f"{ctx} must be an object")
    return payload


def _expect_bool(payload: Any, ctx: str) -> bool:
    if isinstance(payload, bool):
        return payload
    if isinstance(payload, str):
        value = payload.strip().lower()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
    raise ConfigValidationError(f"{ctx} must be a boolean, got {payload!r}")


def _expect_str_list(payload: Any, ctx: str) -> tuple[str, ...]:
    if not isinstance(payload, list) or not payload:
        raise ConfigValidationError(f"{ctx} must be a non-empty list")
    values = tuple(str(item).strip() for item in payload)
    if any(not value for value in values):
        raise ConfigValidationError(f"{ctx} contains an empty entry")
    return values


def _load_config_payload(path: str) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    text = config_path.read_text(encoding="utf-8")
    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse config {config_path}: {exc}") from exc

    if payload is None:
        logger.warning("Config file %s is empty; using defaults", config_path)
        return {}
    return _expect_dict(payload, "config")


def _normalize_extension(extension: str) -> str:
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"


def load_export_config(path: str) -> ExportConfig:
    """Load and validate an export configuration from a YAML/JSON file.

    Relative ``input_dir``, ``output_dir`` and ``report_dir`` values are
    resolved against the directory containing the config file. Required
    settings are not enforced here because the command line may still
    supply them; call ``ExportConfig.validate`` once everything is merged.
    """
    payload = _load_config_payload(path)
    base_dir = Path(path).resolve().parent
    defaults = ExportConfig()

    def resolve_dir(key: str) -> str | None:
        raw = payload.get(key)
        if raw is None:
            return None
        value = str(raw).strip()
        if not value:
            raise ConfigValidationError(f"{key} must not be empty")
        candidate = Path(value)
        return str(candidate if candidate.is_absolute() else base_dir / candidate)

    extensions = defaults.extensions
    if "extensions" in payload:
        extensions = tuple(
            _normalize_extension(ext)
            for ext in _expect_str_list(payload["extensions"], "extensions")
        )

    excluded_dirs = defaults.excluded_dirs
    if "excluded_dirs" in payload:
        excluded_dirs = _expect_str_list(payload["excluded_dirs"], "excluded_dirs")

    return ExportConfig(
        input_dir=resolve_dir("input_dir") or "",
        output_dir=resolve_dir("output_dir") or "",
        format=str(payload.get("format", defaults.format)).strip().lower(),
        header=str(payload.get("header", defaults.header)),
        extensions=extensions,
        excluded_dirs=excluded_dirs,
        report_dir=resolve_dir("report_dir"),
        strict=_expect_bool(payload.get("strict", defaults.strict), "strict"),
    )
