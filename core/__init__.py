"""Core shared contracts and utilities."""

from core.positions import (
    FilePosition,
    MethodPosition,
    Position,
    TypePosition,
)
from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    set_run_id,
    source_scope,
)
from core.run_config import (
    ConfigValidationError,
    ExportConfig,
    load_export_config,
    resolve_strict_mode,
)
from core.run_artifacts import build_warning_report, write_run_report

__all__ = [
    "FilePosition",
    "MethodPosition",
    "Position",
    "TypePosition",
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "source_scope",
    "ConfigValidationError",
    "ExportConfig",
    "load_export_config",
    "resolve_strict_mode",
    "build_warning_report",
    "write_run_report",
]
