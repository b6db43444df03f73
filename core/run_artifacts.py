"""Run artifact helpers for reporting documentation warnings."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Iterable


def build_warning_report(
    warnings: Iterable[Any],
    stats: dict[str, int],
    output_path: str | None = None,
) -> dict[str, Any]:
    """Build the JSON-serializable report payload for a parsing run.

    ``warnings`` items must provide ``to_dict()`` and a ``category`` whose
    ``value`` is the category name.
    """
    items = [warning.to_dict() for warning in warnings]
    counts: dict[str, int] = {}
    for item in items:
        counts[item["category"]] = counts.get(item["category"], 0) + 1
    return {
        "stats": dict(stats),
        "warning_counts": counts,
        "warnings": items,
        "output_path": output_path,
    }


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path
