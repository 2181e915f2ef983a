"""Run ID resolution: explicit or auto-generated.

The run id names the log file of a run. Auto-generation joins a short name
derived from the document source with a compact UTC timestamp.
"""

from __future__ import annotations
import os
import re
from datetime import datetime, timezone
from typing import Optional

from .config.schema import PipelineConfig


def _input_name(cfg: PipelineConfig) -> str:
    """Derive a short name from the source for use in run_id."""
    src = cfg.source
    if src.name:
        name = src.name
    elif src.kind == "json_document":
        name = "json"
    else:
        raw = src.dataset
        if isinstance(raw, list):
            raw = raw[0] if raw else ""
        raw = str(raw or "").strip()
        # drop glob parts: "texts/**/*.txt" -> "texts"
        parts = [p for p in re.split(r"[\\/]", raw) if p and not any(c in p for c in "*?[")]
        if parts and os.path.splitext(parts[-1])[1]:
            parts = parts[:-1]
        name = parts[-1] if parts else src.kind
    # Safe for run_id: alphanumeric and underscore
    name = re.sub(r"[^\w\-]", "_", name)
    return name or "run"


def generate_run_id(cfg: PipelineConfig, now: Optional[datetime] = None) -> str:
    ts = (now or datetime.now(timezone.utc)).strftime("%Y%m%d%H%M%S")
    return f"{_input_name(cfg)}_{ts}"


def resolve_run_id(cfg: PipelineConfig) -> str:
    """Return run_id: explicit run.run_id, else auto-generated."""
    explicit = cfg.run.run_id
    if explicit is not None and str(explicit).strip():
        return str(explicit).strip()
    return generate_run_id(cfg)
