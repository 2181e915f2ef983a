"""Configuration loader.

Pipelines are described in YAML files. Keeping the pipeline shape in YAML
allows:
- swapping stages or models without touching code
- versioned configuration across runs
- reviewing a run's exact setup from one file

Every structural problem is reported as a ConfigurationError naming the
offending key, before any stage or source is constructed.
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping
import os

import yaml

from ..errors import ConfigurationError
from ..pipeline.context import normalize_language
from .schema import OutputSpec, PipelineConfig, RunSpec, SourceSpec, StageSpec

def load_yaml(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        raise ConfigurationError(f"config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")
    return data

def load_pipeline_config(path: str) -> PipelineConfig:
    return parse_pipeline_config(load_yaml(path))

def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{where}' must be a mapping, got {type(value).__name__}")
    return value

def _list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"'{where}' must be a list, got {type(value).__name__}")
    return value

def _pick(raw: Mapping[str, Any], where: str, allowed: set) -> Dict[str, Any]:
    unknown = set(raw) - allowed
    if unknown:
        raise ConfigurationError(f"'{where}': unknown keys {sorted(unknown)}")
    return dict(raw)

def parse_source(raw: Any) -> SourceSpec:
    raw = _mapping(raw, "source")
    if "kind" not in raw:
        raise ConfigurationError("'source.kind' is required")
    fields = _pick(raw, "source", set(SourceSpec.__dataclass_fields__))
    if "language" in fields:
        fields["language"] = normalize_language(fields["language"])
    return SourceSpec(**fields)

def parse_stage(raw: Any, idx: int) -> StageSpec:
    if isinstance(raw, str):
        return StageSpec(name=raw)
    raw = _mapping(raw, f"stages[{idx}]")
    if not isinstance(raw.get("name"), str):
        raise ConfigurationError(f"'stages[{idx}].name' is required")
    _pick(raw, f"stages[{idx}]", {"name", "options"})
    return StageSpec(name=raw["name"], options=_mapping(raw.get("options"), f"stages[{idx}].options"))

def parse_output(raw: Any, idx: int) -> OutputSpec:
    if isinstance(raw, str):
        return OutputSpec(kind=raw)
    raw = _mapping(raw, f"outputs[{idx}]")
    if not isinstance(raw.get("kind"), str):
        raise ConfigurationError(f"'outputs[{idx}].kind' is required")
    _pick(raw, f"outputs[{idx}]", {"kind", "annotation_kinds", "path", "options"})
    kinds = raw.get("annotation_kinds") or []
    if isinstance(kinds, str):
        kinds = [kinds]
    return OutputSpec(
        kind=raw["kind"],
        annotation_kinds=tuple(_list(kinds, f"outputs[{idx}].annotation_kinds")),
        path=raw.get("path"),
        options=_mapping(raw.get("options"), f"outputs[{idx}].options"),
    )

def parse_pipeline_config(cfg: Mapping[str, Any]) -> PipelineConfig:
    cfg = _mapping(cfg, "config")
    if "source" not in cfg:
        raise ConfigurationError("'source' section is required")
    run = _pick(_mapping(cfg.get("run"), "run"), "run", set(RunSpec.__dataclass_fields__))
    return PipelineConfig(
        source=parse_source(cfg["source"]),
        stages=tuple(parse_stage(s, i) for i, s in enumerate(_list(cfg.get("stages"), "stages"))),
        outputs=tuple(parse_output(o, i) for i, o in enumerate(_list(cfg.get("outputs"), "outputs"))),
        run=RunSpec(**run),
    )
