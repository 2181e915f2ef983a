"""Pipeline configuration structs.

Everything a pipeline needs is bound here, at construction time, and cannot
change afterwards: dataclasses are frozen and option mappings are read-only
views.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union

def _frozen(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class StageSpec:
    name: str
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "options", _frozen(self.options))


@dataclass(frozen=True)
class SourceSpec:
    kind: str                                # text_files | json_document | local_jsonl
    dataset: Union[str, List[str], None] = None   # path, directory, glob, or list of those
    name: Optional[str] = None
    language: str = "en"
    encoding: str = "utf-8"
    payload: Optional[str] = None            # JSON text for json_document
    text_field: str = "text"
    language_field: str = "language"
    id_field: str = "id"

    @property
    def source_name(self) -> str:
        return self.name or self.kind


@dataclass(frozen=True)
class OutputSpec:
    kind: str                                # console | jsonl | parquet
    annotation_kinds: Tuple[str, ...] = ()
    path: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "annotation_kinds", tuple(self.annotation_kinds))
        object.__setattr__(self, "options", _frozen(self.options))


@dataclass(frozen=True)
class RunSpec:
    run_id: Optional[str] = None
    log_dir: Optional[str] = None
    log_level: str = "INFO"


@dataclass(frozen=True)
class PipelineConfig:
    source: SourceSpec
    stages: Tuple[StageSpec, ...] = ()
    outputs: Tuple[OutputSpec, ...] = ()
    run: RunSpec = field(default_factory=RunSpec)

    def __post_init__(self):
        object.__setattr__(self, "stages", tuple(self.stages))
        object.__setattr__(self, "outputs", tuple(self.outputs))

    def as_dict(self) -> dict:
        """Plain-data view, used for logging and fingerprinting."""
        return {
            "source": {k: v for k, v in vars(self.source).items() if k != "payload"},
            "stages": [{"name": s.name, "options": dict(s.options)} for s in self.stages],
            "outputs": [
                {"kind": o.kind, "annotation_kinds": list(o.annotation_kinds),
                 "path": o.path, "options": dict(o.options)}
                for o in self.outputs
            ],
            "run": dict(vars(self.run)),
        }
