"""Pipeline configuration: frozen structs and the YAML loader."""

from .schema import OutputSpec, PipelineConfig, RunSpec, SourceSpec, StageSpec

__all__ = ["OutputSpec", "PipelineConfig", "RunSpec", "SourceSpec", "StageSpec"]
