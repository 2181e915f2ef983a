"""Example: Adding a new stage dynamically without modifying registry.py.

A stage declares the annotation kinds it needs and creates, and only appends
annotations to the document it receives.
"""

from typing import Any, Mapping, Optional

from annopipe.config.schema import PipelineConfig, SourceSpec, StageSpec, OutputSpec
from annopipe.pipeline.build import run_pipeline
from annopipe.pipeline.context import TOKEN, Annotation, Document
from annopipe.stages.base import Stage
from annopipe.stages.registry import list_stages, register_stage

# Example: mark every capitalised token
class CapitalisedTokens(Stage):
    name = "capitalised"
    requires = (TOKEN,)
    produces = ("capitalised",)

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        super().__init__(options)
        self.min_length = self._option("min_length", 2, types=(int,))

    def apply(self, doc: Document) -> Document:
        return doc.with_annotations([
            Annotation("capitalised", tok.begin, tok.end, tok.value, self.name)
            for tok in doc.select(TOKEN)
            if len(tok.value) >= self.min_length and tok.value[:1].isupper()
        ])

# Register it
register_stage("capitalised", lambda options: CapitalisedTokens(options))

# Verify registration
print("Registered stages:")
for name, kind in list_stages().items():
    print(f"  {name}: {kind}")

# Use it like any built-in stage
cfg = PipelineConfig(
    source=SourceSpec(kind="json_document", payload='{"language": "en", "text": "Alice met Bob in Paris."}'),
    stages=(StageSpec("segmenter"), StageSpec("capitalised", {"min_length": 3})),
    outputs=(OutputSpec("console", ("capitalised",)),),
)
run_pipeline(cfg)
