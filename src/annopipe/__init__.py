"""annopipe

Linear NLP annotation pipelines: a document source feeds a fixed sequence of
annotator stages, and writers print or store the annotations.

Public API surface:
- annopipe.cli.main : CLI entrypoint
- annopipe.pipeline.build.run_pipeline : run a configured pipeline
- annopipe.pipeline.runner.PipelineRunner : drive documents through stages
- annopipe.sources : add/extend document sources
- annopipe.stages : add/extend annotator stages
- annopipe.writers : add/extend output writers
"""
__all__ = ["__version__"]
__version__ = "0.1.0"
