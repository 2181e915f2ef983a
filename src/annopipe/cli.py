"""CLI entrypoint.

Commands:
- `annopipe lda-infer [SOURCE] [--model target/model.joblib]`
- `annopipe lda-estimate [SOURCE] [--model-out target/model.joblib] [--topics 10]`
- `annopipe np-ne [SOURCE]`
- `annopipe run --config examples/configs/lda_inference.yaml`

SOURCE is optional and defaults to `examples/texts/*`:
- `-` reads one JSON document ({"language": ..., "text": ...}) from stdin
- an argument starting with `{` is an inline JSON document
- anything else is a path, directory or glob of text files

Exit status is 1 when the run fails on configuration or on a stage; the cause
is reported through logging.
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import argparse
import logging

from .config.loader import load_pipeline_config
from .config.schema import OutputSpec, PipelineConfig, RunSpec
from .errors import PipelineError
from .logging_ import setup_logging
from .pipeline.context import (
    NAMED_ENTITY, NOUN_PHRASE, TOPIC_ASSIGNMENT, TOPIC_DISTRIBUTION,
)
from .pipeline.presets import (
    DEFAULT_LANGUAGE, DEFAULT_MODEL_LOCATION, lda_inference_config, np_ne_config,
    source_spec_from_argument,
)
from .run_id import resolve_run_id

log = logging.getLogger("annopipe.cli")

def _common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--log-dir", default=None, help="Also write logs to <log-dir>/<run_id>.log")
    p.add_argument("--run-id", default=None, help="Run identifier (default: derived from the source)")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    p.add_argument("--progress", action="store_true", help="Show a progress bar")

def _source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("source", nargs="?", default=None,
                   help="'-' (JSON on stdin), inline JSON object, or path/glob of text files")
    p.add_argument("--language", default=DEFAULT_LANGUAGE, help="Language tag of the documents")

def _output_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--output-format", choices=["console", "jsonl", "parquet"], default="console")
    p.add_argument("--output", default=None, help="Output file (jsonl/parquet)")

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="annopipe")
    sub = p.add_subparsers(dest="cmd", required=True)

    pi = sub.add_parser("lda-infer", help="Infer topic distributions with an LDA model")
    _source_args(pi)
    pi.add_argument("--model", default=DEFAULT_MODEL_LOCATION, help="Topic model file")
    pi.add_argument("--stopwords", default=None, help="Stop-word list (default: bundled English list)")
    _output_args(pi)
    _common(pi)

    pe = sub.add_parser("lda-estimate", help="Estimate an LDA topic model")
    _source_args(pe)
    pe.add_argument("--model-out", default=DEFAULT_MODEL_LOCATION)
    pe.add_argument("--topics", type=int, default=10)
    pe.add_argument("--iterations", type=int, default=100)
    pe.add_argument("--seed", type=int, default=0)
    pe.add_argument("--stopwords", default=None)
    _common(pe)

    pn = sub.add_parser("np-ne", help="Annotate noun phrases and named entities")
    _source_args(pn)
    _output_args(pn)
    _common(pn)

    pr = sub.add_parser("run", help="Run a pipeline described in a YAML file")
    pr.add_argument("--config", required=True)
    _common(pr)
    return p

def _outputs(args: argparse.Namespace, kinds: Sequence[str]) -> List[OutputSpec]:
    if args.output_format == "console":
        return [OutputSpec("console", tuple(kinds))]
    return [OutputSpec(args.output_format, tuple(kinds), path=args.output)]

def _config(args: argparse.Namespace) -> PipelineConfig:
    run = RunSpec(run_id=args.run_id, log_dir=args.log_dir)
    if args.cmd == "run":
        cfg = load_pipeline_config(args.config)
        return PipelineConfig(
            source=cfg.source, stages=cfg.stages, outputs=cfg.outputs,
            run=RunSpec(
                run_id=args.run_id or cfg.run.run_id,
                log_dir=args.log_dir or cfg.run.log_dir,
                log_level=cfg.run.log_level,
            ),
        )
    source = source_spec_from_argument(args.source, args.language)
    if args.cmd == "lda-infer":
        return lda_inference_config(
            source, model_location=args.model, stopword_location=args.stopwords,
            outputs=_outputs(args, (TOPIC_DISTRIBUTION, TOPIC_ASSIGNMENT)), run=run,
        )
    return np_ne_config(source, outputs=_outputs(args, (NAMED_ENTITY, NOUN_PHRASE)), run=run)

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else "INFO")
    try:
        if args.cmd == "lda-estimate":
            from .pipeline.estimate import estimate_topic_model
            source = source_spec_from_argument(args.source, args.language)
            setup_logging(run_id=args.run_id or "lda-estimate", log_dir=args.log_dir,
                          level="DEBUG" if args.verbose else "INFO")
            estimate_topic_model(
                source, args.model_out, n_topics=args.topics, max_iter=args.iterations,
                random_state=args.seed, stopword_location=args.stopwords,
                show_progress=args.progress,
            )
            return 0

        cfg = _config(args)
        run_id = resolve_run_id(cfg)
        log_path = setup_logging(
            run_id=run_id, log_dir=cfg.run.log_dir,
            level="DEBUG" if args.verbose else cfg.run.log_level,
        )
        log.info(f"Run {run_id}" + (f" (log: {log_path})" if log_path else ""))

        from .pipeline.build import run_pipeline
        run_pipeline(cfg, show_progress=args.progress)
    except PipelineError as e:
        log.error(f"{type(e).__name__}: {e}")
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
