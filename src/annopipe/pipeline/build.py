"""Pipeline build and run.

Turns a PipelineConfig into live objects and drives a run:
- source, stages and writers are all constructed before the first document is
  read, so every configuration problem surfaces up front
- documents flow one at a time through the runner, then through each writer
- the first StageExecutionError stops the run; it is logged with the failing
  stage and document, then re-raised (no retries)
- stages and writers are closed whatever happens

This module is the entrypoint used by the CLI.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import IO, Dict, Iterable, List, Optional, Sequence
import logging
import time

from tqdm import tqdm

from ..config.schema import OutputSpec, PipelineConfig, StageSpec
from ..errors import StageExecutionError
from ..sources.base import DataSource
from ..sources.registry import make_source
from ..stages.registry import make_stages
from ..utils.hashing import config_fingerprint
from ..writers.base import DocumentWriter
from ..writers.registry import make_writer
from .context import Document
from .runner import PipelineRunner

log = logging.getLogger("annopipe.build")

@dataclass
class RunSummary:
    documents: int = 0
    annotations: Dict[str, int] = field(default_factory=dict)
    outputs: List[str] = field(default_factory=list)
    elapsed_s: float = 0.0


def make_runner(stage_specs: Iterable[StageSpec]) -> PipelineRunner:
    stages = make_stages(stage_specs)
    try:
        return PipelineRunner(stages)
    except Exception:
        for st in stages:
            st.close()
        raise


def make_writers(outputs: Sequence[OutputSpec], *, stream: Optional[IO[str]] = None) -> List[DocumentWriter]:
    return [make_writer(o, stream=stream) for o in outputs]


def run_pipeline(
    cfg: PipelineConfig,
    *,
    show_progress: bool = False,
    stream: Optional[IO[str]] = None,
) -> RunSummary:
    log.info(f"Pipeline config fingerprint={config_fingerprint(cfg.as_dict())[:16]} "
             f"stages={[s.name for s in cfg.stages]}")

    source = make_source(cfg.source)
    runner = make_runner(cfg.stages)
    try:
        writers = make_writers(cfg.outputs, stream=stream)
    except Exception:
        runner.close()
        raise
    return drive(runner, source, writers, show_progress=show_progress)


def drive(
    runner: PipelineRunner,
    source: DataSource,
    writers: Sequence[DocumentWriter],
    *,
    show_progress: bool = False,
) -> RunSummary:
    """Run every document of `source` through `runner` into `writers`."""
    summary = RunSummary()
    kinds: Counter = Counter()
    close_errors: List[Exception] = []
    t0 = time.time()
    log.info(f"Starting source={source.name} stages={runner.stage_names}")
    try:
        it = tqdm(runner.run_all(source), desc=source.name, unit="doc", disable=not show_progress)
        for doc in it:
            summary.documents += 1
            kinds.update(a.kind for a in doc.annotations)
            log.debug(f"Annotated doc {doc.label}: annotations={len(doc.annotations)}")
            for w in writers:
                w.write(doc)
    except StageExecutionError as e:
        partial: Optional[Document] = e.document
        log.error(
            f"Stage {e.stage_index} ({e.stage_name}) failed on "
            f"{partial.label if partial is not None else e.doc_id}: {e.__cause__ or e}"
        )
        raise
    finally:
        runner.close()
        for w in writers:
            try:
                path = w.close()
            except Exception as e:
                log.exception(f"Writer {w.name} failed to close: {e}")
                close_errors.append(e)
                continue
            if path:
                summary.outputs.append(path)
        summary.elapsed_s = time.time() - t0
        summary.annotations = dict(kinds)

    if close_errors:
        raise close_errors[0]
    if summary.documents == 0:
        log.warning(f"Source {source.name}: no documents were produced")
    log.info(f"Pipeline complete: documents={summary.documents} "
             f"annotations={summary.annotations} elapsed={summary.elapsed_s:.2f}s")
    return summary
