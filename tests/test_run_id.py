from __future__ import annotations
from datetime import datetime, timezone
import logging

from annopipe.config.schema import PipelineConfig, RunSpec, SourceSpec
from annopipe.logging_ import setup_logging
from annopipe.run_id import generate_run_id, resolve_run_id

NOW = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


def _cfg(**source):
    return PipelineConfig(source=SourceSpec(**source))


def test_generated_from_dataset():
    assert generate_run_id(_cfg(kind='text_files', dataset='examples/texts/*'), NOW) == 'texts_20240501123000'
    assert generate_run_id(_cfg(kind='text_files', dataset='data/a.txt'), NOW) == 'data_20240501123000'
    assert generate_run_id(_cfg(kind='json_document', payload='{}'), NOW) == 'json_20240501123000'
    assert generate_run_id(_cfg(kind='text_files', name='my run'), NOW) == 'my_run_20240501123000'


def test_explicit_run_id_wins():
    cfg = PipelineConfig(source=SourceSpec(kind='text_files'), run=RunSpec(run_id=' demo '))
    assert resolve_run_id(cfg) == 'demo'


def test_setup_logging_writes_file(tmp_path):
    path = setup_logging(run_id='unit', log_dir=str(tmp_path))
    logging.getLogger('annopipe.test').info('hello file')
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert path == str(tmp_path / 'unit.log')
    assert 'annopipe.test | hello file' in open(path, encoding='utf-8').read()


def test_setup_logging_replaces_its_handlers():
    setup_logging()
    setup_logging()
    ours = [h for h in logging.getLogger().handlers if getattr(h, '_annopipe_handler', False)]
    assert len(ours) == 1
