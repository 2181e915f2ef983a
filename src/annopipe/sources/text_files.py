"""Plain-text file source.

One document per file. `dataset` accepts:
- Single file: "texts/a.txt"
- Multiple files: ["texts/a.txt", "texts/b.txt"]
- Directory: "texts/" (every file below it)
- Glob pattern: "texts/*" or "texts/**/*.txt"

Every document gets the configured language. A pattern that matches nothing
yields no documents (with a warning), not an error; so does a file that
cannot be read or decoded.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable
import codecs
import logging
import os
from pathlib import Path

from ..config.schema import SourceSpec
from ..errors import ConfigurationError
from ..pipeline.context import normalize_language
from .base import DataSource, RawDocument, resolve_files

log = logging.getLogger("annopipe.sources.text_files")

class TextFileSource(DataSource):
    def __init__(self, spec: SourceSpec):
        self.spec = spec
        self.name = spec.source_name
        self.language = normalize_language(spec.language)
        try:
            codecs.lookup(spec.encoding)
        except LookupError as e:
            raise ConfigurationError(f"unknown encoding {spec.encoding!r}") from e
        if not spec.dataset:
            raise ConfigurationError("text_files source requires 'dataset' (path, directory or glob)")
        self.files = resolve_files(spec.dataset)

    def metadata(self) -> Dict[str, Any]:
        return {
            "kind": "text_files",
            "files": self.files,
            "file_count": len(self.files),
            "total_size_bytes": sum(os.path.getsize(f) for f in self.files if os.path.exists(f)),
        }

    def stream(self) -> Iterable[RawDocument]:
        if not self.files:
            log.warning(f"Source {self.name}: no files match {self.spec.dataset!r}")
        for file_path in self.files:
            try:
                with open(file_path, "r", encoding=self.spec.encoding) as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                log.warning(f"Skipping unreadable file {file_path}: {e}")
                continue
            yield RawDocument(
                raw_id=Path(file_path).stem,
                text=text,
                language=self.language,
                source=self.name,
                source_file=file_path,
            )
