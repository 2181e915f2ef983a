"""Local JSONL batch source.

Each line should be JSON with at least:
- text
Optional:
- id, language (falls back to the source's configured language)

Supports multiple input formats:
- Single file: "path/to/file.jsonl"
- Multiple files: ["path/to/file1.jsonl", "path/to/file2.jsonl"]
- Directory: "path/to/directory/" (processes all .jsonl files)
- Glob pattern: "path/to/*.jsonl" or "path/to/**/*.jsonl"

Invalid lines and undecodable files are logged and skipped; they never stop
the source.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Tuple

from ..config.schema import SourceSpec
from ..errors import ConfigurationError
from ..pipeline.context import normalize_language
from .base import DataSource, RawDocument, resolve_files

log = logging.getLogger("annopipe.sources.local_jsonl")

class LocalJSONLSource(DataSource):
    def __init__(self, spec: SourceSpec):
        self.spec = spec
        self.name = spec.source_name
        self.language = normalize_language(spec.language)
        if not spec.dataset:
            raise ConfigurationError("local_jsonl source requires 'dataset' (path, directory or glob)")
        self.files = resolve_files(spec.dataset, suffix=".jsonl")

    def metadata(self) -> Dict[str, Any]:
        return {
            "kind": "local_jsonl",
            "files": self.files,
            "file_count": len(self.files),
            "total_size_bytes": sum(os.path.getsize(f) for f in self.files if os.path.exists(f)),
        }

    def _lines(self, file_path: str) -> Iterator[Tuple[int, str]]:
        """Yield (line number, stripped line); a file that fails to read or decode is skipped from that point."""
        try:
            with open(file_path, "r", encoding=self.spec.encoding) as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if line:
                        yield line_num, line
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"Skipping unreadable file {file_path}: {e}")

    def stream(self) -> Iterable[RawDocument]:
        """Stream documents from all configured JSONL files."""
        if not self.files:
            log.warning(f"Source {self.name}: no .jsonl files match {self.spec.dataset!r}")
        for file_path in self.files:
            for line_num, line in self._lines(file_path):
                try:
                    ex = json.loads(line)
                except json.JSONDecodeError as e:
                    log.warning(f"Invalid JSON in {file_path}:{line_num}: {e}")
                    continue
                text = ex.get(self.spec.text_field) if isinstance(ex, dict) else None
                if not isinstance(text, str):
                    log.warning(f"Skipping {file_path}:{line_num}: no string '{self.spec.text_field}' field")
                    continue
                try:
                    language = normalize_language(ex.get(self.spec.language_field) or self.language)
                except ConfigurationError as e:
                    log.warning(f"Skipping {file_path}:{line_num}: {e}")
                    continue
                yield RawDocument(
                    raw_id=str(ex.get(self.spec.id_field, f"{Path(file_path).stem}_{line_num}")),
                    text=text,
                    language=language,
                    source=self.name,
                    source_file=f"{file_path}:{line_num}",
                    extra={"source_line": line_num},
                )
