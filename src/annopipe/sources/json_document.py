"""Single JSON document source.

The payload is one JSON object with string fields `language` and `text`:

    {"language": "en", "text": "Barack Obama visited Berlin."}

The payload is parsed and validated in the constructor; anything malformed is
a ConfigurationError raised before any stage runs.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
import json

from ..config.schema import SourceSpec
from ..errors import ConfigurationError
from ..pipeline.context import normalize_language
from .base import DataSource, RawDocument

def parse_json_document(payload: Any, *, text_field: str = "text", language_field: str = "language") -> Dict[str, Any]:
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    if not isinstance(payload, str):
        raise ConfigurationError(f"JSON document must be a string, got {type(payload).__name__}")
    try:
        obj = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"malformed JSON document: {e}") from e
    if not isinstance(obj, dict):
        raise ConfigurationError("JSON document must be an object")
    for key in (language_field, text_field):
        if key not in obj:
            raise ConfigurationError(f"JSON document is missing the '{key}' field")
        if not isinstance(obj[key], str):
            raise ConfigurationError(f"JSON document field '{key}' must be a string")
    obj[language_field] = normalize_language(obj[language_field])
    return obj


class JSONDocumentSource(DataSource):
    def __init__(self, spec: SourceSpec, payload: Optional[str] = None):
        self.spec = spec
        self.name = spec.source_name
        payload = payload if payload is not None else spec.payload
        if payload is None:
            raise ConfigurationError("json_document source requires a payload")
        self.obj = parse_json_document(
            payload, text_field=spec.text_field, language_field=spec.language_field,
        )

    def metadata(self) -> Dict[str, Any]:
        return {"kind": "json_document", "language": self.obj[self.spec.language_field],
                "chars": len(self.obj[self.spec.text_field])}

    def stream(self) -> Iterable[RawDocument]:
        yield RawDocument(
            raw_id=str(self.obj.get(self.spec.id_field, "json")),
            text=self.obj[self.spec.text_field],
            language=self.obj[self.spec.language_field],
            source=self.name,
            extra={k: v for k, v in self.obj.items()
                   if k not in (self.spec.text_field, self.spec.language_field)},
        )
