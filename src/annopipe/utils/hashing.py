"""Hashing utilities.

- document ids: raw 32-byte SHA-256 of the document's provenance and text,
  rendered as hex wherever they leave the process
- config fingerprints: hex SHA-256 of a canonical JSON dump, logged at the
  start of a run so two runs can be compared by their setup
"""

from typing import Any, Mapping, Optional
import hashlib
import json

def document_id(text: str, source: str, source_file: Optional[str] = None) -> bytes:
    identity = "\x00".join((source, source_file or "", text))
    return hashlib.sha256(identity.encode("utf-8", errors="surrogatepass")).digest()

def config_fingerprint(config: Mapping[str, Any]) -> str:
    # default=str: option values may be paths or other non-JSON scalars
    blob = json.dumps(config, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(blob.encode("utf-8")).hexdigest()
