"""Core pipeline data model.

Document is the value flowing through stages. It is immutable: a stage never
edits the document it receives, it returns a new one built with
`Document.with_annotations`, which only appends. Earlier annotations are never
reordered or removed, so every stage sees exactly what the stages before it
produced.

Annotation payloads are kept hashable (str, float, tuples) so annotation sets
of two documents can be compared directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet, Iterable, Optional, Tuple
import re

from ..errors import ConfigurationError
from ..utils.hashing import document_id

# built-in annotation kinds
SENTENCE = "sentence"
TOKEN = "token"
STOPWORD = "stopword"
POS = "pos"
NAMED_ENTITY = "named_entity"
NOUN_PHRASE = "noun_phrase"
PARSE_TREE = "parse_tree"
TOPIC_DISTRIBUTION = "topic_distribution"
TOPIC_ASSIGNMENT = "topic_assignment"

_LANGUAGE_RE = re.compile(r"^[a-z]{2,3}(-[A-Za-z0-9]{2,8})*$")


def normalize_language(language: Any) -> str:
    """Validate a BCP-47-ish language tag and lower-case its primary subtag."""
    if not isinstance(language, str) or not language.strip():
        raise ConfigurationError(f"invalid language tag: {language!r}")
    tag = language.strip()
    primary, _, rest = tag.partition("-")
    tag = primary.lower() + ("-" + rest if rest else "")
    if not _LANGUAGE_RE.match(tag):
        raise ConfigurationError(f"invalid language tag: {language!r}")
    return tag


@dataclass(frozen=True)
class Annotation:
    kind: str
    begin: int
    end: int
    value: Any = None
    producer: str = ""


@dataclass(frozen=True)
class Document:
    # identity
    doc_id: bytes
    text: str
    language: str

    # provenance
    source: str = "inline"
    source_file: Optional[str] = None

    annotations: Tuple[Annotation, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        text: str,
        language: str,
        *,
        source: str = "inline",
        source_file: Optional[str] = None,
    ) -> "Document":
        if not isinstance(text, str):
            raise ConfigurationError(f"document text must be a string, got {type(text).__name__}")
        return cls(
            doc_id=document_id(text, source, source_file),
            text=text,
            language=normalize_language(language),
            source=source,
            source_file=source_file,
        )

    @property
    def id_hex(self) -> str:
        return self.doc_id.hex()

    @property
    def label(self) -> str:
        """Short human-readable name used in logs and printed output."""
        return self.source_file or f"{self.source}:{self.id_hex[:12]}"

    def with_annotations(self, new: Iterable[Annotation]) -> "Document":
        new = tuple(new)
        size = len(self.text)
        for a in new:
            if not isinstance(a, Annotation):
                raise TypeError(f"not an Annotation: {a!r}")
            if not (0 <= a.begin <= a.end <= size):
                raise ValueError(
                    f"annotation {a.kind} [{a.begin}:{a.end}] outside text of length {size}"
                )
        if not new:
            return self
        return replace(self, annotations=self.annotations + new)

    def select(self, kind: str) -> Tuple[Annotation, ...]:
        return tuple(a for a in self.annotations if a.kind == kind)

    def kinds(self) -> FrozenSet[str]:
        return frozenset(a.kind for a in self.annotations)

    def covered_text(self, annotation: Annotation) -> str:
        return self.text[annotation.begin:annotation.end]

    def covered(self, outer: Annotation, kind: str) -> Tuple[Annotation, ...]:
        """Annotations of `kind` lying inside the span of `outer`."""
        return tuple(
            a for a in self.annotations
            if a.kind == kind and a.begin >= outer.begin and a.end <= outer.end
        )
