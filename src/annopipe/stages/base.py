"""Stage plugin interface.

Stages must:
- accept a Document
- return a Document: the one received plus zero or more appended annotations
- declare which annotation kinds they need (`requires`) and create (`produces`)
- raise a StageError subclass when they cannot process a document

Options are bound once, in the constructor. Resources (model files, word lists,
NLTK data) are loaded there as well, so a missing resource is reported as a
ConfigurationError before any document flows.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from ..errors import ConfigurationError, MalformedInputError, UnsupportedLanguageError
from ..pipeline.context import Document, normalize_language

class Stage(ABC):
    name: str = "stage"
    layer: str = "annotation"
    requires: Tuple[str, ...] = ()
    produces: Tuple[str, ...] = ()

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.options = MappingProxyType(dict(options or {}))

    @abstractmethod
    def apply(self, doc: Document) -> Document:
        ...

    def close(self) -> None:
        """Release resources held by the stage. Default: nothing to release."""

    # option helpers

    def _option(self, key: str, default: Any = None, *, types: Tuple[type, ...] = ()) -> Any:
        value = self.options.get(key, default)
        # bool is an int subclass; only accept it where asked for
        wrong_bool = isinstance(value, bool) and bool not in types
        if types and value is not None and (wrong_bool or not isinstance(value, types)):
            names = "/".join(t.__name__ for t in types)
            raise ConfigurationError(f"{self.name}: option {key!r} must be {names}, got {value!r}")
        return value

    def _languages(self, default: Iterable[str]) -> frozenset:
        langs = self.options.get("languages", list(default))
        if isinstance(langs, str):
            langs = [langs]
        if not isinstance(langs, (list, tuple)) or not langs:
            raise ConfigurationError(f"{self.name}: option 'languages' must be a non-empty list")
        return frozenset(normalize_language(l) for l in langs)

    def _check_language(self, doc: Document, supported: frozenset) -> None:
        primary = doc.language.split("-", 1)[0]
        if doc.language not in supported and primary not in supported:
            raise UnsupportedLanguageError(
                f"{self.name} does not support language {doc.language!r} (supported: {sorted(supported)})"
            )

    def _check_requires(self, doc: Document) -> None:
        if not doc.text.strip():
            return
        missing = [k for k in self.requires if not doc.select(k)]
        if missing:
            raise MalformedInputError(f"{self.name}: document has no {missing} annotations")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
