"""
TypeScript language adapter for tree-sitter.

`.tsx` files are parsed with the TSX grammar, everything else with the plain
TypeScript grammar.
"""
import logging
import threading
from typing import Any, Optional, Tuple

import tree_sitter

from .types import LanguageAdapter

logger = logging.getLogger(__name__)


class TypeScriptAdapter(LanguageAdapter):
    """Tree-sitter adapter for TypeScript language."""

    def __init__(self):
        self._ts_language = None
        self._tsx_language = None
        self._local = threading.local()

    @property
    def language_id(self) -> str:
        return "typescript"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        return (".ts", ".tsx", ".mts", ".cts")

    def _get_ts_language(self):
        if self._ts_language is None:
            from tree_sitter_typescript import language_typescript

            self._ts_language = tree_sitter.Language(language_typescript())
            logger.debug("TypeScript grammar loaded")
        return self._ts_language

    def _get_tsx_language(self):
        if self._tsx_language is None:
            from tree_sitter_typescript import language_tsx

            self._tsx_language = tree_sitter.Language(language_tsx())
            logger.debug("TSX grammar loaded")
        return self._tsx_language

    def _get_parser(self, file_path: Optional[str] = None):
        """Get this thread's parser for the grammar matching the file extension."""
        is_tsx = bool(file_path) and file_path.lower().endswith(".tsx")
        attr = "tsx_parser" if is_tsx else "ts_parser"
        parser = getattr(self._local, attr, None)
        if parser is None:
            parser = tree_sitter.Parser()
            parser.language = self._get_tsx_language() if is_tsx else self._get_ts_language()
            setattr(self._local, attr, parser)
        return parser

    def parse(self, text: str, file_path: Optional[str] = None) -> Any:
        """Parse text and return a Tree-sitter tree."""
        if isinstance(text, str):
            text = text.encode("utf-8")
        return self._get_parser(file_path).parse(text)


default_typescript_adapter = TypeScriptAdapter()
