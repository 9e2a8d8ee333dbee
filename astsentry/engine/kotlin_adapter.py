"""
Kotlin language adapter for tree-sitter.

Like Python, a Kotlin syntax error does not abort the file; the Kotlin
analyzer reports it as an issue.
"""
import logging
import threading
from typing import Any, Optional, Tuple

import tree_sitter

from .types import LanguageAdapter

logger = logging.getLogger(__name__)


class KotlinAdapter(LanguageAdapter):
    """Tree-sitter adapter for Kotlin sources and scripts."""

    def __init__(self):
        self._language = None
        self._local = threading.local()

    @property
    def language_id(self) -> str:
        return "kotlin"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        return (".kt", ".kts")

    @property
    def grammar(self) -> tree_sitter.Language:
        """The tree-sitter Language, needed to compile queries."""
        if self._language is None:
            from tree_sitter_kotlin import language

            self._language = tree_sitter.Language(language())
            logger.debug("Kotlin grammar loaded")
        return self._language

    def _get_parser(self):
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = tree_sitter.Parser()
            parser.language = self.grammar
            self._local.parser = parser
        return parser

    def parse(self, text, file_path: Optional[str] = None) -> Any:
        if isinstance(text, str):
            text = text.encode("utf-8")
        return self._get_parser().parse(text)

    def check_syntax(self, tree: Any, text: str, file_path: str) -> None:
        """Syntax errors are reported by the kotlin-syntax-error rule."""
        return None


default_kotlin_adapter = KotlinAdapter()
