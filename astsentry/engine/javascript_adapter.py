"""
JavaScript language adapter for tree-sitter.
"""
import logging
import threading
from typing import Any, Optional, Tuple

import tree_sitter

from .types import LanguageAdapter

logger = logging.getLogger(__name__)


class JavaScriptAdapter(LanguageAdapter):
    """Tree-sitter adapter for JavaScript language."""

    def __init__(self):
        self._language = None
        # tree_sitter.Parser is not safe to share between threads
        self._local = threading.local()

    @property
    def language_id(self) -> str:
        return "javascript"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        return (".js", ".jsx", ".mjs", ".cjs")

    def _get_language(self):
        if self._language is None:
            from tree_sitter_javascript import language

            self._language = tree_sitter.Language(language())
            logger.debug("JavaScript grammar loaded")
        return self._language

    def _get_parser(self):
        """Get or create this thread's tree-sitter parser."""
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = tree_sitter.Parser()
            parser.language = self._get_language()
            self._local.parser = parser
        return parser

    def parse(self, text: str, file_path: Optional[str] = None) -> Any:
        """Parse text and return a Tree-sitter tree."""
        if isinstance(text, str):
            text = text.encode("utf-8")
        return self._get_parser().parse(text)


default_javascript_adapter = JavaScriptAdapter()
