"""
Python language adapter for tree-sitter.

Unlike the script adapters, syntax errors in Python sources do not abort the
file: the Python analyzer reports them as issues instead.
"""
import logging
import threading
from typing import Any, Optional, Tuple

import tree_sitter

from .types import LanguageAdapter

logger = logging.getLogger(__name__)


class PythonAdapter(LanguageAdapter):
    """Tree-sitter adapter for Python language."""

    def __init__(self):
        self._language = None
        self._local = threading.local()

    @property
    def language_id(self) -> str:
        return "python"

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        return (".py", ".pyi")

    @property
    def grammar(self) -> tree_sitter.Language:
        """The tree-sitter Language, needed to compile queries."""
        if self._language is None:
            from tree_sitter_python import language

            self._language = tree_sitter.Language(language())
            logger.debug("Python grammar loaded")
        return self._language

    def _get_parser(self):
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = tree_sitter.Parser()
            parser.language = self.grammar
            self._local.parser = parser
        return parser

    def parse(self, text, file_path: Optional[str] = None) -> Any:
        """Parse text and return a Tree-sitter tree."""
        if isinstance(text, str):
            text = text.encode("utf-8")
        return self._get_parser().parse(text)

    def check_syntax(self, tree: Any, text: str, file_path: str) -> None:
        """Syntax errors are reported by the python-syntax-error rule."""
        return None


default_python_adapter = PythonAdapter()
