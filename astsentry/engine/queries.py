"""
Base class for analyzers driven by a single tree-sitter query.

Subclasses supply the query text and a handler per capture name; matches are
processed in document order and every handler returns an Issue or None.

A query that does not compile against the active grammar does not abort the
run: the file gets one `internal-error` issue instead.
"""

import logging
from typing import Any, Callable, Dict, Iterator

import tree_sitter

from .errors import InternalQueryError
from .types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

logger = logging.getLogger(__name__)


class QueryAnalyzer:
    """Runs one compiled query per grammar and dispatches captures to handlers."""

    meta: AnalyzerMeta
    #: Display name used in syntax and internal error messages
    language_name = ""
    #: Rule reported once when the tree contains ERROR or MISSING nodes
    syntax_rule = ""

    def __init__(self, query_source: str):
        self._query_source = query_source
        # compiled once per grammar, immutable afterwards
        self._queries: Dict[int, tree_sitter.Query] = {}

    def handlers(self) -> Dict[str, Callable]:
        """Map of capture name to handler(ctx, node, state)."""
        raise NotImplementedError

    def default_grammar(self) -> tree_sitter.Language:
        """Grammar used when the context carries no adapter."""
        raise NotImplementedError

    def prepare(self, ctx: AnalyzerContext) -> Any:
        """Per-file state passed to every handler; the analyzer config by default."""
        return ctx.config or {}

    def _compile(self, language: tree_sitter.Language) -> tree_sitter.Query:
        key = id(language)
        query = self._queries.get(key)
        if query is None:
            try:
                query = tree_sitter.Query(language, self._query_source)
            except tree_sitter.QueryError as exc:
                raise InternalQueryError(str(exc)) from exc
            self._queries[key] = query
        return query

    def _grammar(self, ctx: AnalyzerContext) -> tree_sitter.Language:
        grammar = getattr(ctx.adapter, "grammar", None)
        if grammar is None:
            grammar = self.default_grammar()
        return grammar

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        root = ctx.root
        if root.has_error:
            yield ctx.report_span(
                (0, 0), f"Syntax error detected in {self.language_name} file", self.syntax_rule,
                Severity.ERROR, Category.CODE_QUALITY,
            )

        try:
            query = self._compile(self._grammar(ctx))
        except InternalQueryError as exc:
            logger.error("%s query failed to compile: %s", self.language_name, exc)
            yield ctx.report_span(
                (0, 0), f"Internal Error: Failed to compile {self.language_name} AST Query: {exc}",
                "internal-error", Severity.ERROR, Category.CODE_QUALITY,
            )
            return

        handlers = self.handlers()
        state = self.prepare(ctx)
        for _, captures in tree_sitter.QueryCursor(query).matches(root):
            for name, nodes in captures.items():
                handler = handlers.get(name)
                if handler is None:
                    continue
                for node in nodes:
                    issue = handler(ctx, node, state)
                    if issue:
                        yield issue
