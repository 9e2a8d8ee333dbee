"""Kotlin rules driven by a single tree-sitter query.

The query only names node types; the shape checks (callee name, declared
name, enclosing constant) happen in the handlers. `null` has no node type of
its own in the Kotlin grammar and is matched as an identifier.
"""

from collections import Counter
from typing import Callable, Dict, Optional

import tree_sitter

from ..engine.kotlin_adapter import default_kotlin_adapter
from ..engine.nodes import iter_nodes, node_text
from ..engine.queries import QueryAnalyzer
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

KOTLIN_QUERY = """
(call_expression) @call
(number_literal) @magic_number
(class_declaration) @class_decl
(property_declaration) @property_naming
(property_declaration) @property_usage
(if_expression) @if_expr
((identifier) @null_value
  (#eq? @null_value "null"))
"""

PRINT_FUNCTIONS = {"print", "println"}
ALLOWED_NUMBERS = {"0", "1"}


def is_constant_name(name: str) -> bool:
    return all(not c.isalpha() or c.isupper() for c in name)


def declared_names(property_decl):
    """Identifier nodes declared by a `val`/`var` property."""
    names = []
    for child in property_decl.named_children:
        if child.type != "variable_declaration":
            continue
        for part in child.named_children:
            if part.type == "identifier":
                names.append(part)
                break
    return names


class KotlinQueryAnalyzer(QueryAnalyzer):
    """Print calls, magic numbers, naming, unused properties, null literals and nested ifs."""

    meta = AnalyzerMeta(
        id="kotlin",
        category=Category.CODE_QUALITY,
        description="Query-based checks for Kotlin sources",
        langs=("kotlin",),
        rules=("kotlin-syntax-error", "no-print", "no-magic-numbers", "class-naming",
               "variable-naming", "unused-variable", "avoid-null", "nested-if",
               "internal-error"),
    )

    language_name = "Kotlin"
    syntax_rule = "kotlin-syntax-error"

    def __init__(self, query_source: str = KOTLIN_QUERY):
        super().__init__(query_source)

    def handlers(self) -> Dict[str, Callable]:
        return {
            "call": self._on_call,
            "magic_number": self._on_number,
            "class_decl": self._on_class,
            "property_naming": self._on_property_naming,
            "property_usage": self._on_property_usage,
            "if_expr": self._on_if,
            "null_value": self._on_null,
        }

    def default_grammar(self) -> tree_sitter.Language:
        return default_kotlin_adapter.grammar

    def prepare(self, ctx: AnalyzerContext) -> Counter:
        """How often each identifier occurs in the file."""
        return Counter(node_text(node) for node in iter_nodes(ctx.root) if node.type == "identifier")

    def _on_call(self, ctx: AnalyzerContext, node, counts) -> Optional[Issue]:
        callee = node.named_children[0] if node.named_children else None
        if callee is None or callee.type != "identifier" or node_text(callee) not in PRINT_FUNCTIONS:
            return None
        return ctx.report(node, "Avoid using print/println in production code. Use a logger instead.",
                          "no-print", Severity.WARNING, Category.BEST_PRACTICE)

    def _on_number(self, ctx: AnalyzerContext, node, counts) -> Optional[Issue]:
        text = node_text(node)
        if text in ALLOWED_NUMBERS or self._in_constant(node):
            return None
        return ctx.report(node, f"Magic number detected: {text}. Define as a constant.",
                          "no-magic-numbers", Severity.SUGGESTION, Category.BEST_PRACTICE)

    def _in_constant(self, node) -> bool:
        parent = node.parent
        while parent is not None and parent.type not in ("function_declaration", "class_body"):
            if parent.type == "property_declaration":
                return any(is_constant_name(node_text(name)) for name in declared_names(parent))
            parent = parent.parent
        return False

    def _on_class(self, ctx: AnalyzerContext, node, counts) -> Optional[Issue]:
        name = node.child_by_field_name("name")
        if name is None or node_text(name)[:1].isupper():
            return None
        return ctx.report(name, f"Class name '{node_text(name)}' should start with an uppercase letter.",
                          "class-naming", Severity.WARNING, Category.CODE_QUALITY)

    def _on_property_naming(self, ctx: AnalyzerContext, node, counts) -> Optional[Issue]:
        for name_node in declared_names(node):
            name = node_text(name_node)
            if not name[:1].islower() and not is_constant_name(name):
                return ctx.report(
                    name_node, f"Variable name '{name}' should start with a lowercase letter.",
                    "variable-naming", Severity.WARNING, Category.CODE_QUALITY,
                )
        return None

    def _on_property_usage(self, ctx: AnalyzerContext, node, counts) -> Optional[Issue]:
        for name_node in declared_names(node):
            name = node_text(name_node)
            # the declaration itself is the only occurrence
            if counts[name] <= 1:
                return ctx.report(
                    name_node, f"Variable '{name}' appears to be unused.",
                    "unused-variable", Severity.WARNING, Category.MAINTAINABILITY,
                )
        return None

    def _on_if(self, ctx: AnalyzerContext, node, counts) -> Optional[Issue]:
        depth = 0
        parent = node.parent
        while parent is not None:
            if parent.type == "if_expression":
                depth += 1
            parent = parent.parent
        if depth < 2:
            return None
        return ctx.report(node, "Avoid deeply nested if statements (depth >= 2). Refactor into smaller functions.",
                          "nested-if", Severity.WARNING, Category.COMPLEXITY)

    def _on_null(self, ctx: AnalyzerContext, node, counts) -> Optional[Issue]:
        return ctx.report(node, "Avoid using 'null' directly. Use Kotlin's null safety features like '?' or '?:'.",
                          "avoid-null", Severity.SUGGESTION, Category.CODE_QUALITY)


RULES = [KotlinQueryAnalyzer()]
