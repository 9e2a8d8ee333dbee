"""Rule: no-unused-vars

Top-level declarations that are never referenced anywhere in the file.

The check is a two-pass symbol walk, not a scope analysis:

1. Declarations are collected from the top-level statements only, following
   `if` branches and `for` initializers. Block bodies are opaque, so names
   declared inside `{ ... }` are never reported.
2. References are collected from every expression position in the whole file,
   nested blocks and function bodies included.

A declared name is reported when it is never referenced and does not start
with `_`. Because names are compared as plain strings, a use of a shadowing
inner binding counts as a use of the outer one.
"""

from typing import Dict, Iterator, Set

from ..engine.nodes import VARIABLE_DECLARATION_TYPES, else_body, iter_nodes, named_statements, node_text
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

REFERENCE_TYPES = {"identifier", "shorthand_property_identifier"}

NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "class_declaration",
    "class",
}

# Parents whose identifier children are always bindings
PATTERN_PARENTS = {
    "formal_parameters",
    "object_pattern",
    "array_pattern",
    "rest_pattern",
    "import_specifier",
    "import_clause",
    "namespace_import",
}


def _same(a, b) -> bool:
    return (a is not None and b is not None and a.type == b.type
            and a.start_byte == b.start_byte and a.end_byte == b.end_byte)


def is_binding_identifier(node) -> bool:
    """True when an identifier node declares a name instead of reading one."""
    parent = node.parent
    if parent is None:
        return False
    kind = parent.type
    if kind in PATTERN_PARENTS:
        return True
    if kind == "variable_declarator" or kind in NAMED_DECLARATIONS:
        return _same(parent.child_by_field_name("name"), node)
    if kind in ("assignment_pattern", "object_assignment_pattern"):
        return _same(parent.child_by_field_name("left"), node)
    if kind in ("required_parameter", "optional_parameter"):
        return _same(parent.child_by_field_name("pattern"), node)
    if kind == "pair_pattern":
        return _same(parent.child_by_field_name("value"), node)
    if kind == "arrow_function":
        return _same(parent.child_by_field_name("parameter"), node)
    if kind == "catch_clause":
        return _same(parent.child_by_field_name("parameter"), node)
    if kind == "for_in_statement":
        # `for (const x of xs)` declares x; `for (x of xs)` assigns it
        return parent.child_by_field_name("kind") is not None and _same(parent.child_by_field_name("left"), node)
    return False


class UnusedBindingAnalyzer:
    """Report top-level variables and functions that are never referenced."""

    meta = AnalyzerMeta(
        id="unused",
        category=Category.CODE_QUALITY,
        description="Declared but never referenced top-level bindings",
        langs=("javascript", "typescript"),
        rules=("no-unused-vars",),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        declared: Dict[str, object] = {}
        for stmt in named_statements(ctx.root):
            self._collect_declarations(stmt, declared)

        if not declared:
            return

        used = self._collect_references(ctx.root)
        for name, ident in declared.items():
            if name in used or name.startswith("_"):
                continue
            yield ctx.report(
                ident,
                f"Variable '{name}' is declared but never used",
                "no-unused-vars",
                Severity.SUGGESTION,
                self.meta.category,
            )

    def _collect_declarations(self, stmt, declared: Dict[str, object]) -> None:
        stack = [stmt]
        while stack:
            node = stack.pop()
            kind = node.type
            if kind in VARIABLE_DECLARATION_TYPES:
                self._declare_variables(node, declared)
            elif kind in ("function_declaration", "generator_function_declaration"):
                name = node.child_by_field_name("name")
                if name is not None:
                    declared[node_text(name)] = name
            elif kind == "if_statement":
                # alternative pushed first so the consequence is declared first
                alternative = else_body(node)
                if alternative is not None:
                    stack.append(alternative)
                consequence = node.child_by_field_name("consequence")
                if consequence is not None:
                    stack.append(consequence)
            elif kind == "for_statement":
                initializer = node.child_by_field_name("initializer")
                if initializer is not None and initializer.type in VARIABLE_DECLARATION_TYPES:
                    self._declare_variables(initializer, declared)
            # statement_block: opaque

    def _declare_variables(self, declaration, declared: Dict[str, object]) -> None:
        for declarator in named_statements(declaration):
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                # a later declaration of the same name replaces the span
                declared[node_text(name)] = name

    def _collect_references(self, root) -> Set[str]:
        used: Set[str] = set()
        for node in iter_nodes(root):
            if node.type in REFERENCE_TYPES and not is_binding_identifier(node):
                used.add(node_text(node))
        return used


RULES = [UnusedBindingAnalyzer()]
