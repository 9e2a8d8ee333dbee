"""Rules: explicit-function-return-type, no-any-type

Type-annotation hygiene for TypeScript sources. Only top-level declarations
(including exported ones) are inspected:

- function declarations without a return type annotation
- `any` in variable, parameter and return annotations, reached through
  array, union and parenthesized types
"""

from typing import Iterator, List

from ..engine.nodes import named_statements, node_text, function_parameters
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

TYPED_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts")

FUNCTION_DECLARATIONS = {"function_declaration", "generator_function_declaration"}


class TypeAnnotationAnalyzer:
    """Missing return types and `any` annotations in TypeScript files."""

    meta = AnalyzerMeta(
        id="type-annotations",
        category=Category.TYPE_ANNOTATION,
        description="Explicit return types and avoidance of 'any'",
        langs=("javascript", "typescript"),
        rules=("explicit-function-return-type", "no-any-type"),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        if not ctx.file_path.lower().endswith(TYPED_EXTENSIONS):
            return
        for stmt in named_statements(ctx.root):
            if stmt.type == "export_statement":
                declaration = stmt.child_by_field_name("declaration")
                if declaration is None:
                    continue
                stmt = declaration
            yield from self._check_statement(ctx, stmt)

    def _check_statement(self, ctx: AnalyzerContext, stmt) -> Iterator[Issue]:
        if stmt.type in ("lexical_declaration", "variable_declaration"):
            for declarator in named_statements(stmt):
                if declarator.type == "variable_declarator":
                    yield from self._check_annotation(ctx, declarator.child_by_field_name("type"))
        elif stmt.type in FUNCTION_DECLARATIONS:
            for param in function_parameters(stmt):
                yield from self._check_annotation(ctx, param.child_by_field_name("type"))
            return_type = stmt.child_by_field_name("return_type")
            if return_type is None:
                name = stmt.child_by_field_name("name")
                label = node_text(name) if name is not None else "<anonymous>"
                yield ctx.report(
                    stmt,
                    f"Function '{label}' is missing an explicit return type",
                    "explicit-function-return-type",
                    Severity.SUGGESTION,
                    self.meta.category,
                )
            else:
                yield from self._check_annotation(ctx, return_type)

    def _check_annotation(self, ctx: AnalyzerContext, annotation) -> Iterator[Issue]:
        if annotation is None:
            return
        for any_node in self._find_any(annotation):
            yield ctx.report(
                any_node,
                "Avoid the 'any' type; it disables type checking for this value",
                "no-any-type",
                Severity.SUGGESTION,
                self.meta.category,
            )

    def _find_any(self, type_node) -> List:
        """`any` keywords inside an annotation, following array/union/paren types."""
        found = []
        stack = [type_node]
        while stack:
            node = stack.pop()
            kind = node.type
            if kind in ("type_annotation", "parenthesized_type", "union_type", "array_type",
                        "opting_type_annotation", "omitting_type_annotation"):
                stack.extend(reversed(node.named_children))
            elif kind == "predefined_type" and node_text(node) == "any":
                found.append(node)
        return found


RULES = [TypeAnnotationAnalyzer()]
