"""Best-practice rules for JavaScript and TypeScript.

Rules:
- no-var: `var` declarations (one issue per declarator)
- eqeqeq: loose `==` / `!=` comparisons
- no-empty-catch: catch clauses whose block has no statements
- no-double-negation: `!!value`
- no-void: the `void` operator
- no-sequences: comma sequences (reported once, on the outermost sequence)
- no-debugger: debugger statements, at warning level
"""

from typing import Iterator, Optional

from ..engine.nodes import iter_nodes, named_statements, node_text, operator_of
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity


class BestPracticeAnalyzer:
    """Style and correctness conventions matched on single nodes."""

    meta = AnalyzerMeta(
        id="best-practices",
        category=Category.BEST_PRACTICE,
        description="Legacy declarations, loose equality, confusing operators",
        langs=("javascript", "typescript"),
        rules=("no-var", "eqeqeq", "no-empty-catch", "no-double-negation",
               "no-void", "no-sequences", "no-debugger"),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        for node in iter_nodes(ctx.root):
            kind = node.type
            if kind == "variable_declaration":
                yield from self._check_var(ctx, node)
            elif kind == "binary_expression":
                operator = operator_of(node)
                if operator in ("==", "!="):
                    strict = "===" if operator == "==" else "!=="
                    yield self._issue(ctx, node, "eqeqeq",
                                      f"Use '{strict}' instead of '{operator}' for strict comparison")
            elif kind == "catch_clause":
                body = node.child_by_field_name("body")
                if body is not None and not named_statements(body):
                    yield self._issue(ctx, node, "no-empty-catch",
                                      "Empty catch block; handle the error or remove the catch")
            elif kind == "unary_expression":
                yield from self._check_unary(ctx, node)
            elif kind == "sequence_expression":
                issue = self._check_sequence(ctx, node)
                if issue:
                    yield issue
            elif kind == "debugger_statement":
                yield ctx.report(node, "Remove debugger statement before deploying to production",
                                 "no-debugger", Severity.WARNING, self.meta.category)

    def _issue(self, ctx: AnalyzerContext, node, rule: str, message: str) -> Issue:
        return ctx.report(node, message, rule, Severity.SUGGESTION, self.meta.category)

    def _check_var(self, ctx: AnalyzerContext, node) -> Iterator[Issue]:
        for declarator in named_statements(node):
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                yield self._issue(ctx, declarator, "no-var",
                                  f"Use 'let' or 'const' instead of 'var' for variable '{node_text(name)}'")

    def _check_unary(self, ctx: AnalyzerContext, node) -> Iterator[Issue]:
        operator = operator_of(node)
        if operator == "!":
            argument = node.child_by_field_name("argument")
            if argument is not None and argument.type == "unary_expression" and operator_of(argument) == "!":
                yield self._issue(ctx, node, "no-double-negation",
                                  "Avoid double negation (!!); use Boolean() for clarity")
        elif operator == "void":
            yield self._issue(ctx, node, "no-void", "Avoid the void operator; it obscures intent")

    def _check_sequence(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        parent = node.parent
        if parent is not None and parent.type == "sequence_expression":
            return None
        if len(node.named_children) > 1:
            return self._issue(ctx, node, "no-sequences",
                               "Avoid the comma operator; it makes code hard to read")
        return None


RULES = [BestPracticeAnalyzer()]
