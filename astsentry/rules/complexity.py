"""Complexity rules: complexity, max-depth, max-statements, max-params

Cyclomatic-like complexity is a structural branch count, not McCabe's graph
metric. For a function it is 1 plus the decisions of its body statements:

- `if`: 1, plus the decisions found by unwrapping its branches through
  blocks and further `if` statements (loops inside branches are not counted)
- `for` / `for-in` / `for-of` / `while` / `do-while`: 1
- `switch`: one per case, `default` included
- `try`: 1, plus the decisions of the try block and the catch block
- any other statement: whatever unwrapping it through blocks yields

Nesting depth restarts at 0 inside every function. Each `if` or loop occupies
the level below its container; an `else if` stays on the level of the `if`
it continues. `switch` and `try` do not add a level.
"""

from typing import Any, Iterator, List, Tuple

from ..engine.nodes import (
    FUNCTION_TYPES,
    LOOP_TYPES,
    block_statements,
    else_body,
    function_name,
    function_parameters,
    named_statements,
)
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

DEFAULT_MAX_COMPLEXITY = 10
DEFAULT_MAX_DEPTH = 4
DEFAULT_MAX_STATEMENTS = 50
DEFAULT_MAX_PARAMS = 5

CASE_TYPES = {"switch_case", "switch_default"}


def count_decisions(nodes: List, full: bool = True) -> int:
    """Decision points reachable from nodes (no base of 1).

    With full=False a node only contributes by unwrapping blocks and `if`s,
    which is how branches of an `if` are counted.
    """
    total = 0
    stack = [(node, full) for node in nodes]
    while stack:
        node, full = stack.pop()
        if node is None:
            continue
        kind = node.type
        if kind == "statement_block":
            stack.extend((child, True) for child in named_statements(node))
        elif kind == "if_statement":
            total += 1
            stack.append((node.child_by_field_name("consequence"), False))
            stack.append((else_body(node), False))
        elif not full:
            continue
        elif kind in LOOP_TYPES:
            total += 1
        elif kind == "switch_statement":
            body = node.child_by_field_name("body")
            total += len([case for case in named_statements(body) if case.type in CASE_TYPES])
        elif kind == "try_statement":
            total += 1
            stack.extend((stmt, True) for stmt in block_statements(node.child_by_field_name("body")))
            handler = node.child_by_field_name("handler")
            if handler is not None:
                stack.extend((stmt, True) for stmt in block_statements(handler.child_by_field_name("body")))
    return total


def function_complexity(func) -> int:
    body = func.child_by_field_name("body")
    if body is None or body.type != "statement_block":
        return 1
    return 1 + count_decisions(named_statements(body))


class ComplexityAnalyzer:
    """Per-function complexity and parameter count, nesting depth and block size."""

    meta = AnalyzerMeta(
        id="complexity",
        category=Category.MAINTAINABILITY,
        description="Cyclomatic-like complexity, nesting depth, block size and parameter count",
        langs=("javascript", "typescript"),
        rules=("complexity", "max-depth", "max-statements", "max-params"),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        config = ctx.config or {}
        limits = {
            "complexity": int(config.get("max_complexity", DEFAULT_MAX_COMPLEXITY)),
            "depth": int(config.get("max_depth", DEFAULT_MAX_DEPTH)),
            "statements": int(config.get("max_statements", DEFAULT_MAX_STATEMENTS)),
            "params": int(config.get("max_params", DEFAULT_MAX_PARAMS)),
        }
        # (node, depth) pairs; children are pushed reversed to keep document order
        stack = [(stmt, 0) for stmt in reversed(named_statements(ctx.root))]
        while stack:
            node, depth = stack.pop()
            yield from self._check(ctx, node, depth, limits)
            stack.extend(reversed(self._descend(node, depth)))

    def _check(self, ctx: AnalyzerContext, node, depth: int, limits) -> Iterator[Issue]:
        kind = node.type
        if kind in FUNCTION_TYPES:
            yield from self._check_function(ctx, node, limits)
        elif kind == "if_statement":
            level = depth + 1
            if level >= limits["depth"]:
                yield ctx.report(
                    node,
                    f"Nested if statement is too deep (level {level}). Consider refactoring to reduce complexity",
                    "max-depth", Severity.WARNING, self.meta.category,
                )
        elif kind in LOOP_TYPES:
            level = depth + 1
            if level >= limits["depth"]:
                yield ctx.report(
                    node,
                    f"Loop is nested too deeply (level {level})",
                    "max-depth", Severity.WARNING, self.meta.category,
                )
        elif kind == "statement_block":
            yield from self._check_size(ctx, node, named_statements(node), limits)
        elif kind in CASE_TYPES:
            statements = [s for s in node.children_by_field_name("body") if s.type != "comment"]
            yield from self._check_size(ctx, node, statements, limits)

    def _descend(self, node, depth: int) -> List[Tuple[Any, int]]:
        """Children to visit next, each with the nesting depth it sits at."""
        kind = node.type
        if kind in FUNCTION_TYPES:
            return [(child, 0) for child in node.named_children]

        if kind == "if_statement":
            level = depth + 1
            children = []
            condition = node.child_by_field_name("condition")
            if condition is not None:
                children.append((condition, depth))
            consequence = node.child_by_field_name("consequence")
            if consequence is not None:
                children.append((consequence, level))
            alternative = else_body(node)
            if alternative is not None:
                # `else if` continues the chain on the same level
                children.append((alternative, depth if alternative.type == "if_statement" else level))
            return children

        if kind in LOOP_TYPES:
            level = depth + 1
            body = node.child_by_field_name("body")
            return [
                (child, level if body is not None and child.id == body.id else depth)
                for child in node.named_children
            ]

        return [(child, depth) for child in node.named_children]

    def _check_size(self, ctx: AnalyzerContext, node, statements: List, limits) -> Iterator[Issue]:
        count = len(statements)
        if count > limits["statements"]:
            yield ctx.report(
                node,
                f"Block has too many statements ({count}). Consider splitting it into smaller functions",
                "max-statements", Severity.SUGGESTION, self.meta.category,
            )

    def _check_function(self, ctx: AnalyzerContext, node, limits) -> Iterator[Issue]:
        name = function_name(node) or "<anonymous>"
        complexity = function_complexity(node)
        if complexity > limits["complexity"]:
            yield ctx.report(
                node,
                f"Function '{name}' has a high cyclomatic complexity ({complexity}). Consider refactoring",
                "complexity", Severity.WARNING, self.meta.category,
            )
        params = len(function_parameters(node))
        if params > limits["params"]:
            yield ctx.report(
                node,
                f"Function '{name}' has too many parameters ({params}). Consider using a parameter object",
                "max-params", Severity.SUGGESTION, self.meta.category,
            )


RULES = [ComplexityAnalyzer()]
