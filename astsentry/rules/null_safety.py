"""Null-safety rules for JavaScript and TypeScript.

Syntactic detectors for accesses that throw when a value is null or
undefined. Any member/call chain that already uses optional chaining (`?.`)
anywhere is left alone.

- no-unsafe-member-access: `a.b.c`, reported on the outer access
- no-unsafe-array-access: `items[i]` on a receiver named like an array
- no-unsafe-array-method: `items.map(...)` and friends on a named receiver
- no-unsafe-destructuring: `const { a } = obj` without defaults, once per declarator
"""

from typing import Iterator, Optional

from ..engine.nodes import in_optional_chain, iter_nodes, node_text
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

ARRAY_METHODS = {"map", "filter", "reduce", "forEach", "find", "some", "every"}

CHAIN_TYPES = {"member_expression", "subscript_expression", "call_expression"}


def chain_top(node):
    """Outermost expression of the member/call chain that node is the receiver of."""
    while True:
        parent = node.parent
        if parent is None or parent.type not in CHAIN_TYPES:
            return node
        field = "function" if parent.type == "call_expression" else "object"
        receiver = parent.child_by_field_name(field)
        if receiver is None or receiver.id != node.id:
            return node
        node = parent


def is_optional_chain(node) -> bool:
    return in_optional_chain(chain_top(node))


def looks_like_array(name: str) -> bool:
    lowered = name.lower()
    return "array" in lowered or "arr" in lowered or lowered.endswith("s")


class NullSafetyAnalyzer:
    """Detect property chains and array operations that assume non-null values."""

    meta = AnalyzerMeta(
        id="null-safety",
        category=Category.CODE_QUALITY,
        description="Unchecked member access, array access and destructuring",
        langs=("javascript", "typescript"),
        rules=("no-unsafe-member-access", "no-unsafe-array-access",
               "no-unsafe-array-method", "no-unsafe-destructuring"),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        for node in iter_nodes(ctx.root):
            kind = node.type
            issue = None
            if kind == "member_expression":
                issue = self._check_member(ctx, node)
            elif kind == "subscript_expression":
                issue = self._check_subscript(ctx, node)
            elif kind == "call_expression":
                issue = self._check_call(ctx, node)
            elif kind == "variable_declarator":
                issue = self._check_destructuring(ctx, node)
            if issue:
                yield issue

    def _check_member(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        obj = node.child_by_field_name("object")
        if obj is None or obj.type != "member_expression" or is_optional_chain(node):
            return None
        return ctx.report(
            node,
            "Chained property access without a null check. Consider optional chaining (?.) or validating the data first",
            "no-unsafe-member-access",
            Severity.WARNING,
            self.meta.category,
        )

    def _check_subscript(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        obj = node.child_by_field_name("object")
        if obj is None or obj.type != "identifier" or is_optional_chain(node):
            return None
        if not looks_like_array(node_text(obj)):
            return None
        return ctx.report(
            node,
            "Direct array access without a length check. Verify the index exists first",
            "no-unsafe-array-access",
            Severity.SUGGESTION,
            self.meta.category,
        )

    def _check_call(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        callee = node.child_by_field_name("function")
        if callee is None or callee.type != "member_expression" or is_optional_chain(node):
            return None
        receiver = callee.child_by_field_name("object")
        method = node_text(callee.child_by_field_name("property"))
        if receiver is None or receiver.type != "identifier" or method not in ARRAY_METHODS:
            return None
        return ctx.report(
            node,
            f"Calling {method}() on a possibly null or undefined array. Add a null check first",
            "no-unsafe-array-method",
            Severity.WARNING,
            self.meta.category,
        )

    def _check_destructuring(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        pattern = node.child_by_field_name("name")
        if pattern is None:
            return None
        if pattern.type == "object_pattern":
            unsafe = any(self._bare_property(prop) for prop in pattern.named_children)
            hint = "const { prop = defaultValue } = obj"
        elif pattern.type == "array_pattern":
            unsafe = any(elem.type == "identifier" for elem in pattern.named_children)
            hint = "const [first = defaultValue] = array"
        else:
            return None
        if not unsafe:
            return None
        return ctx.report(
            node,
            f"Destructuring without default values. Use: {hint}",
            "no-unsafe-destructuring",
            Severity.SUGGESTION,
            self.meta.category,
        )

    def _bare_property(self, prop) -> bool:
        if prop.type == "shorthand_property_identifier_pattern":
            return True
        if prop.type == "pair_pattern":
            value = prop.child_by_field_name("value")
            return value is not None and value.type == "identifier"
        return False


RULES = [NullSafetyAnalyzer()]
