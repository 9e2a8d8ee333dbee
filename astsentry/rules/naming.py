"""Naming rules: no-generic-name, no-generic-function-name, no-short-name, boolean-prefix

Every identifier binding site is checked: variable declarators, function
names, parameters and loop variables. The checks are independent, so one
name can trigger several rules.
"""

from typing import Iterator, List

from ..engine.nodes import (
    FUNCTION_TYPES,
    VARIABLE_DECLARATION_TYPES,
    function_parameters,
    iter_nodes,
    node_text,
    parameter_identifier,
)
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

GENERIC_NAMES = frozenset([
    "data", "result", "info", "value", "item", "obj", "object", "stuff",
    "things", "content", "output", "input", "temp", "variable", "param",
    "args", "opts", "options", "err", "val", "elem", "arr", "str", "num", "bool",
])

GENERIC_FUNCTION_NAMES = frozenset([
    "handle", "process", "execute", "run", "do", "perform", "action",
    "handler", "callback", "fn", "func",
])

SHORT_NAME_ALLOWED = frozenset(["i", "j", "k", "x", "y", "z", "_", "$", "a", "b"])
LOOP_SHORT_NAME_ALLOWED = frozenset(["i", "j", "k", "x", "y"])
MIN_NAME_LENGTH = 3

BOOLEAN_WORDS = frozenset([
    "active", "visible", "enabled", "disabled", "ready", "loading", "valid",
    "invalid", "allowed", "blocked", "open", "closed", "true", "false",
    "undefined", "null", "empty",
])
BOOLEAN_PREFIXES = ("is", "has", "can", "should", "will", "are")

NAMED_FUNCTION_TYPES = {
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "method_definition",
}


def is_generic_name(name: str) -> bool:
    return name.lower() in GENERIC_NAMES


def is_generic_function_name(name: str) -> bool:
    return name.lower() in GENERIC_FUNCTION_NAMES


def is_too_short(name: str, allowed=SHORT_NAME_ALLOWED) -> bool:
    return len(name) < MIN_NAME_LENGTH and name not in allowed


def is_boolean_without_prefix(name: str) -> bool:
    lowered = name.lower()
    if lowered.startswith(BOOLEAN_PREFIXES):
        return False
    return lowered in BOOLEAN_WORDS


def _is_loop_declaration(declaration) -> bool:
    parent = declaration.parent
    if parent is None or parent.type != "for_statement":
        return False
    initializer = parent.child_by_field_name("initializer")
    return initializer is not None and initializer.id == declaration.id


class NamingAnalyzer:
    """Check binding names for generic, too-short and boolean-without-prefix names."""

    meta = AnalyzerMeta(
        id="naming",
        category=Category.CODE_QUALITY,
        description="Descriptive identifier names",
        langs=("javascript", "typescript"),
        rules=("no-generic-name", "no-generic-function-name", "no-short-name", "boolean-prefix"),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        for node in iter_nodes(ctx.root):
            kind = node.type
            if kind in VARIABLE_DECLARATION_TYPES:
                loop = _is_loop_declaration(node)
                for ident in self._declared_identifiers(node):
                    if loop:
                        yield from self._check_binding(ctx, ident, "Loop variable", LOOP_SHORT_NAME_ALLOWED)
                    else:
                        yield from self._check_binding(ctx, ident, "Variable", SHORT_NAME_ALLOWED)
            elif kind == "for_in_statement" and node.child_by_field_name("kind") is not None:
                left = node.child_by_field_name("left")
                if left is not None and left.type == "identifier":
                    yield from self._check_binding(ctx, left, "Loop variable", LOOP_SHORT_NAME_ALLOWED)

            if kind in NAMED_FUNCTION_TYPES:
                yield from self._check_function_name(ctx, node)
            if kind in FUNCTION_TYPES:
                for param in function_parameters(node):
                    ident = parameter_identifier(param)
                    if ident is not None:
                        yield from self._check_binding(ctx, ident, "Parameter", SHORT_NAME_ALLOWED)

    def _declared_identifiers(self, declaration) -> List:
        idents = []
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                idents.append(name)
        return idents

    def _suggest(self, ctx: AnalyzerContext, node, rule: str, message: str) -> Issue:
        return ctx.report(node, message, rule, Severity.SUGGESTION, self.meta.category)

    def _check_binding(self, ctx: AnalyzerContext, ident, label: str, short_allowed) -> Iterator[Issue]:
        name = node_text(ident)
        if is_generic_name(name):
            yield self._suggest(
                ctx, ident, "no-generic-name",
                f"{label} '{name}' has a generic name. Use a more descriptive name that indicates its purpose",
            )
        if is_too_short(name, short_allowed):
            yield self._suggest(
                ctx, ident, "no-short-name",
                f"{label} '{name}' is too short. Use at least {MIN_NAME_LENGTH} characters",
            )
        if is_boolean_without_prefix(name):
            yield self._suggest(
                ctx, ident, "boolean-prefix",
                f"Boolean {label.lower()} '{name}' should be prefixed with is/has/can/should",
            )

    def _check_function_name(self, ctx: AnalyzerContext, func) -> Iterator[Issue]:
        ident = func.child_by_field_name("name")
        if ident is None:
            return
        name = node_text(ident)
        if is_generic_function_name(name):
            yield self._suggest(
                ctx, func, "no-generic-function-name",
                f"Function '{name}' has a generic name. Use a name that describes what it does",
            )
        if is_too_short(name):
            yield self._suggest(
                ctx, ident, "no-short-name",
                f"Function '{name}' is too short. Use at least {MIN_NAME_LENGTH} characters",
            )
        if is_boolean_without_prefix(name):
            yield self._suggest(
                ctx, ident, "boolean-prefix",
                f"Function '{name}' reads like a boolean; prefix it with is/has/can/should",
            )


RULES = [NamingAnalyzer()]
