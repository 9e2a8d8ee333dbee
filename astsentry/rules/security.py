"""Security rules for JavaScript and TypeScript.

Each rule matches a fixed syntactic shape; there is no data-flow analysis,
so `const run = eval; run(x)` is not reported.

    eval(...)                         no-eval
    alert(...)                        no-alert
    Function(...), new Function(...)  no-new-func
    setTimeout('code', ...)           no-setTimeout-string
    setInterval('code', ...)          no-setInterval-string
    document.write(...)               no-document-write
    el.innerHTML = ...                no-inner-html
    el.outerHTML = ...                no-outer-html
    console.log/debug/info/warn/error no-console
    const apiKey = "..."              no-hardcoded-secrets
"""

import re
from typing import Iterator, Optional

from ..engine.nodes import is_string_literal, iter_nodes, named_statements, node_text
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

# callee name -> (rule, message)
DANGEROUS_CALLS = {
    "eval": ("no-eval", "Avoid eval(); it executes arbitrary code and defeats optimizations"),
    "alert": ("no-alert", "Avoid alert(); use a custom UI for notifications"),
    "Function": ("no-new-func", "Avoid the Function constructor; it behaves like eval()"),
}

TIMER_FUNCTIONS = {"setTimeout", "setInterval"}

HTML_SINKS = {
    "innerHTML": ("no-inner-html", "Assigning innerHTML can expose you to XSS; prefer textContent or DOM methods"),
    "outerHTML": ("no-outer-html", "Assigning outerHTML can expose you to XSS; prefer DOM methods"),
}

CONSOLE_METHODS = {"log", "debug", "info", "warn", "error"}

SECRET_NAME = re.compile(r"password|secret|token|apikey", re.IGNORECASE)


class SecurityAnalyzer:
    """Structural detection of dangerous APIs and hardcoded secrets."""

    meta = AnalyzerMeta(
        id="security",
        category=Category.SECURITY,
        description="Dangerous APIs, DOM sinks, console output and hardcoded secrets",
        langs=("javascript", "typescript"),
        rules=(
            "no-eval", "no-alert", "no-new-func", "no-setTimeout-string",
            "no-setInterval-string", "no-document-write", "no-inner-html",
            "no-outer-html", "no-console", "no-hardcoded-secrets",
        ),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        for node in iter_nodes(ctx.root):
            kind = node.type
            if kind == "call_expression":
                yield from self._check_call(ctx, node)
            elif kind == "new_expression":
                issue = self._check_new(ctx, node)
                if issue:
                    yield issue
            elif kind == "assignment_expression":
                issue = self._check_assignment(ctx, node)
                if issue:
                    yield issue
            elif kind == "member_expression":
                issue = self._check_console(ctx, node)
                if issue:
                    yield issue
            elif kind == "variable_declarator":
                issue = self._check_secret(ctx, node)
                if issue:
                    yield issue

    def _issue(self, ctx: AnalyzerContext, node, rule: str, message: str) -> Issue:
        return ctx.report(node, message, rule, Severity.WARNING, self.meta.category)

    def _check_call(self, ctx: AnalyzerContext, node) -> Iterator[Issue]:
        callee = node.child_by_field_name("function")
        if callee is None:
            return
        if callee.type == "identifier":
            name = node_text(callee)
            if name in DANGEROUS_CALLS:
                rule, message = DANGEROUS_CALLS[name]
                yield self._issue(ctx, callee, rule, message)
            if name in TIMER_FUNCTIONS:
                args = named_statements(node.child_by_field_name("arguments"))
                if args and is_string_literal(args[0]):
                    yield self._issue(
                        ctx, node, f"no-{name}-string",
                        f"Avoid {name}() with a string argument; pass a function instead",
                    )
        elif callee.type == "member_expression":
            obj = callee.child_by_field_name("object")
            prop = callee.child_by_field_name("property")
            if (obj is not None and obj.type == "identifier" and node_text(obj) == "document"
                    and node_text(prop) == "write"):
                yield self._issue(
                    ctx, node, "no-document-write",
                    "Avoid document.write(); it can overwrite the entire document",
                )

    def _check_new(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        constructor = node.child_by_field_name("constructor")
        if constructor is not None and constructor.type == "identifier" and node_text(constructor) == "Function":
            rule, message = DANGEROUS_CALLS["Function"]
            return self._issue(ctx, node, rule, message)
        return None

    def _check_assignment(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        target = node.child_by_field_name("left")
        if target is None or target.type != "member_expression":
            return None
        prop = node_text(target.child_by_field_name("property"))
        if prop in HTML_SINKS:
            rule, message = HTML_SINKS[prop]
            return self._issue(ctx, node, rule, message)
        return None

    def _check_console(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        obj = node.child_by_field_name("object")
        if obj is None or obj.type != "identifier" or node_text(obj) != "console":
            return None
        method = node_text(node.child_by_field_name("property"))
        if method in CONSOLE_METHODS:
            return self._issue(ctx, node, "no-console", f"Remove console.{method}() before deploying to production")
        return None

    def _check_secret(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name is None or name.type != "identifier" or not is_string_literal(value):
            return None
        label = node_text(name)
        if SECRET_NAME.search(label):
            return self._issue(
                ctx, node, "no-hardcoded-secrets",
                f"Possible hardcoded secret in variable '{label}'",
            )
        return None


RULES = [SecurityAnalyzer()]
