"""Rules: no-magic-numbers, no-long-hardcoded-string, no-duplicate-string

Numeric literals outside a small set of self-explanatory values, string
literals that are too long to live inline, and string literals repeated often
enough that they should become a named constant.
"""

from typing import Dict, Iterator, Optional

from ..engine.nodes import iter_nodes, node_text, string_content
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

ALLOWED_NUMBERS = frozenset(
    [0.0, 1.0, -1.0, 10.0, 100.0, 1000.0] + [float(2 ** exp) for exp in range(1, 11)]
)

DEFAULT_MAX_STRING_LENGTH = 50
DEFAULT_DUPLICATE_THRESHOLD = 3
DUPLICATE_MIN_LENGTH = 5

# import / export specifiers are not hardcoded data
MODULE_SOURCES = {"import_statement", "export_statement"}


def numeric_value(literal: str) -> Optional[float]:
    """Value of a JS numeric literal, or None for hex/binary and unparsable text."""
    text = literal.replace("_", "")
    if text.endswith("n"):
        text = text[:-1]
    lowered = text.lower()
    if lowered.startswith(("0x", "0b")):
        return None
    try:
        if lowered.startswith("0o"):
            return float(int(lowered[2:], 8))
        return float(text)
    except ValueError:
        return None


class MagicLiteralAnalyzer:
    """Flag unexplained numbers and long or repeated string literals."""

    meta = AnalyzerMeta(
        id="magic-literals",
        category=Category.CODE_QUALITY,
        description="Magic numbers and hardcoded strings",
        langs=("javascript", "typescript"),
        rules=("no-magic-numbers", "no-long-hardcoded-string", "no-duplicate-string"),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        config = ctx.config or {}
        max_length = int(config.get("max_string_length", DEFAULT_MAX_STRING_LENGTH))
        threshold = int(config.get("duplicate_string_threshold", DEFAULT_DUPLICATE_THRESHOLD))
        # rebuilt for every file
        seen_strings: Dict[str, int] = {}

        for node in iter_nodes(ctx.root):
            if node.type == "number":
                issue = self._check_number(ctx, node)
                if issue:
                    yield issue
            elif node.type == "string" and node.parent is not None and node.parent.type not in MODULE_SOURCES:
                yield from self._check_string(ctx, node, max_length, threshold, seen_strings)

    def _check_number(self, ctx: AnalyzerContext, node) -> Optional[Issue]:
        text = node_text(node)
        value = numeric_value(text)
        if value is None or value in ALLOWED_NUMBERS:
            return None
        return ctx.report(
            node,
            f"Magic number {text} found. Use a named constant instead",
            "no-magic-numbers",
            Severity.SUGGESTION,
            self.meta.category,
        )

    def _check_string(self, ctx: AnalyzerContext, node, max_length: int, threshold: int,
                      seen_strings: Dict[str, int]) -> Iterator[Issue]:
        content = string_content(node)
        if len(content) > max_length:
            yield ctx.report(
                node,
                f"Hardcoded string is too long ({len(content)} characters). Consider using a constant",
                "no-long-hardcoded-string",
                Severity.SUGGESTION,
                self.meta.category,
            )
        if len(content) <= DUPLICATE_MIN_LENGTH:
            return
        count = seen_strings.get(content, 0) + 1
        seen_strings[content] = count
        if count == threshold:
            yield ctx.report(
                node,
                f"String literal is repeated {count} times. Extract it into a named constant",
                "no-duplicate-string",
                Severity.SUGGESTION,
                self.meta.category,
            )


RULES = [MagicLiteralAnalyzer()]
