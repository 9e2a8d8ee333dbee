"""Rule: no-debugger (pattern variant)

Flags `debugger` statements left in source. The best-practice analyzer
reports the same statement at warning level; both are emitted.
"""

from typing import Iterator

from ..engine.nodes import iter_nodes
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity


class DebuggerPatternAnalyzer:
    """Find debugger statements anywhere in the file."""

    meta = AnalyzerMeta(
        id="patterns",
        category=Category.CODE_QUALITY,
        description="Leftover debugger statements",
        langs=("javascript", "typescript"),
        rules=("no-debugger",),
    )

    def visit(self, ctx: AnalyzerContext) -> Iterator[Issue]:
        for node in iter_nodes(ctx.root):
            if node.type == "debugger_statement":
                yield ctx.report(
                    node,
                    "Remove debugger statement before deploying to production",
                    "no-debugger",
                    Severity.SUGGESTION,
                    self.meta.category,
                )


RULES = [DebuggerPatternAnalyzer()]
