"""
astsentry rules package.

Each module in this package exposes a module-level ``RULES`` list of analyzer
instances. Analyzers implement the ``Analyzer`` protocol from
``astsentry.engine.types``:

```python
class MyAnalyzer:
    meta = AnalyzerMeta(
        id="my-analyzer",
        category=Category.CODE_QUALITY,
        langs=("javascript", "typescript"),
        rules=("my-rule",),
    )

    def visit(self, ctx):
        for node in iter_nodes(ctx.root):
            ...
            yield ctx.report(node, "message", "my-rule", Severity.SUGGESTION, self.meta.category)

RULES = [MyAnalyzer()]
```

Module order below is the registration order of the pipelines, and issues are
reported in that order. Each pipeline keeps only the analyzers whose
``meta.langs`` include its language; empty ``langs`` means every language.
"""

SCRIPT_RULE_MODULES = (
    "patterns",
    "type_annotations",
    "security",
    "best_practices",
    "unused_bindings",
    "complexity",
    "magic_literals",
    "naming",
    "null_safety",
)

PYTHON_RULE_MODULES = (
    "python_queries",
)

KOTLIN_RULE_MODULES = (
    "kotlin_queries",
)
