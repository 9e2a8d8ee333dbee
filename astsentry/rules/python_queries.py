"""Python rules driven by a single tree-sitter query.

Unlike the JavaScript analyzers, which walk the tree by hand, the Python
checks are expressed as one query whose captures are dispatched to small
handlers.
"""

from typing import Callable, Dict, Optional

import tree_sitter

from ..engine.nodes import node_text
from ..engine.python_adapter import default_python_adapter
from ..engine.queries import QueryAnalyzer
from ..engine.types import AnalyzerContext, AnalyzerMeta, Category, Issue, Severity

PYTHON_QUERY = """
(call
  function: (identifier) @func_name
  arguments: (argument_list)
  (#eq? @func_name "print")) @print_call

(integer) @magic_number
(float) @magic_number
(string) @string_literal

(class_definition
  name: (identifier) @class_name)

(function_definition
  name: (identifier) @def_func_name)

(assignment
  left: (identifier) @var_assign)

(if_statement) @if_stmt

(function_definition
  parameters: (parameters) @params)
"""

ALLOWED_NUMBERS = {"0", "1", "-1", "2", "10", "100"}
MAX_INLINE_STRING = 20
DEFAULT_MAX_PARAMS = 5
PARAMETER_TYPES = {"identifier", "typed_parameter", "default_parameter", "typed_default_parameter"}


def is_upper_case(name: str) -> bool:
    return all(not c.isalpha() or c.isupper() for c in name)


def is_snake_case(name: str) -> bool:
    return all(c.islower() or c == "_" or c.isdigit() for c in name)


def is_docstring(node) -> bool:
    """True for a string that is the first statement of a module, class or function."""
    statement = node.parent
    if statement is None or statement.type != "expression_statement":
        return False
    container = statement.parent
    if container is None:
        return False
    if container.type == "block":
        owner = container.parent
        if owner is None or owner.type not in ("function_definition", "class_definition"):
            return False
    elif container.type != "module":
        return False
    for child in container.named_children:
        if child.type == "comment":
            continue
        return child.id == statement.id
    return False


class PythonQueryAnalyzer(QueryAnalyzer):
    """Print calls, magic literals, naming conventions, nesting and parameter counts."""

    meta = AnalyzerMeta(
        id="python",
        category=Category.CODE_QUALITY,
        description="Query-based checks for Python sources",
        langs=("python",),
        rules=("python-syntax-error", "no-print", "no-magic-numbers", "no-hardcoded-strings",
               "class-naming", "function-naming", "variable-naming", "nested-if",
               "max-params", "internal-error"),
    )

    language_name = "Python"
    syntax_rule = "python-syntax-error"

    def __init__(self, query_source: str = PYTHON_QUERY):
        super().__init__(query_source)

    def handlers(self) -> Dict[str, Callable]:
        return {
            "print_call": self._on_print,
            "magic_number": self._on_number,
            "string_literal": self._on_string,
            "class_name": self._on_class_name,
            "def_func_name": self._on_function_name,
            "var_assign": self._on_assignment,
            "if_stmt": self._on_if,
            "params": self._on_params,
        }

    def default_grammar(self) -> tree_sitter.Language:
        return default_python_adapter.grammar

    def _on_print(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        return ctx.report(node, "Avoid using print() in production. Use a logger.",
                          "no-print", Severity.WARNING, Category.BEST_PRACTICE)

    def _on_number(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        text = node_text(node)
        if text in ALLOWED_NUMBERS or self._in_constant_assignment(node):
            return None
        return ctx.report(node, f"Magic number detected: {text}. Define a constant.",
                          "no-magic-numbers", Severity.SUGGESTION, Category.BEST_PRACTICE)

    def _in_constant_assignment(self, node) -> bool:
        parent = node.parent
        while parent is not None and parent.type not in ("function_definition", "class_definition"):
            if parent.type == "assignment":
                left = parent.child_by_field_name("left")
                if left is not None and is_upper_case(node_text(left)):
                    return True
            parent = parent.parent
        return False

    def _on_string(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        content = node_text(node).lstrip("rbufRBUF").strip("'\"")
        if len(content) <= MAX_INLINE_STRING or "{" in content or is_docstring(node):
            return None
        return ctx.report(
            node,
            f'Hardcoded string detected: "{content[:MAX_INLINE_STRING]}...". Consider extracting to a constant.',
            "no-hardcoded-strings", Severity.SUGGESTION, Category.BEST_PRACTICE,
        )

    def _on_class_name(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        name = node_text(node)
        if name[:1].isupper():
            return None
        return ctx.report(node, f"Class name '{name}' should be PascalCase.",
                          "class-naming", Severity.WARNING, Category.CODE_QUALITY)

    def _on_function_name(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        name = node_text(node)
        if is_snake_case(name):
            return None
        return ctx.report(node, f"Function name '{name}' should be snake_case.",
                          "function-naming", Severity.WARNING, Category.CODE_QUALITY)

    def _on_assignment(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        name = node_text(node)
        if is_upper_case(name) or is_snake_case(name):
            return None
        return ctx.report(
            node, f"Variable name '{name}' should be snake_case (or UPPER_CASE for constants).",
            "variable-naming", Severity.WARNING, Category.CODE_QUALITY,
        )

    def _on_if(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        depth = 0
        parent = node.parent
        while parent is not None:
            if parent.type == "if_statement":
                depth += 1
            parent = parent.parent
        if depth < 2:
            return None
        return ctx.report(node, "Avoid deeply nested if statements.",
                          "nested-if", Severity.WARNING, Category.COMPLEXITY)

    def _on_params(self, ctx: AnalyzerContext, node, config) -> Optional[Issue]:
        limit = int(config.get("max_params", DEFAULT_MAX_PARAMS))
        count = sum(1 for child in node.named_children if child.type in PARAMETER_TYPES)
        if count <= limit:
            return None
        return ctx.report(
            node, f"Function has too many parameters ({count}). Max allowed is {limit}.",
            "max-params", Severity.WARNING, Category.COMPLEXITY,
        )


RULES = [PythonQueryAnalyzer()]
