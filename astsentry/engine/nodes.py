"""
Tree-sitter node helpers shared by the rule analyzers.

All helpers tolerate None and unknown node shapes so that analyzers can stay
silent on constructs they do not recognize.
"""

from typing import Iterator, List, Optional


FUNCTION_TYPES = {
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
}

LOOP_TYPES = {
    "for_statement",
    "for_in_statement",
    "for_of_statement",
    "while_statement",
    "do_statement",
}

VARIABLE_DECLARATION_TYPES = {"variable_declaration", "lexical_declaration"}

STRING_TYPES = {"string"}


def node_text(node) -> str:
    """Decode a node's source text."""
    if node is None:
        return ""
    text = node.text
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text or "")


def iter_nodes(root) -> Iterator:
    """Yield every node below root (inclusive) in pre-order."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        children = node.children
        if children:
            stack.extend(reversed(children))


def first_error_node(root) -> Optional[object]:
    """First ERROR or MISSING node in pre-order, if any."""
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def named_statements(node) -> List:
    """Named children of a statement container, comments excluded."""
    if node is None:
        return []
    return [child for child in node.named_children if child.type != "comment"]


def block_statements(node) -> List:
    """Statements of a block, or the statement itself when it is not a block."""
    if node is None:
        return []
    if node.type == "statement_block":
        return named_statements(node)
    return [node]


def has_optional_chain(node) -> bool:
    """True when the member/subscript/call node itself uses `?.`."""
    if node is None:
        return False
    return any(child.type == "optional_chain" for child in node.children)


def in_optional_chain(node) -> bool:
    """True when any link of the member/call chain rooted at node uses `?.`."""
    while node is not None and node.type in ("member_expression", "subscript_expression", "call_expression"):
        if has_optional_chain(node):
            return True
        if node.type == "call_expression":
            node = node.child_by_field_name("function")
        else:
            node = node.child_by_field_name("object")
    return False


def operator_of(node) -> str:
    """Operator token of a binary/unary/update expression."""
    if node is None:
        return ""
    operator = node.child_by_field_name("operator")
    if operator is not None:
        return node_text(operator)
    for child in node.children:
        if not child.is_named:
            return child.type
    return ""


def else_body(node):
    """The statement inside an if statement's else clause."""
    alternative = node.child_by_field_name("alternative")
    if alternative is None:
        return None
    if alternative.type == "else_clause":
        inner = named_statements(alternative)
        return inner[0] if inner else None
    return alternative


def function_name(node) -> Optional[str]:
    """Name of a function node, falling back to its variable declarator or pair key."""
    name = node.child_by_field_name("name")
    if name is not None:
        return node_text(name)
    parent = node.parent
    if parent is not None and parent.type == "variable_declarator":
        target = parent.child_by_field_name("name")
        if target is not None and target.type == "identifier":
            return node_text(target)
    if parent is not None and parent.type == "pair":
        key = parent.child_by_field_name("key")
        if key is not None:
            return node_text(key)
    return None


def function_parameters(node) -> List:
    """Parameter nodes of any function form."""
    params = node.child_by_field_name("parameters")
    if params is not None:
        return named_statements(params)
    single = node.child_by_field_name("parameter")
    if single is not None:
        return [single]
    return []


def parameter_identifier(param):
    """Identifier bound by a simple parameter (plain, defaulted, rest or TS typed)."""
    if param is None:
        return None
    if param.type == "identifier":
        return param
    if param.type in ("required_parameter", "optional_parameter"):
        pattern = param.child_by_field_name("pattern")
        return parameter_identifier(pattern)
    if param.type == "assignment_pattern":
        return parameter_identifier(param.child_by_field_name("left"))
    if param.type == "rest_pattern":
        inner = named_statements(param)
        return parameter_identifier(inner[0]) if inner else None
    return None


def string_content(node) -> str:
    """Literal content of a string node, without quotes."""
    text = node_text(node)
    if len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
        return text[1:-1]
    return text


def is_string_literal(node) -> bool:
    return node is not None and node.type in STRING_TYPES
