# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Reader for the literal expressions allowed as parameter defaults and enum members.

Only a narrow JSON-like grammar is accepted: True/False/None, int and float
numbers (with unary sign), strings, lists/tuples and dicts with string keys.
Anything else (names, calls, arithmetic, comprehensions...) is rejected.
"""

import ast
from typing import Any


class LiteralError(ValueError):
    """Raised when an expression falls outside the literal grammar."""

    def __init__(self, message: str, node: ast.AST = None):
        super().__init__(message)
        self.lineno = getattr(node, "lineno", None)


def read_literal(node: ast.AST) -> Any:
    """Evaluate an AST expression node restricted to the literal grammar."""
    if isinstance(node, ast.Constant):
        value = node.value
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        raise LiteralError(f"Unsupported literal of type {type(value).__name__}", node)

    if isinstance(node, ast.UnaryOp) and isinstance(node.op, (ast.USub, ast.UAdd)):
        operand = node.operand
        if isinstance(operand, ast.Constant) and not isinstance(operand.value, bool) \
                and isinstance(operand.value, (int, float)):
            return -operand.value if isinstance(node.op, ast.USub) else operand.value
        raise LiteralError("Unary sign is only allowed in front of a number", node)

    if isinstance(node, (ast.List, ast.Tuple)):
        return [read_literal(element) for element in node.elts]

    if isinstance(node, ast.Dict):
        result = {}
        for key_node, value_node in zip(node.keys, node.values):
            if key_node is None:
                raise LiteralError("Dictionary unpacking is not allowed in literals", value_node)
            key = read_literal(key_node)
            if not isinstance(key, str):
                raise LiteralError(f"Object keys must be strings, got {key!r}", key_node)
            result[key] = read_literal(value_node)
        return result

    raise LiteralError(f"Expected a literal value, got '{ast.unparse(node)}'", node)


def read_literal_text(text: str) -> Any:
    """Parse ``text`` as a single expression and read it with :func:`read_literal`."""
    try:
        tree = ast.parse(text.strip(), mode="eval")
    except SyntaxError as e:
        raise LiteralError(f"Invalid literal '{text.strip()}': {e.msg}") from e
    return read_literal(tree.body)
