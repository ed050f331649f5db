"""Constant folding and removal of unreachable code on syntax trees."""

from __future__ import annotations

import operator
from typing import Callable, Optional

from .nodes import Node, NodeType

_INT64_MASK = (1 << 64) - 1
_INT64_SIGN = 1 << 63


def _wrap_int64(value: int) -> int:
    value &= _INT64_MASK
    return value - (1 << 64) if value & _INT64_SIGN else value


def _truncating_divide(lhs: int, rhs: int) -> int:
    if rhs == 0:
        raise ZeroDivisionError("division by zero in constant expression")
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


_UNARY: dict[str, Callable[[int], int]] = {
    "-": operator.neg,
    "!": lambda operand: int(not operand),
}

_BINARY: dict[str, Callable[[int, int], int]] = {
    "==": lambda lhs, rhs: int(lhs == rhs),
    "!=": lambda lhs, rhs: int(lhs != rhs),
    "<": lambda lhs, rhs: int(lhs < rhs),
    "<=": lambda lhs, rhs: int(lhs <= rhs),
    ">": lambda lhs, rhs: int(lhs > rhs),
    ">=": lambda lhs, rhs: int(lhs >= rhs),
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _truncating_divide,
}


def _is_number(node: Optional[Node]) -> bool:
    return node is not None and node.type is NodeType.NUMBER_LITERAL


def _fold_operator(node: Node) -> Node:
    if not all(_is_number(child) for child in node.children):
        return node

    op = node.data
    operands = [child.data for child in node.children]
    if len(operands) == 1:
        table = _UNARY
    elif len(operands) == 2:
        table = _BINARY
    else:
        raise ValueError(f"operator {op!r} with {len(operands)} operands")
    try:
        func = table[op]
    except KeyError:
        raise ValueError(f"unknown operator {op!r} with {len(operands)} operands") from None

    node.type = NodeType.NUMBER_LITERAL
    node.data = _wrap_int64(func(*operands))
    node.children = []
    return node


def _fold_if(node: Node) -> Optional[Node]:
    condition = node.children[0]
    if not _is_number(condition):
        return node
    if condition.data:
        return node.children[1]
    if len(node.children) == 3:
        return node.children[2]
    return None


def _fold_while(node: Node) -> Optional[Node]:
    condition = node.children[0]
    if not _is_number(condition) or condition.data:
        return node
    return None


def constant_fold(node: Optional[Node]) -> Optional[Node]:
    """Fold constant expressions and constant branches below ``node``.

    Returns the new root of the subtree, which may be None when a branch
    that is never taken disappears entirely.
    """
    if node is None:
        return None

    node.children = [constant_fold(child) for child in node.children]

    if node.type is NodeType.OPERATOR:
        return _fold_operator(node)
    if node.type is NodeType.IF_STATEMENT:
        return _fold_if(node)
    if node.type is NodeType.WHILE_STATEMENT:
        return _fold_while(node)
    return node


def _prune(node: Optional[Node]) -> bool:
    """Prune unreachable statements; return True if ``node`` always interrupts."""
    if node is None:
        return False

    kind = node.type
    if kind in (NodeType.RETURN_STATEMENT, NodeType.BREAK_STATEMENT):
        return True
    if kind is NodeType.IF_STATEMENT:
        if len(node.children) == 2:
            _prune(node.children[1])
            return False
        then_interrupts = _prune(node.children[1])
        else_interrupts = _prune(node.children[2])
        return then_interrupts and else_interrupts
    if kind is NodeType.WHILE_STATEMENT:
        _prune(node.children[1])
        return False
    if kind is NodeType.BLOCK:
        statements = node.children[-1]
        for index, statement in enumerate(statements.children):
            if _prune(statement):
                del statements.children[index + 1 :]
                return True
        return False
    return False


def remove_unreachable_code(root: Node) -> None:
    """Drop statements after guaranteed returns or breaks in every function.

    A function body that may run off its end is wrapped in a block that
    finishes with ``return 0``.
    """
    for child in root.children:
        if child is None or child.type is not NodeType.FUNCTION:
            continue
        body = child.children[2]
        if not _prune(body):
            zero = Node(NodeType.NUMBER_LITERAL, data=0)
            return_node = Node(NodeType.RETURN_STATEMENT, [zero])
            statements = Node(NodeType.LIST, [body, return_node])
            child.children[2] = Node(NodeType.BLOCK, [statements])