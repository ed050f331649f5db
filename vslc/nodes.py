"""Abstract syntax tree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class NodeType(Enum):
    """Kinds of syntax tree node, in their canonical order."""

    LIST = 0
    GLOBAL_DECLARATION = 1
    ARRAY_INDEXING = 2
    VARIABLE = 3
    FUNCTION = 4
    BLOCK = 5
    ASSIGNMENT_STATEMENT = 6
    RETURN_STATEMENT = 7
    PRINT_STATEMENT = 8
    IF_STATEMENT = 9
    WHILE_STATEMENT = 10
    BREAK_STATEMENT = 11
    OPERATOR = 12  # data: the operator text, such as "+"
    FUNCTION_CALL = 13
    IDENTIFIER = 14  # data: the identifier name
    NUMBER_LITERAL = 15  # data: the integer value
    STRING_LITERAL = 16  # data: the string, including its quotation marks
    STRING_LIST_REFERENCE = 17  # data: position in the program's string list


@dataclass
class Node:
    """A syntax tree node.

    ``data`` holds the payload that the node type calls for (operator text,
    identifier name, integer value, string literal or string list index).
    ``symbol`` is set on identifiers once they are bound to a definition.
    """

    type: NodeType
    children: list[Optional[Node]] = field(default_factory=list)
    data: Union[str, int, None] = None
    symbol: Any = field(default=None, compare=False, repr=False)

    def append(self, element: Optional[Node]) -> Node:
        """Append ``element`` to this LIST node and return the node."""
        if self.type is not NodeType.LIST:
            raise TypeError(f"can only append to a LIST node, not {self.type.name}")
        self.children.append(element)
        return self