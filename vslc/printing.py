"""Text and GraphViz renderings of syntax trees."""

from __future__ import annotations

import itertools
import os
import sys
from typing import Optional, TextIO

from .nodes import Node, NodeType

_TYPES_WITH_DATA = frozenset(
    {
        NodeType.OPERATOR,
        NodeType.IDENTIFIER,
        NodeType.NUMBER_LITERAL,
        NodeType.STRING_LITERAL,
        NodeType.STRING_LIST_REFERENCE,
    }
)


def _tree_lines(node: Optional[Node], nesting: int):
    indent = " " * nesting
    if node is None:
        yield f"{indent}(NULL)"
        return
    line = f"{indent}{node.type.name}"
    if node.type in _TYPES_WITH_DATA:
        line += f" ({node.data})"
    if node.symbol is not None:
        line += f" {node.symbol.type.name}({node.symbol.sequence_number})"
    yield line
    for child in node.children:
        yield from _tree_lines(child, nesting + 1)


def format_tree(node: Optional[Node]) -> str:
    """Render the tree as indented text, one node per line."""
    return "".join(line + "\n" for line in _tree_lines(node, 0))


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\\\n")


def _graphviz_data(node: Node) -> str:
    if node.type is NodeType.STRING_LITERAL:
        return "\\n" + _escape(str(node.data))
    if node.type in _TYPES_WITH_DATA:
        return f"\\n{node.data}"
    return ""


def format_graphviz(node: Node) -> str:
    """Render the tree as a GraphViz graph in dot format."""
    counter = itertools.count()
    lines = ['graph "" {', " node[shape=box];"]

    def visit(current: Node, ident: str) -> None:
        lines.append(f'{ident} [label="{current.type.name}{_graphviz_data(current)}"];')
        for index, child in enumerate(current.children):
            if child is None:
                lines.append(f"{ident} -- {ident}NULL{index} ;")
            else:
                child_ident = f"node{next(counter)}"
                lines.append(f"{ident} -- {child_ident} ;")
                visit(child, child_ident)

    visit(node, f"node{next(counter)}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def print_syntax_tree(root: Optional[Node], stream: Optional[TextIO] = None) -> None:
    """Write the tree to ``stream``; as GraphViz if GRAPHVIZ_OUTPUT is set."""
    out = sys.stdout if stream is None else stream
    if os.environ.get("GRAPHVIZ_OUTPUT") is not None:
        out.write(format_graphviz(root))
    else:
        out.write(format_tree(root))