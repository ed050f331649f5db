"""Building global and local symbol tables and binding names in a syntax tree."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from .nodes import Node, NodeType
from .printing import format_graphviz, format_tree
from .symbol_table import (
    Symbol,
    SymbolCollisionError,
    SymbolHashmap,
    SymbolTable,
    SymbolType,
)


class SymbolError(Exception):
    """The syntax tree cannot be turned into consistent symbol tables."""


@dataclass
class ProgramTables:
    """The global symbol table and the list of string literals of a program.

    Every function symbol in ``global_symbols`` carries its own local table
    in ``function_symtable``.
    """

    global_symbols: SymbolTable = field(default_factory=SymbolTable)
    strings: list[str] = field(default_factory=list)

    def _add_string(self, string: str) -> int:
        self.strings.append(string)
        return len(self.strings) - 1


def _create_symbol(
    node: Node, name: str, kind: SymbolType, table: SymbolTable, message: str
) -> Symbol:
    try:
        return table.insert(Symbol(name=name, type=kind, node=node))
    except SymbolCollisionError as exc:
        raise SymbolError(f"{message}: {exc}") from exc


def _find_globals(root: Node, tables: ProgramTables) -> None:
    globals_ = tables.global_symbols
    for child in root.children:
        if child is None:
            continue
        if child.type is NodeType.GLOBAL_DECLARATION:
            if not child.children:
                raise SymbolError(
                    "Error when inserting global symbol: wrong format of global declaration node!"
                )
            for declaration in child.children[0].children:
                if declaration is None:
                    continue
                if declaration.type is NodeType.IDENTIFIER:
                    _create_symbol(
                        declaration,
                        declaration.data,
                        SymbolType.GLOBAL_VAR,
                        globals_,
                        "Error creating global variable symbol",
                    )
                elif declaration.type is NodeType.ARRAY_INDEXING:
                    _create_symbol(
                        declaration,
                        declaration.children[0].data,
                        SymbolType.GLOBAL_ARRAY,
                        globals_,
                        "Error creating global variable symbol",
                    )
        elif child.type is NodeType.FUNCTION:
            if not child.children:
                raise SymbolError(
                    "Error when inserting global symbol: wrong format of function node!"
                )
            function_symbol = _create_symbol(
                child,
                child.children[0].data,
                SymbolType.FUNCTION,
                globals_,
                "Error creating global variable symbol",
            )
            local_table = SymbolTable()
            local_table.hashmap.backup = globals_.hashmap
            function_symbol.function_symtable = local_table


def _bind_names(tables: ProgramTables, local_symbols: SymbolTable, node: Optional[Node]) -> None:
    if node is None:
        return

    scope = local_symbols.hashmap
    if node.type is NodeType.BLOCK:
        local_symbols.hashmap = SymbolHashmap(backup=scope)
        try:
            statements = node.children
            if len(node.children) == 2:
                for identifier_list in node.children[0].children:
                    for identifier in identifier_list.children:
                        symbol = _create_symbol(
                            node,
                            identifier.data,
                            SymbolType.LOCAL_VAR,
                            local_symbols,
                            "Error creating local variable symbol",
                        )
                        symbol.function_symtable = local_symbols
                statements = node.children[1:]
            for statement in statements:
                _bind_names(tables, local_symbols, statement)
        finally:
            local_symbols.hashmap = scope
    elif node.type is NodeType.IDENTIFIER:
        symbol = scope.lookup(node.data)
        if symbol is None:
            raise SymbolError(f"Error referencing undefined identifier {node.data!r}")
        node.symbol = symbol
    elif node.type is NodeType.STRING_LITERAL:
        index = tables._add_string(node.data)
        node.type = NodeType.STRING_LIST_REFERENCE
        node.data = index
    else:
        for child in node.children:
            _bind_names(tables, local_symbols, child)


def create_tables(root: Node) -> ProgramTables:
    """Build the symbol tables for the program rooted at ``root``.

    Identifier uses are bound to their symbols, and string literals are moved
    into the string list and replaced by references to it.
    """
    if root is None or root.type is not NodeType.LIST:
        raise SymbolError("the root of the syntax tree must be a LIST node")

    tables = ProgramTables()
    _find_globals(root, tables)

    for symbol in list(tables.global_symbols):
        if symbol.type is not SymbolType.FUNCTION:
            continue
        function_table = symbol.function_symtable
        function_node = symbol.node
        if len(function_node.children) < 3:
            raise SymbolError("Error when binding local symbols: wrong format of function node!")

        parameters = function_node.children[1]
        for parameter in parameters.children if parameters is not None else []:
            if parameter is None or parameter.type is not NodeType.IDENTIFIER:
                raise SymbolError(
                    "Error when binding local symbols: wrong node type on parameter!"
                )
            parameter_symbol = _create_symbol(
                parameter,
                parameter.data,
                SymbolType.PARAMETER,
                function_table,
                "Error when creating function parameter symbol",
            )
            parameter_symbol.function_symtable = function_table

        _bind_names(tables, function_table, function_node.children[2])

    return tables


def _symbol_table_lines(table: SymbolTable, nesting: int):
    indent = " " * (nesting * 4)
    for symbol in table:
        yield f"{indent}{symbol.sequence_number}: {symbol.type.name}({symbol.name})\n"
        if symbol.type is SymbolType.FUNCTION and symbol.function_symtable is not None:
            yield from _symbol_table_lines(symbol.function_symtable, nesting + 1)


def format_tables(tables: ProgramTables, root: Optional[Node]) -> str:
    """Render the symbol tables, the string list and the bound syntax tree."""
    parts = list(_symbol_table_lines(tables.global_symbols, 0))
    parts.append("\n == STRING LIST == \n")
    parts.extend(f"{index}: {string}\n" for index, string in enumerate(tables.strings))
    parts.append("\n == BOUND SYNTAX TREE == \n")
    if os.environ.get("GRAPHVIZ_OUTPUT") is not None:
        parts.append(format_graphviz(root))
    else:
        parts.append(format_tree(root))
    return "".join(parts)