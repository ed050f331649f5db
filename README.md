# vslc

Building blocks for a compiler of VSL, a small teaching language, together
with a table-driven DFA that checks lines of a tiny command language.

## Installing

    pip install .

To run the test suite:

    pip install ".[test]"
    pytest

## The line validator

`vslc-dfa` reads lines from standard input and runs each one through a
deterministic finite automaton. The accepted statements, separated by
spaces, are:

- `go`
- `dx=<number>` and `dy=<number>`, where the number may start with `-`
- labels made of digits followed by a colon, such as `10:`
- comments starting with `//` that run to the end of the line

The command prints `Table filled!` once the transition table is built.
Each line gets a report: an accepted line is echoed, and a rejected line is
printed in full, followed by a marker under the character where the
automaton gave up:

    $ printf 'go go\ngox\n' | vslc-dfa
    Table filled!
    line    1: accepted: go go
    line    2: error: gox
    ~~~~~~~~~~~~~~~~~~~~^

Lines longer than 511 bytes are checked in pieces of at most 511 bytes,
each numbered as a line of its own.

If the transition table itself is broken, for instance it reaches an invalid
state or accepts before the end of the line, the command reports a fatal
error and exits with status 1.

From Python, `vslc.dfa.build_table()` returns the transition table,
`check_line(table, line)` checks a single line against it and returns
`None` when the line is accepted or the byte position of the error
otherwise, and `validate(lines, out)` runs a sequence of lines and writes
the same report to a stream. A broken table raises `DfaError`, whose
`position` attribute says where it showed.

## Syntax trees

`vslc.nodes` defines `NodeType`, the kinds of node in a VSL abstract syntax
tree, and `Node`, a tree node with its `children`, the `data` it carries (an
operator, an identifier, a number or string literal, or an index into the
string list) and, once names are bound, its `symbol`. `Node.append` adds an
element to a `LIST` node and raises `TypeError` on any other node.

`vslc.printing` renders a tree:

- `format_tree(node)` gives an indented listing, one node per line, with a
  node's data in parentheses and, for identifiers bound to a symbol, the
  symbol's kind and sequence number. Missing children show as `(NULL)`.
- `format_graphviz(node)` gives the same tree as an undirected GraphViz graph
  in dot format.
- `print_syntax_tree(root, stream)` writes one of the two to `stream`
  (standard output if it is `None`): the GraphViz form when the
  `GRAPHVIZ_OUTPUT` environment variable is set, the indented listing
  otherwise.

## Simplifying a tree

`vslc.simplify` holds two passes:

- `constant_fold(node)` folds operators whose operands are all number
  literals, with 64-bit wrap-around and division that truncates toward zero,
  replaces an `if` with a constant condition by the branch that is taken,
  and drops `while` loops whose condition is constant false. It returns the
  new root of the subtree, which may be `None`. Division by a constant zero
  raises `ZeroDivisionError`; an unknown operator raises `ValueError`.
- `remove_unreachable_code(root)` removes statements that follow a `return`
  or `break` in a block, and makes every function end in a `return`, wrapping
  a body that could fall off its end in a block that finishes with
  `return 0`.

## Symbol tables

`vslc.symbol_table` provides `SymbolType`, `Symbol`, `SymbolTable`,
`SymbolHashmap` and `hash_string`. A symbol table keeps its symbols in
insertion order, gives each one a sequence number, and refuses a second
symbol of the same name in the same scope with `SymbolCollisionError`. Each
hashmap may have a `backup` hashmap, so a lookup that misses in an inner
scope carries on into the enclosing ones; `lookup` returns `None` when the
name is found nowhere.

`vslc.symbols` walks a simplified tree:

- `create_tables(root)` builds the global symbol table, a local table for
  each function with its parameters and local variables, binds every
  identifier use to its symbol, and moves string literals into a string
  list, replacing them with string-list references. It returns a
  `ProgramTables` holding `global_symbols` and `strings`, and raises
  `SymbolError` for an undeclared name, a duplicate declaration or a
  malformed tree.
- `format_tables(tables, root)` renders the symbol tables, the string list
  and the bound syntax tree, the latter as GraphViz when `GRAPHVIZ_OUTPUT`
  is set.

## What is not here

The package has no scanner or parser for VSL source text and no compiler
command. Syntax trees have to be built in Python from `Node` objects before
the printing, simplification and symbol-table passes can run on them, and
no code is generated from them.