"""Syntax trees, tree simplification, symbol tables and a line-validating DFA for VSL."""

__version__ = "1.0.0"

__all__ = ["nodes", "printing", "dfa", "simplify", "symbol_table", "symbols"]