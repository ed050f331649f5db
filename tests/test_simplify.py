import pytest

from vslc.nodes import Node, NodeType
from vslc.simplify import constant_fold, remove_unreachable_code


def num(value):
    return Node(NodeType.NUMBER_LITERAL, data=value)


def ident(name):
    return Node(NodeType.IDENTIFIER, data=name)


def op(text, *children):
    return Node(NodeType.OPERATOR, list(children), data=text)


def block(*statements):
    return Node(NodeType.BLOCK, [Node(NodeType.LIST, list(statements))])


def ret(value):
    return Node(NodeType.RETURN_STATEMENT, [value])


def printing(*items):
    return Node(NodeType.PRINT_STATEMENT, [Node(NodeType.LIST, list(items))])


def function(name, body):
    return Node(NodeType.FUNCTION, [ident(name), Node(NodeType.LIST), body])


def program(*declarations):
    return Node(NodeType.LIST, list(declarations))


def test_fold_addition():
    assert constant_fold(op("+", num(2), num(3))) == num(5)


def test_fold_nested_expression_inside_statement():
    stmt = Node(NodeType.ASSIGNMENT_STATEMENT, [ident("x"), op("-", op("+", num(4), num(4)), num(8))])
    result = constant_fold(stmt)
    assert result is stmt
    assert result.children == [ident("x"), num(0)]


def test_fold_keeps_operator_with_identifier():
    expr = op("+", ident("a"), op("*", num(2), num(3)))
    result = constant_fold(expr)
    assert result.type is NodeType.OPERATOR
    assert result.children[0] == ident("a")
    assert result.children[1].type is NodeType.NUMBER_LITERAL


def test_fold_unary_negation():
    assert constant_fold(op("-", num(5))) == num(-5)


@pytest.mark.parametrize("value, expected", [(0, 1), (7, 0)])
def test_fold_not(value, expected):
    assert constant_fold(op("!", num(value))) == num(expected)


@pytest.mark.parametrize(
    "text, lhs, rhs, expected",
    [("==", 4, 4, 1), ("!=", 4, 4, 0), ("<", 1, 2, 1), (">=", 1, 2, 0)],
)
def test_fold_comparisons(text, lhs, rhs, expected):
    assert constant_fold(op(text, num(lhs), num(rhs))) == num(expected)


def test_division_truncates_toward_zero():
    assert constant_fold(op("/", num(-7), num(2))) == num(-3)


def test_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        constant_fold(op("/", num(1), num(0)))


def test_unknown_operator_raises():
    with pytest.raises(ValueError):
        constant_fold(op("%", num(1), num(2)))


def test_negating_minimum_int64_wraps():
    smallest = -(2**63)
    assert constant_fold(op("-", num(smallest))) == num(smallest)


def test_multiplication_wraps_to_int64():
    assert constant_fold(op("*", num(2**62), num(4))) == num(0)


def test_if_true_returns_then_branch():
    then_branch = printing(ident("a"))
    result = constant_fold(Node(NodeType.IF_STATEMENT, [num(1), then_branch]))
    assert result is then_branch


def test_if_false_without_else_vanishes():
    assert constant_fold(Node(NodeType.IF_STATEMENT, [num(0), printing(ident("a"))])) is None


def test_if_false_returns_else_branch():
    else_branch = printing(ident("b"))
    node = Node(NodeType.IF_STATEMENT, [op("<", num(3), num(2)), printing(ident("a")), else_branch])
    assert constant_fold(node) is else_branch


def test_if_with_variable_condition_is_kept():
    node = Node(NodeType.IF_STATEMENT, [ident("c"), printing(ident("a"))])
    assert constant_fold(node) is node


def test_while_false_vanishes_and_leaves_none_in_parent():
    loop = Node(NodeType.WHILE_STATEMENT, [num(0), printing(ident("a"))])
    statements = Node(NodeType.LIST, [loop, printing(ident("b"))])
    result = constant_fold(statements)
    assert result.children[0] is None
    assert result.children[1] == printing(ident("b"))


def test_while_true_is_kept():
    loop = Node(NodeType.WHILE_STATEMENT, [num(1), Node(NodeType.BREAK_STATEMENT)])
    assert constant_fold(loop) is loop


def test_fold_none_is_none():
    assert constant_fold(None) is None


def test_statements_after_return_are_removed():
    body = block(printing(ident("a")), ret(num(1)), printing(ident("b")))
    root = program(function("f", body))
    remove_unreachable_code(root)
    assert root.children[0].children[2] is body
    assert body.children[0].children == [printing(ident("a")), ret(num(1))]


def test_function_without_return_gets_return_zero():
    body = block(printing(ident("a")))
    root = program(function("f", body))
    remove_unreachable_code(root)
    new_body = root.children[0].children[2]
    assert new_body == block(body, ret(num(0)))


def test_if_with_both_branches_returning_counts_as_return():
    if_node = Node(NodeType.IF_STATEMENT, [ident("c"), ret(num(1)), ret(num(2))])
    body = block(if_node, printing(ident("dead")))
    root = program(function("f", body))
    remove_unreachable_code(root)
    assert root.children[0].children[2] is body
    assert body.children[0].children == [if_node]


def test_if_without_else_does_not_count_as_return():
    body = block(Node(NodeType.IF_STATEMENT, [ident("c"), ret(num(1))]))
    root = program(function("f", body))
    remove_unreachable_code(root)
    assert root.children[0].children[2] == block(body, ret(num(0)))


def test_while_body_is_pruned_but_loop_does_not_return():
    inner = block(Node(NodeType.BREAK_STATEMENT), printing(ident("dead")))
    body = block(Node(NodeType.WHILE_STATEMENT, [ident("c"), inner]))
    root = program(function("f", body))
    remove_unreachable_code(root)
    assert inner.children[0].children == [Node(NodeType.BREAK_STATEMENT)]
    assert root.children[0].children[2] == block(body, ret(num(0)))


def test_global_declarations_are_untouched():
    declaration = Node(NodeType.GLOBAL_DECLARATION, [Node(NodeType.LIST, [ident("g")])])
    root = program(declaration)
    remove_unreachable_code(root)
    assert root.children == [Node(NodeType.GLOBAL_DECLARATION, [Node(NodeType.LIST, [ident("g")])])]


def test_removed_function_body_is_wrapped():
    root = program(function("f", None))
    remove_unreachable_code(root)
    assert root.children[0].children[2] == block(None, ret(num(0)))