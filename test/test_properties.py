""" Use hypothesis and lark to generate snippets of kscope source
and check properties of the lexer and parser.
"""

import unittest
from lark import Lark
from hypothesis import given, strategies as st
from hypothesis.extra.lark import from_lark
from kscope.api import parse_expression
from kscope.lexer import Lexer
from kscope import nodes

grammar_text = r"""
start: expr

expr: NUM
    | ID
    | call
    | expr op expr
    | "(" expr ")"

call: ID "(" ")"
    | ID "(" args ")"

args: expr
    | args "," expr

op: "+"
  | "-"
  | "*"
  | "<"

%ignore / +/
%declare NUM ID

"""

grammar = Lark(grammar_text)
identifiers = st.from_regex(r'[a-zA-Z][a-zA-Z0-9]{0,7}', fullmatch=True) \
    .filter(lambda name: name not in ('def', 'extern'))
explicit = {
    'NUM': st.from_regex(r'(0|[1-9][0-9]{0,5})(\.[0-9]{1,3})?', fullmatch=True),
    'ID': identifiers,
}


def to_source(expr):
    """ Print an expression back, with explicit parenthesis """
    if isinstance(expr, nodes.NumberLiteral):
        return repr(expr.value)
    elif isinstance(expr, nodes.VariableRef):
        return expr.name
    elif isinstance(expr, nodes.BinaryOp):
        return '({} {} {})'.format(
            to_source(expr.lhs), expr.op, to_source(expr.rhs))
    elif isinstance(expr, nodes.Call):
        return '{}({})'.format(
            expr.callee, ', '.join(map(to_source, expr.args)))
    else:  # pragma: no cover
        raise NotImplementedError(str(expr))


class NumberPropertiesTestCase(unittest.TestCase):
    @given(st.from_regex(r'[0-9]+(\.[0-9]*)?', fullmatch=True))
    def test_number_value(self, text):
        token, eof = Lexer(text).tokenize()
        self.assertEqual('NUMBER', token.typ)
        self.assertEqual(float(text), token.val)
        self.assertEqual('EOF', eof.typ)

    @given(st.from_regex(r'[0-9.]+', fullmatch=True))
    def test_digits_and_dots(self, text):
        """ Any run of digits and dots is a single number """
        token, eof = Lexer(text).tokenize()
        self.assertEqual('NUMBER', token.typ)
        self.assertIsInstance(token.val, float)
        self.assertEqual(len(text), token.loc.length)
        self.assertEqual('EOF', eof.typ)


class ParserPropertiesTestCase(unittest.TestCase):
    @given(from_lark(grammar, explicit=explicit))
    def test_reparse(self, source):
        """ Printing with parenthesis and parsing again gives the same tree """
        expr = parse_expression(source)
        again = parse_expression(to_source(expr))
        self.assertEqual(repr(expr), repr(again))

    @given(identifiers)
    def test_identifier(self, name):
        expr = parse_expression(name)
        self.assertIsInstance(expr, nodes.VariableRef)
        self.assertEqual(name, expr.name)

    @given(
        st.lists(st.integers(0, 1000), min_size=2, max_size=8),
        st.data())
    def test_left_associative(self, numbers, data):
        """ Operators of equal precedence group to the left """
        ops = data.draw(st.lists(
            st.sampled_from(['+', '-']),
            min_size=len(numbers) - 1, max_size=len(numbers) - 1))
        source = str(numbers[0])
        expected = repr(float(numbers[0]))
        for op, number in zip(ops, numbers[1:]):
            source += ' {} {}'.format(op, number)
            expected = '({} {} {})'.format(op, expected, float(number))
        self.assertEqual(expected, repr(parse_expression(source)))


if __name__ == '__main__':
    unittest.main()
