""" This module contains the parsing parts for the kscope language.

The parser is a recursive descent parser. Binary operators are handled
by precedence climbing, see also:
http://eli.thegreenplace.net/2012/08/02/parsing-expressions-by-precedence-climbing

Grammar::

    expression   := primary binoprhs
    primary      := number | identifierexpr | '(' expression ')'
    identifierexpr := ID [ '(' (expression (',' expression)*)? ')' ]
    binoprhs     := ( OP primary )*
    prototype    := ID '(' ID* ')'
    definition   := 'def' prototype expression
    external     := 'extern' prototype
    toplevel     := definition | external | expression | ';'

"""

import logging
from ppci.lang.tools.recursivedescent import RecursiveDescentParser
from .common import ParseError
from .lexer import Lexer
from . import nodes as ast


class Parser(RecursiveDescentParser):
    """ Parses tokens into an abstract syntax tree (AST).

    The parser keeps exactly one token of look ahead in ``self.token``.
    Each parse function expects this token to be the first token of its
    construct and leaves it at the first token after the construct.
    """
    logger = logging.getLogger('kscope.parser')

    def __init__(self, lexer, context):
        super().__init__()
        assert isinstance(lexer, Lexer)
        self.lexer = lexer
        self.context = context
        # The lexer keeps returning EOF once the input is exhausted:
        self.init_lexer(iter(lexer.next_token, None))

    def error(self, msg, loc=None):
        """ Raise a parse error, by default at the current token """
        if loc is None:
            loc = self.token.loc
        raise ParseError(msg, loc)

    @property
    def at_end(self):
        return self.peek == 'EOF'

    def consume(self, typ=None, msg=None):
        """ Eat a token of the given type, or fail with msg """
        if msg is not None and self.peek != typ:
            self.error(msg)
        return super().consume(typ)

    def get_token_precedence(self) -> int:
        """ Precedence of the pending binary operator, -1 if it is none """
        typ = self.peek
        if len(typ) != 1 or not typ.isascii():
            return -1
        return self.context.get_precedence(typ)

    # Expressions:
    def parse_number(self):
        """ numberexpr ::= number """
        tok = self.next_token()
        return ast.NumberLiteral(tok.val, tok.loc)

    def parse_paren_expr(self):
        """ parenexpr ::= '(' expression ')' """
        self.next_token()
        expr = self.parse_expression()
        self.consume(')', "expected ')'")
        return expr

    def parse_identifier_expr(self):
        """ Parse either a variable reference or a function call """
        tok = self.next_token()
        if not self.has_consumed('('):
            return ast.VariableRef(tok.val, tok.loc)

        args = []
        if not self.has_consumed(')'):
            while True:
                args.append(self.parse_expression())
                if self.has_consumed(')'):
                    break
                self.consume(',', "Expected ')' or ',' in argument list")
        return ast.Call(tok.val, args, tok.loc)

    def parse_primary(self):
        """ Literal, identifier, call and parenthesis expression parsing """
        if self.peek == 'ID':
            return self.parse_identifier_expr()
        elif self.peek == 'NUMBER':
            return self.parse_number()
        elif self.peek == '(':
            return self.parse_paren_expr()
        else:
            self.error('unknown token when expecting an expression')

    def parse_binop_rhs(self, min_precedence, lhs):
        """ Process a sequence of binary operators and their operands.

        Operators binding less tightly than min_precedence are left for
        the caller.
        """
        while True:
            precedence = self.get_token_precedence()
            if precedence < min_precedence:
                return lhs

            operator = self.next_token()
            rhs = self.parse_primary()

            # If the next operator binds tighter, let it take rhs first:
            if precedence < self.get_token_precedence():
                rhs = self.parse_binop_rhs(precedence + 1, rhs)

            lhs = ast.BinaryOp(operator.typ, lhs, rhs, operator.loc)

    def parse_expression(self):
        """ expression ::= primary binoprhs """
        lhs = self.parse_primary()
        return self.parse_binop_rhs(0, lhs)

    # Top level constructs:
    def parse_prototype(self):
        """ prototype ::= id '(' id* ')' """
        if self.peek != 'ID':
            self.error('Expected function name in prototype')
        name = self.next_token()
        self.consume('(', "Expected '(' in prototype")
        params = []
        while self.peek == 'ID':
            params.append(self.next_token().val)
        self.consume(')', "Expected ')' in prototype")
        self.logger.debug('Parsed prototype %s(%s)', name.val, params)
        return ast.Prototype(name.val, params, name.loc)

    def parse_definition(self):
        """ definition ::= 'def' prototype expression """
        loc = self.consume('def', "Expected 'def'").loc
        proto = self.parse_prototype()
        body = self.parse_expression()
        return ast.FunctionDef(proto, body, loc)

    def parse_extern(self):
        """ external ::= 'extern' prototype """
        self.consume('extern', "Expected 'extern'")
        return self.parse_prototype()

    def parse_top_level_expr(self):
        """ Wrap a bare expression into an anonymous function """
        loc = self.token.loc
        body = self.parse_expression()
        proto = ast.Prototype(self.context.anonymous_name, [], loc)
        return ast.FunctionDef(proto, body, loc)
