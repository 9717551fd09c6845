""" The context is the space where a compilation lives.

It bundles the operator precedence table, the ir-module under
construction, the known functions and the variables of the function
currently being lowered. Independent compilations use independent
contexts.
"""

import logging
from types import MappingProxyType
from ppci import ir


class Context:
    """ State shared by the parser and the code generator """
    logger = logging.getLogger('kscope.context')

    #: Standard binary operators. 1 is the lowest precedence.
    default_precedence = {'<': 10, '+': 20, '-': 20, '*': 40}

    #: Name of the function a top-level expression is wrapped in.
    anonymous_name = '__anon_expr'

    reserved_chars = frozenset('(),;#.')

    def __init__(self, module_name='main', precedence=None):
        table = dict(self.default_precedence)
        if precedence:
            table.update(precedence)
        for op, prec in table.items():
            self.check_operator(op, prec)

        # The table is fixed from here on, changing it would change the
        # grammar in the middle of a parse.
        self.precedence = MappingProxyType(table)
        self.module = ir.Module(module_name)
        self.functions = {}
        self.scope = {}
        self.logger.debug(
            'Created context for module %s with operators %s',
            module_name, ' '.join(sorted(table)))

    def check_operator(self, op, prec):
        """ Check that op can be used as a binary operator """
        if not isinstance(op, str) or len(op) != 1:
            raise ValueError(
                'Operator must be a single character, not {!r}'.format(op))
        if not op.isascii() or op.isalnum() or op.isspace() or \
                op in self.reserved_chars:
            raise ValueError('{!r} cannot be used as operator'.format(op))
        if not isinstance(prec, int):
            raise TypeError(
                'Precedence of {} must be an int, not {}'.format(
                    op, type(prec)))

    def get_precedence(self, op) -> int:
        """ Get the precedence of a binary operator or -1 if it is none """
        prec = self.precedence.get(op, -1)
        return prec if prec > 0 else -1

    def lookup_function(self, name):
        """ Get the ir function or external declared under name """
        return self.functions.get(name)

    def set_scope(self, variables):
        """ Replace the variables in scope by the given ones """
        self.scope = dict(variables)
