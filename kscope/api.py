""" Functions to compile kscope source in one go.

The functions here are the batch counterparts of the interactive driver:

.. doctest::

    >>> from kscope.api import parse_expression
    >>> parse_expression('1 + 2 * 3')
    (+ 1.0 (* 2.0 3.0))

"""

import io
import logging
from ppci.common import DiagnosticsManager
from ppci.irutils import verify_module
from .context import Context
from .driver import Driver
from .lexer import Lexer
from .parser import Parser


def kscope_to_ir(source, module_name='main', precedence=None, diag=None):
    """ Compile kscope source text into an ir-module.

    Definitions and externs end up in the module. Top level expressions
    are checked but not kept. All errors are reported to the diagnostics
    manager, after which the first one is raised.

    Args:
        source: source text or a file like object.
        module_name: name of the resulting ir-module.
        precedence: extra binary operators, mapping operator to precedence.
        diag: an optional :class:`ppci.common.DiagnosticsManager`.
    """
    logger = logging.getLogger('kscope')
    if diag is None:
        diag = DiagnosticsManager()

    if hasattr(source, 'read'):
        filename = getattr(source, 'name', None)
        source = source.read()
    else:
        filename = None

    logger.debug('kscope compilation started')
    context = Context(module_name, precedence=precedence)
    lexer = Lexer(source, filename=filename)
    driver = Driver(lexer, context, diag=diag, output=io.StringIO())
    driver.run()
    if diag.diags:
        raise diag.diags[0]

    verify_module(context.module)
    logger.debug('Compiled %d functions', len(context.module.functions))
    return context.module


def parse_expression(source, precedence=None):
    """ Parse a single expression into an AST """
    context = Context(precedence=precedence)
    parser = Parser(Lexer(source), context)
    expr = parser.parse_expression()
    if not parser.at_end:
        parser.error('Expected end of input, got "{}"'.format(parser.peek))
    return expr
