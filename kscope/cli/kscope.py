""" kscope front end.

Reads definitions, externs and expressions and prints the ir-code that
is generated for each of them. Without a source file, the standard input
is read interactively.
"""

import argparse
import sys
from ppci import irutils
from .base import base_parser, LogSetup
from ..context import Context
from ..driver import Driver
from ..lexer import Lexer


def operator_spec(txt):
    """ Parse an operator definition like '/=40' """
    op, sep, prec = txt.rpartition('=')
    if not sep or len(op) != 1:
        raise argparse.ArgumentTypeError(
            'Expected OP=PRECEDENCE, got {!r}'.format(txt))
    try:
        return op, int(prec)
    except ValueError:
        raise argparse.ArgumentTypeError(
            'Invalid precedence {!r}'.format(prec))


parser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.RawDescriptionHelpFormatter,
    parents=[base_parser])
parser.add_argument(
    'source', metavar='source', nargs='?', default=None,
    help='source file, by default the standard input',
    type=argparse.FileType('r'))
parser.add_argument(
    '--output', '-o', help='output file', metavar='output-file',
    default='-', type=argparse.FileType('w'))
parser.add_argument(
    '--ir', action='store_true', default=False,
    help='Write the complete ir-module after the last construct')
parser.add_argument(
    '--module', default='main', metavar='name',
    help='Name of the generated ir-module')
parser.add_argument(
    '--operator', metavar='OP=PRECEDENCE', type=operator_spec,
    action='append', default=[],
    help='Register an extra binary operator for parsing')


def kscope(args=None):
    """ Run the read-parse-lower loop """
    args = parser.parse_args(args)
    with LogSetup(args):
        context = Context(args.module, precedence=dict(args.operator))
        if args.source:
            lexer = Lexer(args.source)
            prompt = False
        else:
            lexer = Lexer(sys.stdin, filename='<stdin>')
            prompt = sys.stdin.isatty()

        driver = Driver(lexer, context, output=args.output, prompt=prompt)
        driver.run()

        if args.ir:
            if driver.diag.diags:
                raise driver.diag.diags[0]
            irutils.Writer(file=args.output).write(context.module)


if __name__ == '__main__':
    kscope()
