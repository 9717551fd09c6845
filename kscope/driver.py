""" Top level driver loop.

Reads top level constructs one after another, hands them to the parser
and code generator and reports what happened. Errors abort only the
construct in which they occur.
"""

import logging
import sys
from ppci import ir, irutils
from ppci.common import CompilerError, DiagnosticsManager
from .common import LowerError, ParseError, Result
from .context import Context
from .lexer import Lexer
from .parser import Parser
from .codegenerator import CodeGenerator


class Driver:
    """ Dispatches top level constructs until the end of the input """
    logger = logging.getLogger('kscope.driver')
    prompt_text = 'ready> '
    too_deep = 'Expression is nested too deeply'

    def __init__(self, source, context=None, diag=None, output=None,
                 prompt=False):
        if not isinstance(source, Lexer):
            source = Lexer(source)
        if context is None:
            context = Context()
        self.context = context
        self.diag = diag if diag is not None else DiagnosticsManager()
        self.output = output if output is not None else sys.stdout
        self.prompt = prompt
        self.writer = irutils.Writer(file=self.output)
        self.codegen = CodeGenerator(context)
        self.show_prompt()
        self.parser = Parser(source, context)

    def show_prompt(self):
        if self.prompt:
            print(self.prompt_text, end='', file=sys.stderr, flush=True)

    def run(self):
        """ Handle top level constructs until end of file """
        results = []
        while not self.parser.at_end:
            result = self.handle_top_level()
            if result is not None:
                results.append(result)
            self.show_prompt()
        self.logger.debug(
            'Handled %d constructs, %d failed', len(results),
            sum(1 for r in results if not r))
        return results

    def handle_top_level(self):
        """ top ::= definition | external | expression | ';' """
        if self.parser.has_consumed(';'):
            return None
        elif self.parser.peek == 'def':
            return self.handle_definition()
        elif self.parser.peek == 'extern':
            return self.handle_extern()
        else:
            return self.handle_top_level_expression()

    def handle_definition(self):
        result = self.handle(
            'definition', self.parser.parse_definition,
            self.codegen.gen_function)
        if result:
            self.report('Parsed a function definition.', result.value)
        return result

    def handle_extern(self):
        result = self.handle(
            'extern', self.parser.parse_extern, self.codegen.gen_prototype)
        if result:
            self.report('Parsed an extern.', result.value)
        return result

    def handle_top_level_expression(self):
        """ Evaluate a top-level expression into an anonymous function """
        result = self.handle(
            'expression', self.parser.parse_top_level_expr,
            self.codegen.gen_function)
        if result:
            self.report('Parsed a top-level expr.', result.value)
            self.codegen.discard(result.value)
        return result

    def handle(self, kind, parse, lower):
        """ Parse and lower one construct.

        After a parse error the offending token is skipped, so that the
        loop continues at the next construct. Running out of stack on a
        deeply nested expression is reported as an error of the construct.
        """
        try:
            node = parse()
        except ParseError as ex:
            self.parser.next_token()
            return self.failed(kind, ex)
        except RecursionError:
            ex = ParseError(self.too_deep, self.parser.token.loc)
            self.parser.next_token()
            return self.failed(kind, ex)

        self.logger.debug('Parsed %s at %s', kind, node.loc)
        try:
            value = lower(node)
        except CompilerError as ex:
            return self.failed(kind, ex)
        except RecursionError:
            return self.failed(kind, LowerError(self.too_deep, node.loc))
        return Result(kind, value=value)

    def failed(self, kind, error):
        self.diag.add_diag(error)
        print('Error: {}'.format(error.msg), file=self.output)
        return Result(kind, error=error)

    def report(self, message, value):
        """ Print a status line and the generated ir-code """
        print(message, file=self.output)
        if isinstance(value, ir.SubRoutine):
            self.writer.write_function(value)
        else:
            print('{};'.format(value), file=self.output)
