import unittest
import argparse
import io
from unittest import mock
from ppci import ir
from ppci.common import CompilerError, DiagnosticsManager, IrFormError
from kscope.api import kscope_to_ir, parse_expression
from kscope.cli.kscope import kscope, operator_spec
from kscope.common import LowerError, ParseError


class KscopeToIrTestCase(unittest.TestCase):
    def test_module(self):
        module = kscope_to_ir(
            'extern sin(x)\ndef f(x) sin(x) * 2\nf(1)', module_name='demo')
        self.assertIsInstance(module, ir.Module)
        self.assertEqual('demo', module.name)
        self.assertEqual(['f'], [f.name for f in module.functions])
        self.assertEqual(['sin'], [e.name for e in module.externals])

    def test_file_like_source(self):
        module = kscope_to_ir(io.StringIO('def one() 1'))
        self.assertEqual(['one'], [f.name for f in module.functions])

    def test_extra_operator(self):
        with self.assertRaises(CompilerError) as cm:
            kscope_to_ir('def f(a b) a / b', precedence={'/': 40})
        self.assertEqual("invalid binary operator '/'", cm.exception.msg)

    def test_error(self):
        diag = DiagnosticsManager()
        with self.assertRaises(CompilerError) as cm:
            kscope_to_ir('def f(x) y\ndef (', diag=diag)
        self.assertEqual("Unknown variable name 'y'", cm.exception.msg)
        self.assertEqual(2, len(diag.diags))

    def test_trailing_tokens(self):
        with self.assertRaises(ParseError):
            parse_expression('1 2')

    def test_error_hierarchy(self):
        """ Front end errors and ppci errors share one base class """
        self.assertTrue(issubclass(ParseError, CompilerError))
        self.assertTrue(issubclass(LowerError, CompilerError))
        self.assertTrue(issubclass(IrFormError, CompilerError))
        self.assertEqual('bad token', str(ParseError('bad token')))


class CommandLineTestCase(unittest.TestCase):
    """ Invoke the command line front end with stdin and stdout replaced """
    def run_kscope(self, source, *args):
        with mock.patch('sys.stdin', io.StringIO(source)), \
                mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            kscope(list(args))
        return out.getvalue()

    def test_help(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as out:
            with self.assertRaises(SystemExit) as cm:
                kscope(['-h'])
        self.assertEqual(0, cm.exception.code)
        self.assertIn('--operator', out.getvalue())

    def test_reports(self):
        output = self.run_kscope('def f(x) x\nf(2)')
        self.assertIn('Parsed a function definition.', output)
        self.assertIn('Parsed a top-level expr.', output)
        self.assertNotIn('ready>', output)

    def test_errors_are_reported(self):
        output = self.run_kscope('def (\n1')
        self.assertIn('Error: Expected function name in prototype', output)
        self.assertIn('Parsed a top-level expr.', output)

    def test_ir_module(self):
        output = self.run_kscope('extern g(x)\ndef f(x) g(x)', '--ir')
        self.assertIn('module main;', output)
        self.assertIn('external function', output)

    def test_module_name(self):
        output = self.run_kscope('def f(x) x', '--ir', '--module', 'foo')
        self.assertIn('module foo;', output)

    def test_ir_with_errors(self):
        with mock.patch('sys.stderr', new_callable=io.StringIO) as err:
            with self.assertRaises(SystemExit) as cm:
                self.run_kscope('def f(x) y', '--ir')
        self.assertEqual(1, cm.exception.code)
        self.assertIn("Error: Unknown variable name 'y'", err.getvalue())

    def test_operator(self):
        output = self.run_kscope('def f(a b) a % b', '--operator', '%=40')
        self.assertIn("Error: invalid binary operator '%'", output)

    def test_without_operator(self):
        output = self.run_kscope('def f(a b) a % b')
        self.assertIn('Parsed a function definition.', output)
        self.assertIn(
            'Error: unknown token when expecting an expression', output)


class OperatorSpecTestCase(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(('/', 40), operator_spec('/=40'))
        self.assertEqual(('=', 5), operator_spec('==5'))

    def test_invalid(self):
        for txt in ['/', '/=', '//=4', '/=x']:
            with self.assertRaises(argparse.ArgumentTypeError):
                operator_spec(txt)


if __name__ == '__main__':
    unittest.main()
