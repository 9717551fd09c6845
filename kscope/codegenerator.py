""" This module contains the code generation class.

The code generator lowers the AST into ppci ir-code. All values are
64-bit floating point numbers. A comparison produces a small integer
which is widened back to a floating point 0.0 or 1.0.
"""

import logging
from ppci import ir
from ppci import irutils
from . import nodes as ast
from .common import LowerError


class CodeGenerator:
    """ Generates intermediate (IR) code from the AST.

    Functions are build separately and only added to the module of the
    context once they are complete and verified. A function whose body
    fails to lower is never visible to later lookups.
    """
    logger = logging.getLogger('kscope.codegen')
    ir_typ = ir.f64
    bool_typ = ir.u8

    def __init__(self, context):
        self.context = context
        self.builder = irutils.Builder()
        self.builder.set_module(context.module)
        self.verifier = irutils.Verifier()

    def error(self, msg, loc=None):
        raise LowerError(msg, loc)

    def emit(self, instruction):
        return self.builder.emit(instruction)

    # Top level constructs:
    def gen_prototype(self, proto: ast.Prototype):
        """ Declare the function, or return an earlier declaration """
        existing = self.context.lookup_function(proto.name)
        if existing is not None:
            self.logger.debug(
                'Reusing declaration of %s with %d arguments',
                proto.name, arity_of(existing))
            return existing

        arg_types = [self.ir_typ] * proto.arity
        external = ir.ExternalFunction(proto.name, arg_types, self.ir_typ)
        self.context.module.add_external(external)
        self.context.functions[proto.name] = external
        self.logger.debug('Declared %r', external)
        return external

    def gen_function(self, function: ast.FunctionDef):
        """ Generate code for a function definition """
        proto = function.proto
        existing = self.context.lookup_function(proto.name)
        if existing is not None and arity_of(existing) != proto.arity:
            self.error(
                'Redefinition of {} with {} instead of {} arguments'.format(
                    proto.name, proto.arity, arity_of(existing)),
                proto.loc)

        self.logger.debug('Generating ir-code for %s', proto.name)
        ir_function = ir.Function(proto.name, ir.Binding.GLOBAL, self.ir_typ)
        self.builder.set_function(ir_function)
        entry = self.builder.new_block('entry')
        ir_function.entry = entry
        self.builder.set_block(entry)

        # The scope holds exactly the parameters of this function:
        variables = {}
        for name in proto.params:
            parameter = ir.Parameter(name, self.ir_typ)
            ir_function.add_parameter(parameter)
            variables[name] = parameter
        self.context.set_scope(variables)

        # Registered during body generation, so the body can call itself:
        self.context.functions[proto.name] = ir_function
        try:
            value = self.gen_expr_code(function.body)
            self.builder.emit_return(value)
            self.verifier.verify_function(ir_function)
        except Exception:
            self.logger.debug('Dropping incomplete function %s', proto.name)
            if existing is None:
                del self.context.functions[proto.name]
            else:
                self.context.functions[proto.name] = existing
            self.drop(ir_function)
            raise
        finally:
            self.builder.set_function(None)

        # Only now the function becomes part of the module:
        if existing is not None:
            self.logger.debug('Replacing %s', existing)
            existing.replace_by(ir_function)
            self.remove(existing)
        self.context.module.add_function(ir_function)
        return ir_function

    def discard(self, ir_function):
        """ Remove a previously generated function from the module """
        self.logger.debug('Discarding %s', ir_function.name)
        self.remove(ir_function)
        if self.context.functions.get(ir_function.name) is ir_function:
            del self.context.functions[ir_function.name]

    def remove(self, value):
        """ Take a function or external out of the module """
        module = self.context.module
        if isinstance(value, ir.ExternalSubRoutine):
            module.externals.remove(value)
        else:
            module.functions.remove(value)
            self.drop(value)

    def drop(self, ir_function):
        """ Release all values used by a function that is thrown away """
        for block in ir_function:
            for instruction in block:
                instruction.delete()

    # Expressions:
    def gen_expr_code(self, expr: ast.Expression) -> ir.Value:
        """ Generate code for an expression. Return the generated ir-value """
        if isinstance(expr, ast.NumberLiteral):
            value = self.builder.emit_const(expr.value, self.ir_typ)
        elif isinstance(expr, ast.VariableRef):
            value = self.gen_variable(expr)
        elif isinstance(expr, ast.BinaryOp):
            value = self.gen_binop(expr)
        elif isinstance(expr, ast.Call):
            value = self.gen_call(expr)
        else:  # pragma: no cover
            raise NotImplementedError(str(expr))

        assert isinstance(value, ir.Value)
        return value

    def gen_variable(self, expr: ast.VariableRef):
        if expr.name not in self.context.scope:
            self.error(
                "Unknown variable name '{}'".format(expr.name), expr.loc)
        return self.context.scope[expr.name]

    def gen_binop(self, expr: ast.BinaryOp):
        """ Generate code for binary operation.

        The left spine of a chain like 'a + b + c' is lowered in a loop,
        operands still in left to right order.
        """
        spine = [expr]
        while isinstance(spine[-1].lhs, ast.BinaryOp):
            spine.append(spine[-1].lhs)

        value = self.gen_expr_code(spine[-1].lhs)
        for binop in reversed(spine):
            rhs = self.gen_expr_code(binop.rhs)
            value = self.gen_operator(binop, value, rhs)
        return value

    def gen_operator(self, expr: ast.BinaryOp, lhs, rhs):
        """ Combine two lowered operands with the operator of expr """
        if expr.op in ('+', '-', '*'):
            names = {'+': 'addtmp', '-': 'subtmp', '*': 'multmp'}
            return self.emit(
                ir.Binop(lhs, expr.op, rhs, names[expr.op], self.ir_typ))
        elif expr.op == '<':
            flag = self.gen_less_than(lhs, rhs)
            return self.emit(ir.Cast(flag, 'booltmp', self.ir_typ))
        else:
            self.error(
                "invalid binary operator '{}'".format(expr.op), expr.loc)

    def gen_less_than(self, lhs, rhs):
        """ Compute lhs < rhs as 1 or 0.

        The test is unordered: when either side is not a number the
        result is 1. This is done by jumping on the reverse condition.
        """
        true_block = self.builder.new_block()
        false_block = self.builder.new_block()
        final_block = self.builder.new_block()
        self.emit(ir.CJump(lhs, '>=', rhs, false_block, true_block))

        self.builder.set_block(true_block)
        true_val = self.emit(ir.Const(1, 'true', self.bool_typ))
        self.builder.emit_jump(final_block)

        self.builder.set_block(false_block)
        false_val = self.emit(ir.Const(0, 'false', self.bool_typ))
        self.builder.emit_jump(final_block)

        self.builder.set_block(final_block)
        phi = self.emit(ir.Phi('cmptmp', self.bool_typ))
        phi.set_incoming(true_block, true_val)
        phi.set_incoming(false_block, false_val)
        return phi

    def gen_call(self, expr: ast.Call):
        """ Generate code for a function call """
        callee = self.context.lookup_function(expr.callee)
        if callee is None:
            self.error(
                "Unknown function referenced '{}'".format(expr.callee),
                expr.loc)

        if arity_of(callee) != len(expr.args):
            self.error(
                'Incorrect # arguments passed to {}: expected {}, got {}'
                .format(expr.callee, arity_of(callee), len(expr.args)),
                expr.loc)

        args = [self.gen_expr_code(arg) for arg in expr.args]
        return self.emit(
            ir.FunctionCall(callee, args, 'calltmp', self.ir_typ))


def arity_of(function):
    """ Number of arguments of an ir function or external function """
    if isinstance(function, ir.ExternalSubRoutine):
        return len(function.argument_types)
    return len(function.arguments)
