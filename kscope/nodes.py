"""
AST (abstract syntax tree) nodes for the kscope language.
The tree is build by the parser and then lowered into ir-code.

Each node owns its children. The representation of a node is a
fully parenthesized prefix notation, for example ``(+ 1.0 (* x 2.0))``.
"""

# pylint: disable=R0903


class Node:
    """ Base class of all nodes in a AST """
    def __init__(self, loc):
        self.loc = loc


class Expression(Node):
    """ Base class of all nodes that produce a value """
    pass


class NumberLiteral(Expression):
    """ Numeric literal like '1.0' """
    def __init__(self, value, loc=None):
        super().__init__(loc)
        assert isinstance(value, float)
        self.value = value

    def __repr__(self):
        return repr(self.value)


class VariableRef(Expression):
    """ Reference to a variable, like 'a' """
    def __init__(self, name, loc=None):
        super().__init__(loc)
        self.name = name

    def __repr__(self):
        return self.name


class BinaryOp(Expression):
    """ Binary operator such as '+' """
    def __init__(self, op, lhs, rhs, loc=None):
        super().__init__(loc)
        assert isinstance(lhs, Expression)
        assert isinstance(rhs, Expression)
        self.op = op
        self.lhs = lhs
        self.rhs = rhs

    def __repr__(self):
        return '({} {!r} {!r})'.format(self.op, self.lhs, self.rhs)


class Call(Expression):
    """ Function call """
    def __init__(self, callee, args, loc=None):
        super().__init__(loc)
        assert all(isinstance(a, Expression) for a in args)
        self.callee = callee
        self.args = args

    def __repr__(self):
        return '(call {})'.format(
            ' '.join([self.callee] + [repr(a) for a in self.args]))


class Prototype(Node):
    """ The name of a function and the names of its parameters.

    A prototype captures the number of arguments a function takes;
    all values in the language are 64-bit floating point numbers.
    """
    def __init__(self, name, params, loc=None):
        super().__init__(loc)
        self.name = name
        self.params = params

    @property
    def arity(self):
        return len(self.params)

    def __repr__(self):
        return '(proto {} ({}))'.format(self.name, ' '.join(self.params))


class FunctionDef(Node):
    """ Function definition: a prototype and a single expression body """
    def __init__(self, proto, body, loc=None):
        super().__init__(loc)
        assert isinstance(proto, Prototype)
        assert isinstance(body, Expression)
        self.proto = proto
        self.body = body

    @property
    def name(self):
        return self.proto.name

    def __repr__(self):
        return '(def {!r} {!r})'.format(self.proto, self.body)
