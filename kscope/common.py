"""
   Errors raised by the kscope front end
   Outcome of a top level construct
"""

from ppci.common import CompilerError


class KscopeError(CompilerError):
    """ Base of the errors raised while handling kscope source """
    def __str__(self):
        return str(self.msg)


class ParseError(KscopeError):
    """ Structural grammar violation """
    pass


class LowerError(KscopeError):
    """ Raised when an ast cannot be translated into ir-code """
    pass


class Result:
    """ Outcome of handling one top-level construct.

    Either holds a value (the parsed node or the produced ir object),
    or the error that stopped the construct.
    """
    __slots__ = ['value', 'error', 'kind']

    def __init__(self, kind, value=None, error=None):
        assert (value is None) or (error is None)
        self.kind = kind
        self.value = value
        self.error = error

    @property
    def ok(self):
        return self.error is None

    def __bool__(self):
        return self.ok

    def __repr__(self):
        if self.ok:
            return 'Result({}, {})'.format(self.kind, self.value)
        return 'Result({}, error={!r})'.format(self.kind, self.error)
