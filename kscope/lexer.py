""" Lexical analyzer part. Splits the input character stream into tokens.

The lexer is pull based: the parser asks for one token at a time. The
only state carried between two calls is the input cursor and the
character that terminated the previous token.
"""

import io
import re
import string
from ppci.lang.common import SourceLocation, Token


IDENT_START = frozenset(string.ascii_letters)
IDENT_CHARS = frozenset(string.ascii_letters + string.digits)
NUMBER_CHARS = frozenset(string.digits + '.')
WHITESPACE = frozenset(string.whitespace)

_number_prefix = re.compile(r'[0-9]*(\.[0-9]*)?')


def make_num(txt):
    """ Convert the longest leading decimal literal in txt to a float.

    Behaves like the C strtod function on runs of digits and dots,
    so '1.2.3' gives 1.2 and a lone '.' gives 0.0.
    """
    prefix = _number_prefix.match(txt).group()
    if any(c in string.digits for c in prefix):
        return float(prefix)
    return 0.0


class Lexer:
    """ Generates a sequence of tokens from an input stream """
    keywords = ('def', 'extern')

    def __init__(self, source, filename=None):
        if isinstance(source, str):
            source = io.StringIO(source)
        if filename is None:
            filename = getattr(source, 'name', None)
        self.source = source
        self.filename = filename
        self._row = 1
        self._col = 1
        self.last_char = ' '
        self.char_loc = SourceLocation(filename, 1, 0, 1)

    def advance(self):
        """ Read the next character into the pushback slot """
        char = self.source.read(1)
        if char:
            self.char_loc = SourceLocation(
                self.filename, self._row, self._col, 1)
            if char == '\n':
                self._row += 1
                self._col = 1
            else:
                self._col += 1
            self.last_char = char
        else:
            self.char_loc = SourceLocation(
                self.filename, self._row, self._col, 0)
            self.last_char = None
        return self.last_char

    def accept_run(self, valid):
        """ Gather the current character and all following valid ones """
        chars = [self.last_char]
        while self.advance() is not None and self.last_char in valid:
            chars.append(self.last_char)
        return ''.join(chars)

    def next_token(self):
        """ Scan and return the next token """
        while True:
            while self.last_char is not None and \
                    self.last_char in WHITESPACE:
                self.advance()

            char = self.last_char
            loc = self.char_loc
            if char is None:
                return Token('EOF', 'EOF', loc)
            elif char in IDENT_START:
                text = self.accept_run(IDENT_CHARS)
                loc.length = len(text)
                if text in self.keywords:
                    return Token(text, text, loc)
                return Token('ID', text, loc)
            elif char in NUMBER_CHARS:
                text = self.accept_run(NUMBER_CHARS)
                loc.length = len(text)
                return Token('NUMBER', make_num(text), loc)
            elif char == '#':
                # Comment until end of line:
                while self.advance() not in (None, '\n', '\r'):
                    pass
            else:
                self.advance()
                return Token(char, char, loc)

    def tokenize(self):
        """ Yield all tokens up to and including the end of file token """
        while True:
            token = self.next_token()
            yield token
            if token.typ == 'EOF':
                break
