"""Character-level scanning shared by the grammar layers.

All state of one parse (cursor, latched error, variable table) lives on a
``ParseContext``, so separate parses never interfere with each other.
"""
import logging
from dataclasses import dataclass, field
from typing import NoReturn, Optional

from parsetree.errors import ParserError, SyntaxFault
from parsetree.utils import WHITESPACE, is_digit, is_lower
from parsetree.variables import DEFAULT_VARIABLES, VariableTable

logger = logging.getLogger(__name__)


@dataclass
class ParseContext:
    source: str
    variables: VariableTable = field(default_factory=lambda: DEFAULT_VARIABLES)
    pos: int = 0
    error: Optional[ParserError] = None

    def peek(self) -> str:
        """Current character, empty string at the end of input"""
        return self.source[self.pos : self.pos + 1]

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def skip_whitespace(self, whitespace: str = WHITESPACE) -> None:
        while not self.at_end() and self.source[self.pos] in whitespace:
            self.pos += 1

    def match(self, token: str) -> bool:
        """Skips whitespace and checks whether ``token`` comes next. Never
        consumes the token itself, call ``advance()`` after a match."""
        self.skip_whitespace()
        return self.source.startswith(token, self.pos)

    def advance(self, n: int) -> None:
        self.pos += n

    def peek_identifier(self) -> str:
        """Maximal run of lower-case letters at the cursor, not consumed. Any other
        character ends an identifier, so ``sinX`` reads as ``sin``."""
        end = self.pos
        while end < len(self.source) and is_lower(self.source[end]):
            end += 1
        return self.source[self.pos : end]

    def fault(self, fault: SyntaxFault) -> NoReturn:
        # the first fault of a parse wins, later ones re-raise it
        if self.error is None:
            self.error = ParserError(fault, source=self.source, position=self.pos)
            logger.debug("Syntax fault %s at %d in %r", fault, self.pos, self.source)
        raise self.error


def _consume_sign_run(ctx: ParseContext) -> int:
    sign = 1
    while True:
        if ctx.match("+"):
            ctx.advance(1)
        elif ctx.match("-"):
            ctx.advance(1)
            sign = -sign
        else:
            return sign


def _consume_digits(ctx: ParseContext) -> str:
    start = ctx.pos
    while is_digit(ctx.peek()):
        ctx.advance(1)
    return ctx.source[start : ctx.pos]


def scan_number(ctx: ParseContext) -> float:
    """Consumes a numeric literal: ``[sign run] digits [. digits] [e|E [sign run] digits]``.

    Every ``-`` in a sign run flips the sign, every ``+`` is ignored. Whitespace
    may separate the mantissa from the exponent marker and the marker from its
    exponent, e.g. ``2 e -3``. Exponents beyond the float range give ``inf``
    (or ``0.0``).
    """
    ctx.skip_whitespace()
    sign = _consume_sign_run(ctx)
    ctx.skip_whitespace()

    if not is_digit(ctx.peek()) and ctx.peek() != ".":
        ctx.fault(SyntaxFault.UNEXPECTED_SYMBOL)

    integer = _consume_digits(ctx)
    fraction = ""
    if ctx.peek() == ".":
        ctx.advance(1)
        fraction = _consume_digits(ctx)

    ctx.skip_whitespace()
    exponent = "0"
    if ctx.peek() in ("e", "E"):
        ctx.advance(1)
        ctx.skip_whitespace()
        exponent_sign = _consume_sign_run(ctx)
        ctx.skip_whitespace()
        if not is_digit(ctx.peek()):
            ctx.fault(SyntaxFault.UNEXPECTED_SYMBOL)
        exponent = ("-" if exponent_sign < 0 else "") + _consume_digits(ctx)

    # float() rounds the whole decimal once, so long fractions and large
    # exponents never pass through an intermediate inf
    return sign * float(f"{integer or '0'}.{fraction or '0'}e{exponent}")
