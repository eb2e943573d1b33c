"""Lexer de Ruffle construido sobre ply.lex."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, ClassVar, Dict, Iterable, Iterator, List, Tuple

import ply.lex as lex

from .errors import OTHER, OVERFLOW, LexicalError, LexingError
from .sliced import LexResult, SlicedError, SlicedToken, Span
from .tokens import (
    FIXED_TEXT,
    I32_MAX,
    LITERAL_TYPES,
    RESERVED,
    SYMBOLS,
    Token,
    parse_f32,
    symbol_pattern,
)

Reporter = Callable[[str, str], None]

SYMBOL_PATTERN = symbol_pattern(SYMBOLS)
_I32_DIGITS = len(str(I32_MAX))


@dataclass(frozen=True)
class LexerConfig:
    reserved: Dict[str, str] = field(default_factory=lambda: dict(RESERVED))

    base_tokens: ClassVar[Tuple[str, ...]] = (
        tuple(SYMBOLS.values()) + LITERAL_TYPES + ('INVALID',)
    )

    def full_token_list(self) -> Tuple[str, ...]:
        return self.base_tokens + tuple(self.reserved.values())


@dataclass
class RuffleLexer:
    """Tokenizador por munch maximo.

    Las reglas se evaluan en el orden en que aparecen en la clase: comentarios,
    flotantes, enteros, strings, identificadores y por ultimo simbolos. Cada
    categoria empieza por caracteres distintos, asi que el primer acierto es
    tambien el lexema mas largo; dentro de los simbolos la alternancia esta
    ordenada de mayor a menor longitud.
    """

    config: LexerConfig = field(default_factory=LexerConfig)
    reporter: Reporter | None = None
    tokens: Tuple[str, ...] = field(init=False)
    reserved: Dict[str, str] = field(init=False)
    lexer: lex.Lexer = field(init=False)
    error_count: int = field(default=0, init=False)

    t_ignore: ClassVar[str] = ' \t\n\f'

    def __post_init__(self) -> None:
        self.reserved = self.config.reserved
        self.tokens = self.config.full_token_list()
        self.lexer = lex.lex(module=self)

    def t_COMMENT_BLOCK(self, t):
        r'/\*(?:.|\n)*?(?:\*/|\Z)'
        # sin cierre consume hasta el final de la entrada

    def t_COMMENT_LINE(self, t):
        r'//[^\n]*'

    def t_FLOAT(self, t):
        r'[0-9]+\.[0-9]+'
        try:
            value = parse_f32(t.value)
        except ValueError:
            return self._invalid(t, LexingError.invalid_float())
        t.value = Token('FLOAT', value)
        return t

    def t_INTEGER(self, t):
        r'[0-9]+'
        if len(t.value.lstrip('0')) > _I32_DIGITS:
            return self._invalid(t, LexingError.invalid_integer(OVERFLOW))
        try:
            value = int(t.value)
        except ValueError:
            return self._invalid(t, LexingError.invalid_integer(OTHER))
        if value > I32_MAX:
            return self._invalid(t, LexingError.invalid_integer(OVERFLOW))
        t.value = Token('INTEGER', value)
        return t

    def t_STRING(self, t):
        r'"(?:[^"\\]|\\.)*"'
        # las secuencias de escape se conservan tal cual
        t.value = Token('STRING', t.value[1:-1])
        return t

    def t_IDENTIFIER(self, t):
        r'[a-zA-Z_][a-zA-Z0-9_]*'
        keyword = self.reserved.get(t.value)
        if keyword is not None:
            t.type = keyword
            # las reservadas ajenas a la tabla base conservan su lexema
            t.value = Token(keyword) if keyword in FIXED_TEXT else Token(keyword, t.value)
        else:
            t.value = Token('IDENTIFIER', t.value)
        return t

    @lex.TOKEN(SYMBOL_PATTERN)
    def t_SYMBOL(self, t):
        t.type = SYMBOLS[t.value]
        t.value = Token(t.type)
        return t

    def t_error(self, t):
        t.lexer.skip(1)
        return self._invalid(t, LexingError.non_ascii_character())

    def _invalid(self, t, error: LexingError):
        t.type = 'INVALID'
        t.value = error
        return t

    def _report(self, error: SlicedError) -> None:
        self.error_count += 1
        if self.reporter is None:
            return
        row, col = error.position()
        self.reporter(
            "error",
            f"[Lexer] error at {row}:{col}: {error.error} {error.slice()!r}",
        )

    def iter_tokens(self, data: str) -> Iterator[LexResult]:
        """Recorre la entrada lexema a lexema.

        Cada llamada trabaja sobre un clon del lexer de PLY, de modo que dos
        recorridos no comparten posicion.
        """
        scanner = self.lexer.clone()
        scanner.input(data)
        while True:
            tok = scanner.token()
            if not tok:
                break
            span = Span(tok.lexpos, scanner.lexpos)
            if tok.type == 'INVALID':
                error = SlicedError(tok.value, span, data)
                self._report(error)
                yield error
            else:
                yield SlicedToken(tok.value, span, data)

    def tokenize(self, data: str) -> List[LexResult]:
        self.error_count = 0
        return list(self.iter_tokens(data))

    def print_tokens(self, data: str) -> None:
        for result in self.tokenize(data):
            print(result)


@lru_cache(maxsize=None)
def _default_lexer() -> RuffleLexer:
    return RuffleLexer()


def lex_source(source: str) -> List[LexResult]:
    """Tokeniza un fuente completo con la configuracion por defecto."""
    return _default_lexer().tokenize(source)


def expect_tokens(results: Iterable[LexResult]) -> List[SlicedToken]:
    """Devuelve solo tokens; el primer error interrumpe con LexicalError."""
    tokens = []
    for result in results:
        if not result.ok:
            raise LexicalError(result)
        tokens.append(result)
    return tokens


def format_stream(tokens: Iterable[SlicedToken]) -> str:
    return " ".join(str(token) for token in tokens)
