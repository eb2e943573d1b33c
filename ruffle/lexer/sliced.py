"""Tokens y errores anclados a un rango del codigo fuente.

Ninguno de estos objetos copia el texto: guardan los offsets y una referencia
al string original, que no debe modificarse mientras existan tokens derivados
de el (los str de Python son inmutables, asi que basta con no reemplazarlo).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Union

from ..position import resolve_position
from .errors import LexingError
from .tokens import Token


class Span(NamedTuple):
    """Rango semiabierto [start, end) de offsets en el codigo fuente."""

    start: int
    end: int


@dataclass(frozen=True)
class SlicedToken:
    token: Token
    span: Span
    source: str = field(repr=False)

    ok = True

    def slice(self) -> str:
        return self.source[self.span.start:self.span.end]

    def position(self):
        return resolve_position(self.source, self.span.start)

    def __str__(self) -> str:
        return str(self.token)


@dataclass(frozen=True)
class SlicedError:
    error: LexingError
    span: Span
    source: str = field(repr=False)

    ok = False

    def slice(self) -> str:
        return self.source[self.span.start:self.span.end]

    def position(self):
        return resolve_position(self.source, self.span.start)

    def __str__(self) -> str:
        return render_diagnostic(self)


LexResult = Union[SlicedToken, SlicedError]


def render_diagnostic(error: SlicedError) -> str:
    """Mensaje de tres lineas: posicion, lexema problematico y descripcion."""
    row, col = error.position()
    return "\n".join(
        (
            f"error at {row}:{col}:",
            error.slice(),
            f"^ {error.error}",
        )
    )
