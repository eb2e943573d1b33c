from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

NON_ASCII_CHARACTER = 'NON_ASCII_CHARACTER'
INVALID_INTEGER = 'INVALID_INTEGER'
INVALID_FLOAT = 'INVALID_FLOAT'

OVERFLOW = 'overflow'
OTHER = 'other'


@dataclass(frozen=True)
class LexingError:
    """Error asociado a un lexema mal formado.

    NON_ASCII_CHARACTER es el caso por defecto: cualquier caracter que ninguna
    regla reconoce, sea o no ASCII.
    """

    kind: str = NON_ASCII_CHARACTER
    reason: Optional[str] = None

    @classmethod
    def non_ascii_character(cls) -> "LexingError":
        return cls(NON_ASCII_CHARACTER)

    @classmethod
    def invalid_integer(cls, reason: str) -> "LexingError":
        return cls(INVALID_INTEGER, reason)

    @classmethod
    def invalid_float(cls) -> "LexingError":
        return cls(INVALID_FLOAT)

    def __str__(self) -> str:
        if self.kind == INVALID_INTEGER:
            return f"invalid integer: {self.reason}"
        if self.kind == INVALID_FLOAT:
            return "invalid float"
        return "non ascii character"


class LexicalError(Exception):
    """Se lanza cuando un consumidor exige un flujo sin errores lexicos."""

    def __init__(self, sliced_error: Any) -> None:
        super().__init__(str(sliced_error))
        self.sliced_error = sliced_error
