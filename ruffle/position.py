"""Conversion de offsets a posiciones (fila, columna) dentro del codigo fuente."""
from __future__ import annotations

from typing import Tuple


def resolve_position(source: str, offset: int) -> Tuple[int, int]:
    """Devuelve la fila y columna (ambas desde 1) del offset indicado.

    Las filas cuentan los saltos de linea anteriores al offset y la columna se
    reinicia en 1 despues de cada salto. Un offset mas alla del final del texto
    apunta a la posicion inmediatamente posterior al ultimo caracter.
    """
    if offset < 0:
        raise ValueError(f"offset negativo: {offset}")

    offset = min(offset, len(source))
    row = source.count("\n", 0, offset) + 1
    last_newline = source.rfind("\n", 0, offset)
    # rfind devuelve -1 en la primera fila, lo que deja col = offset + 1
    col = offset - last_newline
    return row, col
