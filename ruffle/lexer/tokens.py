"""Modelo de tokens de Ruffle: tablas de simbolos, palabras reservadas y literales."""
from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any, Dict, Iterable, Tuple

# Simbolos de texto fijo -> nombre de token.
SYMBOLS: Dict[str, str] = {
    '.': 'PERIOD',
    ',': 'COMMA',
    ';': 'SEMI',
    '!': 'BANG',
    '?': 'QUESTION',
    ':': 'COLON',
    '::': 'COLON_COLON',
    '(': 'LPAREN',
    ')': 'RPAREN',
    '[': 'LSQUARE',
    ']': 'RSQUARE',
    '{': 'LBRACE',
    '}': 'RBRACE',
    '->': 'STRAIGHT_ARROW',
    '=>': 'EQ_ARROW',
    # aritmeticos
    '+': 'PLUS',
    '-': 'MINUS',
    '*': 'STAR',
    '/': 'SLASH',
    '%': 'MODULUS',
    # comparacion
    '==': 'EQ_EQ',
    '===': 'EQ_EQ_EQ',
    '!=': 'NE',
    '!==': 'NEE',
    '<': 'LESS',
    '<=': 'LESS_EQ',
    '>': 'GREATER',
    '>=': 'GREATER_EQ',
    # logicos
    '&&': 'AND_AND',
    '||': 'OR_OR',
    # asignacion
    '=': 'EQ',
    '+=': 'PLUS_EQ',
    '-=': 'MINUS_EQ',
    '*=': 'STAR_EQ',
    '/=': 'SLASH_EQ',
}

RESERVED: Dict[str, str] = {
    'let': 'LET',
    'fn': 'FN',
    'if': 'IF',
    'else': 'ELSE',
    'while': 'WHILE',
    'for': 'FOR',
    'return': 'RETURN',
    'class': 'CLASS',
    'impl': 'IMPL',
    'struct': 'STRUCT',
    'enum': 'ENUM',
    'self': 'SELF_VALUE',
    'super': 'SUPER',
    'use': 'USE',
    'mod': 'MOD',
    'const': 'CONST',
    'static': 'STATIC',
}

LITERAL_TYPES: Tuple[str, ...] = ('INTEGER', 'FLOAT', 'STRING', 'IDENTIFIER')

# Texto de cada token fijo, para imprimirlo de vuelta.
FIXED_TEXT: Dict[str, str] = {
    name: text for text, name in {**SYMBOLS, **RESERVED}.items()
}

_SYMBOL_TYPES = frozenset(SYMBOLS.values())

I32_MAX = 2**31 - 1

_F32_INF_BITS = 0x7F800000


def symbols_longest_first(symbols: Iterable[str]) -> Tuple[str, ...]:
    """Ordena los simbolos de mayor a menor longitud (=== antes que == antes que =)."""
    return tuple(sorted(symbols, key=len, reverse=True))


def symbol_pattern(symbols: Iterable[str]) -> str:
    """Alternancia regex con los simbolos en orden de preferencia."""
    return '|'.join(re.escape(text) for text in symbols_longest_first(symbols))


def to_f32(value: float) -> float:
    """Redondea un float de Python a precision simple.

    Los valores fuera del rango de f32 se convierten en infinito.
    """
    try:
        return struct.unpack('<f', struct.pack('<f', value))[0]
    except OverflowError:
        return float('inf') if value > 0 else float('-inf')


def _f32_bits(value: float) -> int:
    return struct.unpack('<I', struct.pack('<f', value))[0]


def _f32_from_bits(bits: int) -> float:
    return struct.unpack('<f', struct.pack('<I', bits))[0]


def _f32_exact(bits: int) -> Decimal:
    # el "siguiente" valor tras el maximo f32 es 2**128
    if bits == _F32_INF_BITS:
        return Decimal(2) ** 128
    return Decimal(_f32_from_bits(bits))


def parse_f32(text: str) -> float:
    """Convierte un literal decimal al f32 mas cercano, con empates al par.

    Pasar por un float de Python redondea dos veces; el candidato puede quedar
    a un ulp del correcto, asi que se compara el decimal exacto con el punto
    medio hacia el vecino.
    """
    if text.startswith('-'):
        return -parse_f32(text[1:])
    candidate = to_f32(float(text))
    bits = _f32_bits(candidate)
    exact = Decimal(text)
    if not math.isinf(candidate) and exact == Decimal(candidate):
        return candidate
    if math.isinf(candidate) or exact < Decimal(candidate):
        lower, upper = bits - 1, bits
    else:
        lower, upper = bits, bits + 1
    with localcontext() as ctx:
        ctx.prec = 400
        midpoint = (_f32_exact(lower) + _f32_exact(upper)) / 2
    if exact > midpoint:
        return _f32_from_bits(upper)
    if exact < midpoint:
        return _f32_from_bits(lower)
    return _f32_from_bits(lower if lower % 2 == 0 else upper)


def format_f32(value: float) -> str:
    """Representacion decimal mas corta que recupera el mismo f32, sin exponente."""
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    for precision in range(1, 10):
        text = f'{value:.{precision}g}'
        if parse_f32(text) == value:
            break
    return format(Decimal(text), 'f')


@dataclass(frozen=True)
class Token:
    """Token clasificado. Los tokens de texto fijo no llevan valor."""

    type: str
    value: Any = None

    @property
    def is_fixed_text(self) -> bool:
        return self.type not in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        return self.is_fixed_text and self.type not in _SYMBOL_TYPES

    def __str__(self) -> str:
        if self.type == 'INTEGER':
            return str(self.value)
        if self.type == 'FLOAT':
            return format_f32(self.value)
        if self.type == 'STRING':
            return f'str("{self.value}")'
        if self.type == 'IDENTIFIER':
            return f'ident({self.value})'
        text = FIXED_TEXT.get(self.type)
        if text is None:
            # palabra reservada agregada por configuracion: lleva su lexema
            return self.type.lower() if self.value is None else str(self.value)
        return text
