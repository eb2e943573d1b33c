"""CLI: lee un archivo Ruffle y muestra sus tokens."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .facade import CompilerFacade, TokenizationResult
from .output_formatter import BufferedReporter, RichCompilerConsole

FORMATS = ("stream", "table", "json")


def build_argument_parser(output: RichCompilerConsole) -> argparse.ArgumentParser:
    parser = output.create_argument_parser(
        prog="ruffle-lex",
        description="Tokeniza un archivo fuente de Ruffle.",
    )
    parser.add_argument("source", help="archivo a tokenizar ('-' para leer de stdin)")
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default="stream",
        help="forma de mostrar los tokens (por defecto: stream)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="reporta todos los errores lexicos en lugar de detenerse en el primero",
    )
    return parser


def _show_tokens(output: RichCompilerConsole, result: TokenizationResult, fmt: str) -> None:
    if fmt == "table":
        output.show_tokens(result.tokens)
    elif fmt == "json":
        output.show_json(result.tokens_json)
    else:
        output.show_stream(result.stream)


def main(argv: Sequence[str] | None = None, output: RichCompilerConsole | None = None) -> int:
    output = output or RichCompilerConsole()
    args = build_argument_parser(output).parse_args(argv)
    facade = CompilerFacade(Path.cwd())

    try:
        if args.source == "-":
            result = facade.tokenize(sys.stdin.read(), path="<stdin>")
        else:
            result = facade.tokenize_file(args.source)
    except OSError as exc:
        output.message(f"No se pudo leer el archivo: {exc}", level="error", stderr=True)
        return 1

    if not args.keep_going:
        # mismo contrato que el driver de referencia: el primer error aborta
        if result.diagnostics:
            output.show_diagnostic(result.diagnostics[0])
            return 1
        _show_tokens(output, result, args.format)
        return 0

    _show_tokens(output, result, args.format)
    buffered = BufferedReporter(output)
    buffered.extend(result.lexical_messages)
    buffered.flush()
    for diagnostic in result.diagnostics:
        output.show_diagnostic(diagnostic)
    output.show_summary(result.lexical_errors)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
