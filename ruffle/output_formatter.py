"""Herramientas para formatear las salidas del lexer usando Rich."""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich_argparse import RichHelpFormatter


class _BoundHelpFormatter(RichHelpFormatter):
    def __init__(self, prog: str, console: Console) -> None:
        super().__init__(prog, console=console)


class _RichArgumentParser(argparse.ArgumentParser):
    """ArgumentParser que imprime ayuda y errores usando Rich."""

    def __init__(
        self,
        output: "RichCompilerConsole",
        *args: Any,
        **kwargs: Any,
    ) -> None:
        formatter_cls = kwargs.pop("formatter_class", None)
        if formatter_cls is None:
            formatter_cls = lambda prog: _BoundHelpFormatter(prog, console=output.console)  # type: ignore
        kwargs["formatter_class"] = formatter_cls
        super().__init__(*args, **kwargs)
        self._output = output

    def _print_message(self, message: Any, file: Any | None = None) -> None:
        if not message:
            return
        target = self._output.console if file in (None, sys.stdout) else self._output.err_console
        stream = target.file if hasattr(target, "file") else sys.stdout
        stream.write(message if isinstance(message, str) else str(message))
        stream.flush()

    def error(self, message: str) -> None:
        usage = self.format_usage()
        if usage:
            self._print_message(usage, file=sys.stderr)
        self._output.message(f"{self.prog}: {message}", level="error", stderr=True)
        raise SystemExit(2)


class RichCompilerConsole:
    """Punto central para producir salidas del CLI con Rich."""

    _LEVEL_STYLES = {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
    }

    _LEVEL_LABELS = {
        "info": "[INFO]",
        "success": "[OK]",
        "warning": "[WARN]",
        "error": "[ERROR]",
    }

    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
        default_prefix: str = "[Main]",
    ) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.default_prefix = default_prefix

    def message(
        self,
        text: str,
        *,
        level: str = "info",
        prefix: str | None = None,
        stderr: bool = False,
    ) -> None:
        """Imprime un mensaje corto con estilo estandarizado."""
        style = self._LEVEL_STYLES.get(level, "white")
        label = self._LEVEL_LABELS.get(level, "[INFO]")
        target = self.err_console if stderr else self.console

        composed = Text()
        composed.append(label, style=f"bold {style}")
        composed.append(" ")
        composed.append(prefix or self.default_prefix, style=f"bold {style}")
        composed.append(" ")
        composed.append(text)

        target.print(composed)

    def show_stream(self, stream: str) -> None:
        """Imprime los tokens en su forma visible, separados por espacios."""
        self.console.print(Text(stream), soft_wrap=True)

    def show_tokens(self, tokens: Sequence[Mapping[str, Any]]) -> None:
        """Representa la tabla de tokens generada por el lexer."""
        table = Table(
            title="Tokens",
            header_style="bold cyan",
            box=box.SIMPLE_HEAD,
            show_lines=False,
        )
        table.add_column("Pos", style="dim", justify="right", width=9)
        table.add_column("Tipo", style="bold")
        table.add_column("Texto", overflow="fold")
        table.add_column("Valor", overflow="fold")

        for token in tokens:
            row, col = token.get("row"), token.get("col")
            pos_str = f"{row}:{col}" if isinstance(row, int) and isinstance(col, int) else "-"
            value = token.get("value")
            value_repr = "" if value is None else repr(value)
            table.add_row(pos_str, str(token.get("type", "")), str(token.get("text", "")), value_repr)

        self.console.print(table)

    def show_json(self, json_text: str) -> None:
        """Muestra los tokens serializados en una vista con resaltado."""
        syntax = Syntax(
            json_text,
            "json",
            theme="monokai",
            indent_guides=True,
            word_wrap=False,
        )
        panel = Panel(
            syntax,
            title="Tokens",
            border_style="cyan",
            box=box.SIMPLE,
        )
        self.console.print(panel)

    def show_diagnostic(self, diagnostic: str) -> None:
        """Muestra un diagnostico lexico (posicion, lexema y descripcion)."""
        panel = Panel(
            Text(diagnostic),
            title="Lexer",
            border_style="red",
            box=box.SIMPLE,
        )
        self.err_console.print(panel)

    def show_summary(self, lexical_errors: int) -> None:
        """Imprime el resumen final de errores detectados."""
        level = "success" if lexical_errors == 0 else "error"
        plural = "error" if lexical_errors == 1 else "errores"
        text = f"Total de errores lexicos detectados: {lexical_errors} {plural}"
        self.message(text, level=level, stderr=lexical_errors > 0)

    def create_argument_parser(self, **kwargs: Any) -> argparse.ArgumentParser:
        """Construye un ArgumentParser que renderiza ayuda y errores con Rich."""
        return _RichArgumentParser(self, **kwargs)


@dataclass
class BufferedReporter:
    console: "RichCompilerConsole"
    lexical_messages: list[tuple[str, str]] = field(default_factory=list)

    def extend(self, messages: Sequence[Mapping[str, str]]) -> None:
        for entry in messages:
            self.lexical_messages.append((entry["level"], entry["message"]))

    def flush(self) -> None:
        for level, message in self.lexical_messages:
            self.console.message(message, level=level, stderr=(level == "error"))
        self.lexical_messages.clear()
