"""Fachada de alto nivel para el front end lexico de Ruffle."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .lexer import LexerConfig, RuffleLexer, SlicedToken, format_stream


def _token_record(token: SlicedToken) -> Dict[str, Any]:
    row, col = token.position()
    return {
        "row": row,
        "col": col,
        "start": token.span.start,
        "end": token.span.end,
        "type": token.token.type,
        "value": token.token.value,
        "text": token.slice(),
        "display": str(token),
    }


def _safe_json_dump(obj: Any) -> str:
    try:
        return json.dumps(obj, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return json.dumps(str(obj), ensure_ascii=False)


@dataclass
class TokenizationResult:
    ok: bool
    tokens: List[Dict[str, Any]]
    tokens_json: str
    stream: str
    lexical_errors: int
    diagnostics: List[str]
    lexical_messages: List[Dict[str, str]]
    source_path: Optional[str]


class CompilerFacade:
    """Punto de entrada para tokenizar codigo Ruffle desde el CLI u otros adaptadores."""

    def __init__(
        self,
        project_root: Path | str | None = None,
        config: LexerConfig | None = None,
    ) -> None:
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.config = config or LexerConfig()

    def tokenize(self, code: str, path: str | Path | None = None) -> TokenizationResult:
        lexical_messages: List[Dict[str, str]] = []

        def _lex_reporter(level: str, message: str) -> None:
            lexical_messages.append({"level": level, "message": message})

        lexer = RuffleLexer(config=self.config, reporter=_lex_reporter)
        results = lexer.tokenize(code)

        tokens = [result for result in results if result.ok]
        diagnostics = [str(result) for result in results if not result.ok]
        records = [_token_record(token) for token in tokens]

        return TokenizationResult(
            ok=lexer.error_count == 0,
            tokens=records,
            tokens_json=_safe_json_dump(records),
            stream=format_stream(tokens),
            lexical_errors=lexer.error_count,
            diagnostics=diagnostics,
            lexical_messages=lexical_messages,
            source_path=str(path) if path is not None else None,
        )

    def tokenize_file(self, path: str | Path) -> TokenizationResult:
        target = Path(path).expanduser()
        if not target.is_absolute():
            target = self.project_root / target
        code = target.read_text(encoding="utf-8")
        return self.tokenize(code, path=target)
