from textwrap import dedent

import pytest

from ruffle.lexer import RuffleLexer, Span, Token, demo, lex_source


@pytest.fixture()
def lexer():
    return RuffleLexer()


def token_pairs(results):
    return [(r.token.type, r.token.value) for r in results]


def test_lex_valid_tokens():
    results = lex_source("let x = 42; let y = 3.14; return x + y;")

    assert len(results) == 15
    assert all(r.ok for r in results)
    assert [r.token.type for r in results] == [
        "LET", "IDENTIFIER", "EQ", "INTEGER", "SEMI",
        "LET", "IDENTIFIER", "EQ", "FLOAT", "SEMI",
        "RETURN", "IDENTIFIER", "PLUS", "IDENTIFIER", "SEMI",
    ]
    assert results[8].token.value == pytest.approx(3.14)


def test_keywords_and_identifiers():
    results = lex_source("fn foo() { let bar = 42; }")

    assert token_pairs(results) == [
        ("FN", None),
        ("IDENTIFIER", "foo"),
        ("LPAREN", None),
        ("RPAREN", None),
        ("LBRACE", None),
        ("LET", None),
        ("IDENTIFIER", "bar"),
        ("EQ", None),
        ("INTEGER", 42),
        ("SEMI", None),
        ("RBRACE", None),
    ]


def test_nested_expressions():
    results = lex_source("let result = (1 + 2) * (3 - 4);")

    assert [r.token.type for r in results] == [
        "LET", "IDENTIFIER", "EQ",
        "LPAREN", "INTEGER", "PLUS", "INTEGER", "RPAREN",
        "STAR",
        "LPAREN", "INTEGER", "MINUS", "INTEGER", "RPAREN",
        "SEMI",
    ]


def test_string_assignment():
    results = lex_source('let greeting = "Hello, World!";')

    assert token_pairs(results) == [
        ("LET", None),
        ("IDENTIFIER", "greeting"),
        ("EQ", None),
        ("STRING", "Hello, World!"),
        ("SEMI", None),
    ]


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("===", ["EQ_EQ_EQ"]),
        ("!==", ["NEE"]),
        ("== =", ["EQ_EQ", "EQ"]),
        ("====", ["EQ_EQ_EQ", "EQ"]),
        ("!= =", ["NE", "EQ"]),
        (":::", ["COLON_COLON", "COLON"]),
        ("=>=", ["EQ_ARROW", "EQ"]),
        ("->>", ["STRAIGHT_ARROW", "GREATER"]),
        ("<==", ["LESS_EQ", "EQ"]),
        ("&&&", ["AND_AND", "NON_ASCII_CHARACTER"]),
    ],
)
def test_longest_symbol_wins(source, expected):
    types = [r.token.type if r.ok else r.error.kind for r in lex_source(source)]
    assert types == expected


def test_keyword_prefix_is_an_identifier():
    assert token_pairs(lex_source("selfish")) == [("IDENTIFIER", "selfish")]
    assert token_pairs(lex_source("letter fnord iffy")) == [
        ("IDENTIFIER", "letter"),
        ("IDENTIFIER", "fnord"),
        ("IDENTIFIER", "iffy"),
    ]


def test_float_needs_digits_on_both_sides():
    assert token_pairs(lex_source("1.")) == [("INTEGER", 1), ("PERIOD", None)]
    assert token_pairs(lex_source(".5")) == [("PERIOD", None), ("INTEGER", 5)]


def test_member_access_after_float():
    results = lex_source("1.5.2")
    assert [r.token.type for r in results] == ["FLOAT", "PERIOD", "INTEGER"]


def test_digits_followed_by_letters_split():
    assert token_pairs(lex_source("12abc")) == [("INTEGER", 12), ("IDENTIFIER", "abc")]


def test_whitespace_and_comments_do_not_change_tokens():
    compact = lex_source("let x=1;")
    spaced = lex_source("  let   x = 1 ;  // trailing\n")

    assert [r.token for r in compact] == [r.token for r in spaced]


def test_comments_skipped():
    source = dedent(
        """
        // This is a single-line comment
        let x = 10; /* bloque
           de comentario */ x += 1;
        """
    )
    assert [r.token.type for r in lex_source(source)] == [
        "LET", "IDENTIFIER", "EQ", "INTEGER", "SEMI",
        "IDENTIFIER", "PLUS_EQ", "INTEGER", "SEMI",
    ]


def test_block_comments_do_not_nest():
    results = lex_source("/* a /* b */ c */")
    assert [r.token.type for r in results] == ["IDENTIFIER", "STAR", "SLASH"]


def test_unterminated_block_comment_swallows_the_rest():
    results = lex_source("let x; /* sin cierre let y = 2;")
    assert [(r.token, r.span) for r in results] == [
        (r.token, r.span) for r in lex_source("let x;")
    ]


def test_slash_is_not_a_comment():
    results = lex_source("a / b /= c")
    assert [r.token.type for r in results] == [
        "IDENTIFIER", "SLASH", "IDENTIFIER", "SLASH_EQ", "IDENTIFIER",
    ]


def test_form_feed_and_tabs_are_whitespace():
    assert [r.token.type for r in lex_source("\tlet\f x\n")] == ["LET", "IDENTIFIER"]


@pytest.mark.parametrize("source", ["", "   \n\t   ", "// solo comentario", "/* */"])
def test_empty_or_blank_source(source):
    assert lex_source(source) == []


def test_spans_slice_back_to_lexemes():
    source = 'fn main() { let s = "hi"; s += 3.5 === 7; } // fin'
    results = lex_source(source)

    assert [r.slice() for r in results] == [
        "fn", "main", "(", ")", "{", "let", "s", "=", '"hi"', ";",
        "s", "+=", "3.5", "===", "7", ";", "}",
    ]
    for result in results:
        assert 0 <= result.span.start < result.span.end <= len(source)
        assert source[result.span.start:result.span.end] == result.slice()
    for previous, current in zip(results, results[1:]):
        assert previous.span.end <= current.span.start


def test_tokens_reference_the_caller_source():
    source = "let x = 1;"
    for result in lex_source(source):
        assert result.source is source


def test_span_values():
    results = lex_source("let  abc")
    assert results[0].span == Span(0, 3)
    assert results[1].span == Span(5, 8)


def test_tokenize_is_restartable(lexer):
    source = "let x = @; y"
    first = lexer.tokenize(source)
    second = lexer.tokenize(source)
    assert first == second
    assert lexer.error_count == 1


def test_interleaved_iteration_keeps_independent_positions(lexer):
    left = lexer.iter_tokens("a b")
    right = lexer.iter_tokens("c d")

    assert next(left).token == Token("IDENTIFIER", "a")
    assert next(right).token == Token("IDENTIFIER", "c")
    assert next(left).token == Token("IDENTIFIER", "b")
    assert next(right).token == Token("IDENTIFIER", "d")


def test_print_tokens(lexer, capsys):
    lexer.print_tokens('let s = "x";')
    out = capsys.readouterr().out
    assert out.splitlines() == ["let", "ident(s)", "=", 'str("x")', ";"]


def test_demo_lists_positions_and_kinds(capsys):
    demo("let x\n  @")
    lines = capsys.readouterr().out.splitlines()

    assert lines[0].startswith("001:001: LET")
    assert lines[1].startswith("001:005: IDENTIFIER") and lines[1].endswith("'x'")
    assert lines[2].startswith("002:003: NON_ASCII_CHARACTER")


def test_lex_source_counts_errors_per_call():
    from ruffle.lexer.core import _default_lexer

    lex_source("@")
    lex_source("let # = $;")
    assert _default_lexer().error_count == 2
    lex_source("let x = 1;")
    assert _default_lexer().error_count == 0
