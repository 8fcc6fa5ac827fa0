"""Infrastructure: Backtick Lua Template (BLT) compiler.

Concrete :class:`~bltc.core.protocols.TemplateCompiler`.  A BLT file is
literal text interleaved with backtick-delimited Lua:

* ``text`` — written out verbatim;
* ```code``` — Lua statements, emitted as-is;
* ```=expr``` — the value of a Lua expression, written out;
* ``````  (two backticks) — a literal backtick inside text.

Compiled output is a Lua chunk calling ``write`` for every piece of text
and every expression.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from bltc.exceptions import TemplateSyntaxError

# ``escaped backtick | `section` | unterminated backtick``
_SEGMENT = re.compile(r"``|`([^`]*)`|`")


class TokenKind(Enum):
    TEXT = "text"
    CODE = "code"
    EXPR = "expr"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

def _position(source: str, offset: int) -> tuple[int, int]:
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


def tokenize(source: str) -> list[Token]:
    """Split *source* into text, code and expression tokens.

    Adjacent text and escaped backticks are merged into one text token.

    Raises
    ------
    TemplateSyntaxError
        For an unterminated backtick section or an empty expression.
    """
    tokens: list[Token] = []
    text: list[str] = []
    text_start = 0
    cursor = 0

    def flush_text() -> None:
        if text:
            line, column = _position(source, text_start)
            tokens.append(Token(TokenKind.TEXT, "".join(text), line, column))
            text.clear()

    for match in _SEGMENT.finditer(source):
        if match.start() > cursor:
            if not text:
                text_start = cursor
            text.append(source[cursor:match.start()])
        cursor = match.end()

        if match.group(0) == "``":
            if not text:
                text_start = match.start()
            text.append("`")
            continue

        line, column = _position(source, match.start())
        body = match.group(1)
        if body is None:
            raise TemplateSyntaxError("Unterminated code section", line=line, column=column)

        flush_text()
        if body.startswith("="):
            expression = body[1:].strip()
            if not expression:
                raise TemplateSyntaxError("Empty expression", line=line, column=column)
            tokens.append(Token(TokenKind.EXPR, expression, line, column))
        else:
            tokens.append(Token(TokenKind.CODE, body, line, column))

    if cursor < len(source):
        if not text:
            text_start = cursor
        text.append(source[cursor:])
    flush_text()
    return tokens


# ---------------------------------------------------------------------------
# Code generation
# ---------------------------------------------------------------------------

def lua_long_string(text: str) -> str:
    """Quote *text* as a Lua long-bracket string literal.

    The bracket level is the lowest one whose closing bracket does not
    appear early in *text*.  Lua drops a newline directly after the
    opening bracket, so a leading newline is doubled.
    """
    level = 0
    while True:
        close = "]" + "=" * level + "]"
        if (text + close).find(close) == len(text):
            break
        level += 1
    opening = "[" + "=" * level + "["
    prefix = "\n" if text.startswith("\n") else ""
    return f"{opening}{prefix}{text}{close}"


class BltCompiler:
    """Compile BLT templates to Lua source."""

    output_extension: str = ".lua"

    def compile(self, source: str) -> str:
        lines: list[str] = []
        for token in tokenize(source):
            if token.kind is TokenKind.TEXT:
                lines.append(f"write {lua_long_string(token.text)}")
            elif token.kind is TokenKind.EXPR:
                lines.append(f"write({token.text})")
            else:
                code = token.text.strip()
                if code:
                    lines.append(code)
        return "".join(f"{line}\n" for line in lines)

    def debug(self, source: str) -> str:
        return "".join(
            f"{token.line}:{token.column} {token.kind.name} {token.text!r}\n"
            for token in tokenize(source)
        )
