"""
Lexer for the declaration language.

Converts raw definition text into a stream of tokens with source location
tracking. Whitespace and ``//`` / ``/* */`` comments are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ...errors import make_parse_error


class TokenType(Enum):
    """Token types in the declaration language."""

    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"

    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LANGLE = "<"
    RANGLE = ">"
    COLON = ":"
    COMMA = ","

    EOF = "end of input"


PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "<": TokenType.LANGLE,
    ">": TokenType.RANGLE,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
}

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}


@dataclass
class Token:
    """
    A single token.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """Converts declaration text into tokens."""

    def __init__(self, text: str, file: str | Path = "<string>"):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file name (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_trivia(self) -> None:
        """Skip whitespace and comments."""
        while True:
            current = self.current_char()
            if current is not None and current.isspace():
                self.advance()
            elif current == "/" and self.peek_char() == "/":
                while self.current_char() not in (None, "\n"):
                    self.advance()
            elif current == "/" and self.peek_char() == "*":
                self.skip_block_comment()
            else:
                return

    def skip_block_comment(self) -> None:
        start_line, start_col = self.line, self.column
        self.advance()
        self.advance()
        while not (self.current_char() == "*" and self.peek_char() == "/"):
            if self.current_char() is None:
                raise make_parse_error("Unterminated block comment", self.file, start_line, start_col)
            self.advance()
        self.advance()
        self.advance()

    def read_string(self) -> str:
        """Read a double-quoted string."""
        start_line, start_col = self.line, self.column
        self.advance()  # opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None:
                raise make_parse_error("Unterminated string literal", self.file, start_line, start_col)
            if current == '"':
                break
            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char is None:
                    raise make_parse_error("Unterminated string literal", self.file, start_line, start_col)
                if escape_char not in ESCAPES:
                    raise make_parse_error(f"Unknown escape sequence '\\{escape_char}'", self.file, self.line, self.column)
                chars.append(ESCAPES[escape_char])
            else:
                chars.append(current)
            self.advance()

        self.advance()  # closing quote
        return "".join(chars)

    def read_number(self) -> str:
        """Read an integer or decimal number with optional sign and exponent."""
        start_line, start_col = self.line, self.column
        chars = []
        if self.current_char() in ("-", "+"):
            chars.append(self.current_char())
            self.advance()

        digits = self._read_digits()
        if not digits:
            raise make_parse_error("Expected digits in number literal", self.file, start_line, start_col)
        chars.append(digits)

        if self.current_char() == "." and (self.peek_char() or "").isdigit():
            self.advance()
            chars.append(".")
            chars.append(self._read_digits())

        if self.current_char() in ("e", "E"):
            chars.append("e")
            self.advance()
            if self.current_char() in ("-", "+"):
                chars.append(self.current_char())
                self.advance()
            exponent = self._read_digits()
            if not exponent:
                raise make_parse_error("Expected exponent digits in number literal", self.file, self.line, self.column)
            chars.append(exponent)

        return "".join(chars)

    def _read_digits(self) -> str:
        chars = []
        current = self.current_char()
        while current is not None and (current.isdigit() or current == "_"):
            if current != "_":
                chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        chars = []
        current = self.current_char()
        while current is not None and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire input.

        Returns:
            List of tokens ending with an EOF token

        Raises:
            ParseError: On an unexpected character or malformed literal
        """
        while True:
            self.skip_trivia()
            current = self.current_char()
            line, column = self.line, self.column

            if current is None:
                self.tokens.append(Token(TokenType.EOF, "", line, column))
                return self.tokens

            if current == '"':
                self.tokens.append(Token(TokenType.STRING, self.read_string(), line, column))
            elif current.isdigit() or (current in ("-", "+") and (self.peek_char() or "").isdigit()):
                self.tokens.append(Token(TokenType.NUMBER, self.read_number(), line, column))
            elif current.isalpha() or current == "_":
                self.tokens.append(Token(TokenType.IDENTIFIER, self.read_identifier(), line, column))
            elif current in PUNCTUATION:
                self.advance()
                self.tokens.append(Token(PUNCTUATION[current], current, line, column))
            else:
                raise make_parse_error(f"Unexpected character {current!r}", self.file, line, column)


def tokenize(text: str, file: str | Path = "<string>") -> list[Token]:
    """
    Convenience function to tokenize declaration text.

    Args:
        text: Source text
        file: Source file name

    Returns:
        List of tokens
    """
    return Lexer(text, file).tokenize()
