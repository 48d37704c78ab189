"""
Declaration language parser that builds the declaration tree.

Phase 1 of the pipeline: parse definition text into ``ModelFile`` nodes
without resolving enum references or expanding placeholders.

Grammar (RON-like, trailing commas allowed)::

    file        := declaration | "[" declaration,* "]"
                 | "Single" "(" declaration ")" | "Multiple" "(" "[" declaration,* "]" ")"
    declaration := ("Enum" | "Property") ("(" fields ")" | "{" fields "}")
    type        := "bool" | "u32" | "f64" | "string"
                 | "slice" "<" type ">" | "Slice" "(" type ")"
                 | "custom" "(" (identifier | string) ")"
    mapping     := "{" ((string | "[" string,* "]") ":" literal),* "}"
    literal     := string | number | "true" | "false" | "[" literal,* "]"
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from ...errors import ErrorContext, TypeMismatchError, make_parse_error
from .lexer import Token, TokenType, tokenize
from .nodes import EnumModel, MappingEntry, Model, ModelFile, PropertyModel, Type, TypeKind
from .values import convert_literal

PRIMITIVE_TYPES = {
    "bool": TypeKind.BOOL,
    "u32": TypeKind.U32,
    "f64": TypeKind.F64,
    "string": TypeKind.STRING,
}

CLOSING = {TokenType.LPAREN: TokenType.RPAREN, TokenType.LBRACE: TokenType.RBRACE}


class ModelParser:
    """Parses declaration text into a ModelFile."""

    def __init__(self, text: str, file: str | Path = "<string>"):
        """
        Initialize the parser.

        Args:
            text: Definition text
            file: Source file name (for error messages)
        """
        self.file = file
        self.tokens = tokenize(text, file)
        self.pos = 0

    def parse(self) -> ModelFile:
        """
        Parse the whole input.

        Returns:
            ModelFile holding one or many declarations

        Raises:
            ParseError: On malformed syntax or an unknown type tag
            TypeMismatchError: On a literal incompatible with its declared type
        """
        token = self.current()
        if token.type == TokenType.LBRACKET:
            model_file = ModelFile(models=self._parse_declaration_list(), is_multiple=True)
        elif self._is_identifier(token, "single"):
            self.advance()
            self.expect(TokenType.LPAREN)
            model_file = ModelFile(models=[self._parse_declaration()])
            self.expect(TokenType.RPAREN)
        elif self._is_identifier(token, "multiple"):
            self.advance()
            self.expect(TokenType.LPAREN)
            model_file = ModelFile(models=self._parse_declaration_list(), is_multiple=True)
            self.expect(TokenType.RPAREN)
        else:
            model_file = ModelFile(models=[self._parse_declaration()])

        self.expect(TokenType.EOF)
        return model_file

    # Token helpers

    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType) -> Token:
        token = self.current()
        if token.type != token_type:
            raise self._error(f"Expected '{token_type.value}', found {self._describe(token)}", token)
        return self.advance()

    def _accept(self, token_type: TokenType) -> bool:
        if self.current().type == token_type:
            self.advance()
            return True
        return False

    def _is_identifier(self, token: Token, name: str) -> bool:
        return token.type == TokenType.IDENTIFIER and token.value.lower() == name

    def _describe(self, token: Token) -> str:
        if token.type == TokenType.EOF:
            return "end of input"
        return repr(token.value)

    def _error(self, message: str, token: Token):
        return make_parse_error(message, self.file, token.line, token.column)

    def _parse_sequence(self, close: TokenType, parse_item: Callable[[], Any]) -> list[Any]:
        """Parse comma separated items up to ``close`` (trailing comma allowed)."""
        items = []
        while not self._accept(close):
            items.append(parse_item())
            if not self._accept(TokenType.COMMA):
                self.expect(close)
                break
        return items

    # Declarations

    def _parse_declaration_list(self) -> list[Model]:
        self.expect(TokenType.LBRACKET)
        return self._parse_sequence(TokenType.RBRACKET, self._parse_declaration)

    def _parse_declaration(self) -> Model:
        token = self.expect(TokenType.IDENTIFIER)
        tag = token.value.lower()
        if tag == "enum":
            parsers = {"name": self._parse_string, "variants": self._parse_string_list}
        elif tag == "property":
            parsers = {
                "on": self._parse_string,
                "name": self._parse_string,
                "type": self._parse_type,
                "mapping": self._parse_mapping,
            }
        else:
            raise self._error(f"Unknown declaration '{token.value}', expected 'Enum' or 'Property'", token)

        fields = self._parse_fields(parsers, token)
        if tag == "enum":
            return EnumModel(line=token.line, name=fields["name"], variants=fields["variants"])

        model = PropertyModel(
            line=token.line,
            on=fields["on"],
            name=fields["name"],
            type=fields["type"],
            mapping=[entry for entry, _ in fields["mapping"]],
        )
        self._check_mapping_types(model, fields["mapping"])
        return model

    def _parse_fields(self, parsers: dict[str, Callable[[], Any]], decl_token: Token) -> dict[str, Any]:
        open_token = self.current()
        if open_token.type not in CLOSING:
            raise self._error(f"Expected '(' or '{{' after '{decl_token.value}', found {self._describe(open_token)}", open_token)
        self.advance()

        fields: dict[str, Any] = {}

        def parse_field() -> None:
            name_token = self.expect(TokenType.IDENTIFIER)
            if name_token.value not in parsers:
                raise self._error(f"Unknown field '{name_token.value}' in '{decl_token.value}'", name_token)
            if name_token.value in fields:
                raise self._error(f"Duplicate field '{name_token.value}'", name_token)
            self.expect(TokenType.COLON)
            fields[name_token.value] = parsers[name_token.value]()

        self._parse_sequence(CLOSING[open_token.type], parse_field)

        missing = [name for name in parsers if name not in fields]
        if missing:
            raise self._error(f"Missing field(s) {', '.join(missing)} in '{decl_token.value}'", decl_token)
        return fields

    # Field values

    def _parse_string(self) -> str:
        return self.expect(TokenType.STRING).value

    def _parse_string_list(self) -> list[str]:
        self.expect(TokenType.LBRACKET)
        return self._parse_sequence(TokenType.RBRACKET, self._parse_string)

    def _parse_type(self) -> Type:
        token = self.expect(TokenType.IDENTIFIER)
        tag = token.value.lower()

        if tag in PRIMITIVE_TYPES:
            return Type(kind=PRIMITIVE_TYPES[tag])

        if tag == "slice":
            if self._accept(TokenType.LANGLE):
                item = self._parse_type()
                self.expect(TokenType.RANGLE)
            else:
                self.expect(TokenType.LPAREN)
                item = self._parse_type()
                self.expect(TokenType.RPAREN)
            return Type.slice_of(item)

        if tag == "custom":
            self.expect(TokenType.LPAREN)
            name_token = self.current()
            if name_token.type not in (TokenType.IDENTIFIER, TokenType.STRING):
                raise self._error(f"Expected enum name in custom type, found {self._describe(name_token)}", name_token)
            self.advance()
            self.expect(TokenType.RPAREN)
            return Type.custom(name_token.value)

        raise self._error(f"Unknown type '{token.value}'", token)

    def _parse_mapping(self) -> list[tuple[MappingEntry, Token]]:
        self.expect(TokenType.LBRACE)

        def parse_entry() -> tuple[MappingEntry, Token]:
            if self.current().type == TokenType.LBRACKET:
                keys = self._parse_string_list()
            else:
                keys = [self._parse_string()]
            self.expect(TokenType.COLON)
            literal_token = self.current()
            return MappingEntry(keys=keys, literal=self._parse_literal()), literal_token

        return self._parse_sequence(TokenType.RBRACE, parse_entry)

    def _parse_literal(self) -> Any:
        token = self.current()
        if token.type == TokenType.STRING:
            self.advance()
            return token.value
        if token.type == TokenType.NUMBER:
            self.advance()
            if any(c in token.value for c in ".eE"):
                return float(token.value)
            return int(token.value)
        if self._is_identifier(token, "true") or self._is_identifier(token, "false"):
            self.advance()
            return token.value.lower() == "true"
        if token.type == TokenType.LBRACKET:
            self.advance()
            return self._parse_sequence(TokenType.RBRACKET, self._parse_literal)
        raise self._error(f"Expected a literal, found {self._describe(token)}", token)

    def _check_mapping_types(self, model: PropertyModel, entries: list[tuple[MappingEntry, Token]]) -> None:
        for entry, token in entries:
            try:
                convert_literal(entry.literal, model.type)
            except TypeMismatchError as e:
                e.context = ErrorContext(file=self.file, line=token.line, column=token.column)
                raise e.with_context(f"invalid mapping value in property `{model.name}`")


def parse(text: str, file: str | Path = "<string>") -> ModelFile:
    """
    Parse definition text.

    Args:
        text: Definition text
        file: Source file name used in error messages

    Returns:
        The parsed ModelFile
    """
    return ModelParser(text, file).parse()
