"""Errors raised by the lint pipeline."""

from __future__ import annotations

from enum import Enum


class ParseErrorKind(str, Enum):
    malformed_syntax = "MalformedSyntax"
    empty_document = "EmptyDocument"
    recursive_alias = "RecursiveAlias"
    alias_expansion_limit = "AliasExpansionLimit"


class ParseError(Exception):
    """The document could not be loaded; no findings are produced."""

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        kind: ParseErrorKind = ParseErrorKind.malformed_syntax,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.kind = kind

    @property
    def location(self) -> str:
        return f"line {self.line}, column {self.column}"

    def __str__(self) -> str:
        return f"{self.kind.value} at {self.location}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }
