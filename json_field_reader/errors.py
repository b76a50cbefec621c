from __future__ import annotations


class FieldReaderError(Exception):
    """Base class for errors raised by json_field_reader."""


class ExtractError(FieldReaderError):
    """A query expression could not produce a value from a document."""

    def __init__(self, message: str, expression: str = ''):
        super().__init__(message)
        self.expression = expression


class QuerySyntaxError(ExtractError):
    pass


class NoMatchError(ExtractError):
    pass


class DocumentError(ExtractError):
    pass


class RegistrationError(FieldReaderError, ValueError):
    """Bad field registration (empty name, empty expression, bad NAME=EXPR)."""
