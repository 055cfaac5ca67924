"""Exception hierarchy for the tokenizer core and its loaders."""
from __future__ import annotations


class TokenizerError(Exception):
    """Base class for every error raised by trie_tokenizer."""


class LiteralParseError(TokenizerError, ValueError):
    """A token literal uses an unsupported escape or a malformed hex pair."""

    def __init__(self, message: str, literal: str | None = None):
        super().__init__(message)
        self.literal = literal


class CapacityExceededError(TokenizerError):
    """A token is longer than the length limit, or an id is past the table capacity."""


class MalformedVocabularyLineError(TokenizerError, ValueError):
    """A vocabulary line does not have the `id token_literal length` shape."""

    def __init__(self, message: str, line_number: int | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class UnknownTokenIdError(TokenizerError, KeyError):
    """decode() met an id that is neither a raw byte nor a registered token."""

    def __init__(self, token_id: int, position: int):
        super().__init__(f"Unknown token id {token_id} at position {position}")
        self.token_id = token_id
        self.position = position

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class TokenizerFrozenError(TokenizerError):
    """The tokenizer was frozen (or closed) and can no longer be mutated."""


__all__ = [
    "TokenizerError",
    "LiteralParseError",
    "CapacityExceededError",
    "MalformedVocabularyLineError",
    "UnknownTokenIdError",
    "TokenizerFrozenError",
]
