"""Static vocabulary tokenizer: greedy longest match with raw-byte fallback.

Ids 0-255 that are not registered stand for the raw byte with that value, so
every byte string can be encoded. Build the vocabulary with add_token(), call
freeze(), then share the tokenizer freely between readers.
"""
from __future__ import annotations

import operator
from typing import Iterable, Sequence

from loguru import logger

from trie_tokenizer.errors import (
    CapacityExceededError,
    TokenizerError,
    TokenizerFrozenError,
    UnknownTokenIdError,
)
from trie_tokenizer.literal import MAX_TOKEN_LENGTH, parse_token_literal
from trie_tokenizer.trie import PrefixIndex

RAW_BYTE_IDS = 256


class Tokenizer:
    """Owns the prefix index and the id -> bytes reverse table."""

    def __init__(self, max_token_length: int | None = MAX_TOKEN_LENGTH, max_tokens: int | None = None):
        self.max_token_length = max_token_length
        self.max_tokens = max_tokens
        self.index = PrefixIndex()
        self.id2token: dict[int, bytes] = {}
        self.num_tokens = 0
        self.shadowed_ids: set[int] = set()
        self.frozen = False
        self.closed = False

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------
    def add_token(self, token_id: int, literal: str) -> None:
        """Parse a quoted vocabulary literal and register it under `token_id`.

        Raises:
            LiteralParseError: the literal is malformed; nothing is registered
            CapacityExceededError: token too long or id beyond `max_tokens`
            TokenizerFrozenError: the tokenizer was frozen
        """
        self.check_mutable()
        token = parse_token_literal(literal, self.max_token_length)
        self._register(token_id, token)

    def add_token_bytes(self, token_id: int, token: bytes) -> None:
        """Register raw token bytes under `token_id`."""
        self.check_mutable()
        if self.max_token_length is not None and len(token) > self.max_token_length:
            raise CapacityExceededError(
                f"Token of {len(token)} bytes exceeds max_token_length={self.max_token_length}"
            )
        self._register(token_id, bytes(token))

    def _register(self, token_id: int, token: bytes) -> None:
        if token_id < 0:
            raise TokenizerError(f"Token ids must be non-negative, got {token_id}")
        if self.max_tokens is not None and token_id >= self.max_tokens:
            raise CapacityExceededError(f"Token id {token_id} exceeds max_tokens={self.max_tokens}")
        if token_id < RAW_BYTE_IDS and token != bytes([token_id]):
            # decode() keeps treating this id as a raw byte
            logger.debug(f"Token id {token_id} ({token!r}) is shadowed by raw byte {token_id} on decode")
            self.shadowed_ids.add(token_id)
        else:
            self.shadowed_ids.discard(token_id)

        self.index.insert(token, token_id)
        self.id2token[token_id] = token
        self.num_tokens += 1

    def freeze(self) -> "Tokenizer":
        """Make the tokenizer read-only."""
        self.frozen = True
        return self

    def check_mutable(self) -> None:
        """Raise TokenizerFrozenError unless the vocabulary can still change."""
        if self.closed:
            raise TokenizerFrozenError("Tokenizer is closed")
        if self.frozen:
            raise TokenizerFrozenError("Tokenizer is frozen; vocabulary can no longer change")

    # -------------------------------------------------------------------------
    # Encode / decode
    # -------------------------------------------------------------------------
    def encode(self, text: bytes | str) -> list[int]:
        """Greedy longest-match encoding; unmatched bytes become their own id."""
        self._check_open()
        if isinstance(text, str):
            text = text.encode("utf-8")

        longest_match = self.index.longest_match
        ids: list[int] = []
        i = 0
        end = len(text)
        while i < end:
            value, matched = longest_match(text, i)
            if matched == 0:
                ids.append(text[i])
                i += 1
            else:
                ids.append(value)
                i += matched
        return ids

    def encode_batch(self, texts: Iterable[bytes | str]) -> list[list[int]]:
        return [self.encode(text) for text in texts]

    def decode(self, ids: Sequence[int]) -> bytes:
        """Concatenate the bytes of each id.

        Ids below 256 always decode to the raw byte, even when registered.

        Raises:
            UnknownTokenIdError: an id is neither a raw byte nor registered
        """
        self._check_open()
        id2token = self.id2token
        parts: list[bytes] = []
        for position, token_id in enumerate(ids):
            # accepts numpy or torch scalars, rejects floats
            token_id = operator.index(token_id)
            if 0 <= token_id < RAW_BYTE_IDS:
                parts.append(bytes((token_id,)))
                continue
            token = id2token.get(token_id)
            if token is None:
                raise UnknownTokenIdError(token_id, position)
            parts.append(token)
        return b"".join(parts)

    def decode_text(self, ids: Sequence[int], errors: str = "replace") -> str:
        return self.decode(ids).decode("utf-8", errors=errors)

    def _check_open(self) -> None:
        if self.closed:
            raise TokenizerError("Tokenizer is closed")

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------
    @property
    def vocab_size(self) -> int:
        if not self.id2token:
            return RAW_BYTE_IDS
        return max(RAW_BYTE_IDS, max(self.id2token) + 1)

    def id_to_token(self, token_id: int) -> bytes | None:
        """Bytes that decode() produces for `token_id`, or None if unknown."""
        token_id = operator.index(token_id)
        if 0 <= token_id < RAW_BYTE_IDS:
            return bytes((token_id,))
        return self.id2token.get(token_id)

    def token_to_id(self, token: bytes) -> int | None:
        return self.index.get(token)

    def __len__(self) -> int:
        return len(self.id2token)

    def __contains__(self, token_id: int) -> bool:
        return token_id in self.id2token

    def __repr__(self) -> str:
        return (
            f"Tokenizer(num_tokens={self.num_tokens}, vocab_size={self.vocab_size}, "
            f"nodes={len(self.index)}, frozen={self.frozen})"
        )

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------
    def close(self) -> None:
        """Release the index and reverse table."""
        self.index.clear()
        self.id2token = {}
        self.shadowed_ids = set()
        self.num_tokens = 0
        self.closed = True

    def __enter__(self) -> "Tokenizer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def create_tokenizer(max_token_length: int | None = MAX_TOKEN_LENGTH, max_tokens: int | None = None) -> Tokenizer:
    """Create an empty tokenizer."""
    return Tokenizer(max_token_length=max_token_length, max_tokens=max_tokens)


def destroy_tokenizer(tokenizer: Tokenizer) -> None:
    tokenizer.close()
