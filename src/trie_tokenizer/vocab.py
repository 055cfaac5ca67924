"""Vocabulary file loading.

Each line reads `id token_literal length`, e.g.

    257 b'\\xe4\\xb8' 2
    33 ' the' 4

The literal may itself contain spaces, so the id is the first field, the
length the last, and the literal is whatever sits between them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from loguru import logger
from tqdm import tqdm

from trie_tokenizer.errors import MalformedVocabularyLineError, TokenizerError, TokenizerFrozenError
from trie_tokenizer.literal import MAX_TOKEN_LENGTH
from trie_tokenizer.tokenizer import Tokenizer


@dataclass
class VocabEntry:
    """One parsed vocabulary line."""
    token_id: int
    literal: str
    length: int


@dataclass
class LoadReport:
    """Outcome of a vocabulary load."""
    loaded: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.loaded + self.skipped


def parse_vocab_line(line: str, line_number: int | None = None) -> VocabEntry:
    """Split a vocabulary line into id, literal and declared length."""
    stripped = line.strip()
    fields = stripped.split(None, 1)
    if len(fields) == 2:
        fields = [fields[0], *fields[1].rsplit(None, 1)]
    if len(fields) < 3:
        raise MalformedVocabularyLineError(f"Invalid line format: {stripped!r}", line_number)

    head, literal, tail = fields
    try:
        token_id = int(head)
        length = int(tail)
    except ValueError:
        raise MalformedVocabularyLineError(f"Non-integer id or length: {stripped!r}", line_number) from None
    return VocabEntry(token_id=token_id, literal=literal, length=length)


def iter_vocab_entries(path: str | Path) -> Iterator[tuple[int, VocabEntry | MalformedVocabularyLineError]]:
    """Yield (line_number, entry or error) for every non-blank line."""
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                yield line_number, parse_vocab_line(line, line_number)
            except MalformedVocabularyLineError as e:
                yield line_number, e


def load_vocab(tokenizer: Tokenizer, path: str | Path, strict: bool = False, freeze: bool = True) -> LoadReport:
    """Register every entry of a vocabulary file with `tokenizer`.

    Args:
        tokenizer: Tokenizer to fill
        path: Vocabulary file
        strict: Raise on the first bad line instead of skipping it
        freeze: Freeze the tokenizer once loading is done

    Raises:
        TokenizerFrozenError: the tokenizer is frozen or closed

    Returns:
        LoadReport with loaded/skipped counts and the skipped-line messages
    """
    tokenizer.check_mutable()
    report = LoadReport()
    entries = tqdm(iter_vocab_entries(path), desc="loading vocab", unit=" lines", dynamic_ncols=True, leave=False, disable=None)
    for line_number, item in entries:
        try:
            if isinstance(item, MalformedVocabularyLineError):
                raise item
            tokenizer.add_token(item.token_id, item.literal)
        except TokenizerFrozenError:
            raise
        except TokenizerError as e:
            if strict:
                raise
            message = str(e) if isinstance(e, MalformedVocabularyLineError) else f"line {line_number}: {e}"
            logger.warning(f"Skipping vocabulary entry - {message}")
            report.skipped += 1
            report.errors.append(message)
            continue

        report.loaded += 1
        stored = len(tokenizer.id2token[item.token_id])
        if stored != item.length:
            logger.debug(f"line {line_number}: declared length {item.length} != decoded length {stored}")

    if tokenizer.shadowed_ids:
        logger.warning(
            f"{len(tokenizer.shadowed_ids)} token ids below 256 decode as raw bytes, not as their "
            f"registered tokens (e.g. id {min(tokenizer.shadowed_ids)})"
        )
    if freeze:
        tokenizer.freeze()
    logger.info(f"Loaded {report.loaded} tokens from {path} ({report.skipped} skipped)")
    return report


def load_tokenizer(
    path: str | Path,
    max_token_length: int | None = MAX_TOKEN_LENGTH,
    max_tokens: int | None = None,
    strict: bool = False,
) -> Tokenizer:
    """Create a tokenizer and fill it from a vocabulary file."""
    tokenizer = Tokenizer(max_token_length=max_token_length, max_tokens=max_tokens)
    load_vocab(tokenizer, path, strict=strict)
    return tokenizer
