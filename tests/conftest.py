"""Pytest fixtures for all tests.

Vocabularies are tiny and written to tmp_path so tests stay hermetic.
"""
import sys

import pytest
from loguru import logger

from trie_tokenizer import Tokenizer


VOCAB_LINES = [
    "300 'ab' 2",
    "301 'abc' 3",
    "302 ' the' 4",
    "303 b'\\xe4\\xb8\\xad' 3",
    "304 '\\n\\n' 2",
    "305 \"it's\" 4",
]


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo any sinks a test (or the CLI) installed."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def tokenizer():
    """Tokenizer with a handful of multi-byte tokens, ids >= 256."""
    tok = Tokenizer()
    tok.add_token(300, "'ab'")
    tok.add_token(301, "'abc'")
    tok.add_token(302, "' the'")
    tok.add_token(303, "b'\\xe4\\xb8\\xad'")
    return tok


@pytest.fixture
def vocab_file(tmp_path):
    """Well-formed vocabulary file."""
    path = tmp_path / "vocab.txt"
    path.write_text("\n".join(VOCAB_LINES) + "\n", encoding="utf-8")
    return path
