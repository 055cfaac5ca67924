"""Static vocabulary tokenizer built on a byte-level prefix index."""
from trie_tokenizer.errors import (
    CapacityExceededError,
    LiteralParseError,
    MalformedVocabularyLineError,
    TokenizerError,
    TokenizerFrozenError,
    UnknownTokenIdError,
)
from trie_tokenizer.literal import MAX_TOKEN_LENGTH, parse_token_literal
from trie_tokenizer.tokenizer import Tokenizer, create_tokenizer, destroy_tokenizer
from trie_tokenizer.trie import PrefixIndex
from trie_tokenizer.vocab import LoadReport, VocabEntry, load_tokenizer, load_vocab, parse_vocab_line

__all__ = [
    "Tokenizer",
    "PrefixIndex",
    "create_tokenizer",
    "destroy_tokenizer",
    "parse_token_literal",
    "MAX_TOKEN_LENGTH",
    "VocabEntry",
    "LoadReport",
    "parse_vocab_line",
    "load_vocab",
    "load_tokenizer",
    "TokenizerError",
    "LiteralParseError",
    "CapacityExceededError",
    "MalformedVocabularyLineError",
    "UnknownTokenIdError",
    "TokenizerFrozenError",
]
