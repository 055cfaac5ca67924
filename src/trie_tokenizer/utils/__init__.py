"""Shared utilities."""
from trie_tokenizer.utils.logging import setup_logging

__all__ = ["setup_logging"]
