"""Data loaders."""
from trie_tokenizer.data_loaders.packed import PackedTokenDataset, make_loader, read_texts

__all__ = ["PackedTokenDataset", "make_loader", "read_texts"]
