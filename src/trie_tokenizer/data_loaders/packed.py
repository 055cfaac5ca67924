"""Packing tokenized text into fixed-length training windows.

This module handles:
- Reading plain text files
- Encoding them with a Tokenizer
- Serving (input_ids, labels) windows shifted by one token
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import torch
from torch import Tensor
from torch.utils.data import DataLoader, Dataset
from loguru import logger
from tqdm import tqdm

from trie_tokenizer.tokenizer import Tokenizer


class PackedTokenDataset(Dataset):
    """Concatenated token stream cut into windows of seq_len + 1 at stride seq_len."""
    
    def __init__(self, texts: Sequence[str | bytes], tokenizer: Tokenizer, seq_len: int, separator_id: int | None = None):
        if seq_len <= 0:
            raise ValueError(f"seq_len must be positive, got {seq_len}")
        self.seq_len = seq_len
        
        toks: list[int] = []
        for text in tqdm(texts, desc="tokenizing", dynamic_ncols=True, leave=False, disable=None):
            toks.extend(tokenizer.encode(text))
            if separator_id is not None:
                toks.append(separator_id)
        
        self.tokens = torch.tensor(toks, dtype=torch.long)
        self.starts = list(range(0, len(self.tokens) - seq_len, seq_len))
        logger.info(f"Total tokens: {len(self.tokens):,}  ({len(self.starts)} windows, seq_len={seq_len})")
    
    def __len__(self) -> int:
        return len(self.starts)
    
    def __getitem__(self, idx: int) -> dict[str, Tensor]:
        s = self.starts[idx]
        chunk = self.tokens[s : s + self.seq_len + 1]
        return {"input_ids": chunk[:-1], "labels": chunk[1:]}


def read_texts(paths: Sequence[str | Path]) -> list[bytes]:
    """Read each file as raw bytes."""
    return [Path(p).read_bytes() for p in paths]


def make_loader(dataset: PackedTokenDataset, batch_size: int, shuffle: bool = False, num_workers: int = 0) -> DataLoader:
    return DataLoader(
        dataset,
        batch_size=batch_size,
        shuffle=shuffle,
        num_workers=num_workers,
        drop_last=True,
    )
