from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from omegaconf import DictConfig

from trie_tokenizer.config import load_config
from trie_tokenizer.data_loaders import PackedTokenDataset, make_loader, read_texts
from trie_tokenizer.errors import TokenizerError, UnknownTokenIdError
from trie_tokenizer.tokenizer import Tokenizer
from trie_tokenizer.utils.logging import setup_logging
from trie_tokenizer.vocab import LoadReport, load_vocab

app = typer.Typer(help="Trie tokenizer: greedy longest-match encoding over a static vocabulary")

DEMO_TEXT = (
    "Q: System with two quadratic equations Respected All.\n"
    "I am unable to find out what's so wrong in the following. Please help me.\n"
    "It is given that $t$ is a common root of the following two equations given by\n"
    "$$x^2-bx+d=0$$ and $$ax^2-cx+e=0$$ where $a,b,c,d,e$ are real numbers.\n"
)

# -----------------------------------------------------------------------------
# Shared options
# -----------------------------------------------------------------------------
VocabOpt = typer.Option(None, "--vocab", help="Vocabulary file (default: vocab.path from config)")
ConfigOpt = typer.Option(None, "--config", help="YAML config file merged over the defaults")
SetOpt = typer.Option(None, "--set", help="Config override, e.g. --set tokenizer.max_token_length=512")


def _setup(vocab: Optional[Path], config: Optional[Path], overrides: Optional[List[str]]) -> tuple[DictConfig, Tokenizer, LoadReport]:
    cfg = load_config(config, overrides or [])
    setup_logging(cfg.logging.dir, level=cfg.logging.level)

    tokenizer = Tokenizer(
        max_token_length=cfg.tokenizer.max_token_length,
        max_tokens=cfg.tokenizer.max_tokens,
    )
    vocab_path = vocab if vocab is not None else Path(cfg.vocab.path)
    if not vocab_path.is_file():
        logger.error(f"Failed to open vocabulary file {vocab_path}")
        raise typer.Exit(code=1)
    try:
        report = load_vocab(tokenizer, vocab_path, strict=cfg.vocab.strict)
    except TokenizerError as e:
        logger.error(f"Failed to load vocabulary {vocab_path}: {e}")
        raise typer.Exit(code=1)
    return cfg, tokenizer, report


@app.command()
def encode(
    text: Optional[str] = typer.Argument(None, help="Text to encode"),
    file: Optional[Path] = typer.Option(None, "--file", help="Encode the raw bytes of this file instead"),
    vocab: Optional[Path] = VocabOpt,
    config: Optional[Path] = ConfigOpt,
    overrides: Optional[List[str]] = SetOpt,
):
    """Print the token ids of TEXT (or of --file)."""
    if (text is None) == (file is None):
        raise typer.BadParameter("Pass exactly one of TEXT or --file")
    _, tokenizer, _ = _setup(vocab, config, overrides)
    data = file.read_bytes() if file is not None else text
    typer.echo(" ".join(str(i) for i in tokenizer.encode(data)))


@app.command()
def decode(
    ids: List[int] = typer.Argument(..., help="Token ids to decode"),
    vocab: Optional[Path] = VocabOpt,
    config: Optional[Path] = ConfigOpt,
    overrides: Optional[List[str]] = SetOpt,
):
    """Print the text for a sequence of token ids."""
    _, tokenizer, _ = _setup(vocab, config, overrides)
    try:
        data = tokenizer.decode(ids)
    except UnknownTokenIdError as e:
        logger.error(str(e))
        raise typer.Exit(code=1)
    typer.echo(data.decode("utf-8", errors="replace"))


@app.command()
def stats(
    vocab: Optional[Path] = VocabOpt,
    config: Optional[Path] = ConfigOpt,
    overrides: Optional[List[str]] = SetOpt,
):
    """Show vocabulary load statistics."""
    _, tokenizer, report = _setup(vocab, config, overrides)
    typer.echo(f"loaded:     {report.loaded}")
    typer.echo(f"skipped:    {report.skipped}")
    typer.echo(f"vocab_size: {tokenizer.vocab_size}")
    typer.echo(f"trie_nodes: {len(tokenizer.index)}")


@app.command()
def demo(
    vocab: Optional[Path] = VocabOpt,
    config: Optional[Path] = ConfigOpt,
    overrides: Optional[List[str]] = SetOpt,
):
    """Load the vocabulary, encode a sample text and decode it back."""
    _, tokenizer, _ = _setup(vocab, config, overrides)
    typer.echo(f"Loaded {tokenizer.num_tokens} tokens")

    encoded = tokenizer.encode(DEMO_TEXT)
    typer.echo("Encoded tokens: " + " ".join(str(i) for i in encoded))
    typer.echo("Decoded text: " + tokenizer.decode_text(encoded))
    tokenizer.close()


@app.command()
def pack(
    files: List[Path] = typer.Argument(..., help="Text files to tokenize and pack"),
    vocab: Optional[Path] = VocabOpt,
    config: Optional[Path] = ConfigOpt,
    overrides: Optional[List[str]] = SetOpt,
):
    """Pack FILES into training windows using data.seq_len and data.batch_size."""
    cfg, tokenizer, _ = _setup(vocab, config, overrides)
    dataset = PackedTokenDataset(read_texts(files), tokenizer, seq_len=cfg.data.seq_len)
    loader = make_loader(dataset, batch_size=cfg.data.batch_size, num_workers=cfg.data.num_workers)
    typer.echo(f"tokens:  {len(dataset.tokens)}")
    typer.echo(f"windows: {len(dataset)}")
    typer.echo(f"batches: {len(loader)}")


if __name__ == "__main__":
    app()
