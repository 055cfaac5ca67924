"""Configuration loading.

Defaults live in conf/default.yaml next to this module. They are merged with
an optional YAML file and then with `key=value` dotlist overrides:

    cfg = load_config("my.yaml", ["tokenizer.max_token_length=512"])
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()  # Load TRIE_TOKENIZER_VOCAB

DEFAULT_CONFIG_PATH = Path(__file__).parent / "conf" / "default.yaml"


def load_config(path: str | Path | None = None, overrides: Sequence[str] = ()) -> DictConfig:
    """Build the effective config: defaults <- YAML file <- dotlist overrides."""
    cfg = OmegaConf.load(DEFAULT_CONFIG_PATH)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    OmegaConf.resolve(cfg)
    return cfg
