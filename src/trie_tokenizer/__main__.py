"""Usage:
    python -m trie_tokenizer encode "hello world" --vocab vocab.txt
"""
from trie_tokenizer.cli import app

if __name__ == "__main__":
    app()
