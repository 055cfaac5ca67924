"""Sphinx configuration for trie-tokenizer docs."""
import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath("../src"))

project = "trie-tokenizer"
author = "Sumuk Shashidhar"
year = datetime.now().year
copyright = f"{year}, {author}"

extensions = ["sphinx.ext.autodoc"]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

html_theme = "furo"
html_static_path = ["_static"]
