"""Tests for the typer command line."""
from typer.testing import CliRunner

from trie_tokenizer.cli import app
from trie_tokenizer.errors import TokenizerError

runner = CliRunner()


def last_line(result) -> str:
    """Command output is the final stdout line; log lines may precede it."""
    return result.stdout.rstrip("\n").splitlines()[-1]


def test_encode(vocab_file):
    result = runner.invoke(app, ["encode", "abc the", "--vocab", str(vocab_file)])
    assert result.exit_code == 0, result.output
    assert last_line(result) == "301 302"


def test_encode_file(vocab_file, tmp_path):
    data = tmp_path / "data.bin"
    data.write_bytes(b"ab\xff")
    result = runner.invoke(app, ["encode", "--file", str(data), "--vocab", str(vocab_file)])
    assert result.exit_code == 0, result.output
    assert last_line(result) == "300 255"


def test_encode_needs_exactly_one_input(vocab_file):
    result = runner.invoke(app, ["encode", "--vocab", str(vocab_file)])
    assert result.exit_code != 0


def test_encode_then_decode(vocab_file):
    encoded = runner.invoke(app, ["encode", "it's abc the", "--vocab", str(vocab_file)])
    ids = last_line(encoded).split()
    assert ids == ["305", "32", "301", "302"]
    decoded = runner.invoke(app, ["decode", *ids, "--vocab", str(vocab_file)])
    assert decoded.exit_code == 0, decoded.output
    assert last_line(decoded) == "it's abc the"


def test_decode_unknown_id_fails(vocab_file):
    result = runner.invoke(app, ["decode", "300", "99999", "--vocab", str(vocab_file)])
    assert result.exit_code == 1


def test_missing_vocab_fails(tmp_path):
    result = runner.invoke(app, ["stats", "--vocab", str(tmp_path / "nope.txt")])
    assert result.exit_code == 1


def test_strict_load_error_exits_cleanly(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("256 'ab' 2\n257 '\\q' 1\n", encoding="utf-8")
    result = runner.invoke(app, ["stats", "--vocab", str(path), "--set", "vocab.strict=true"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, TokenizerError)


def test_stats_with_override(vocab_file):
    result = runner.invoke(app, ["stats", "--vocab", str(vocab_file), "--set", "tokenizer.max_token_length=3"])
    assert result.exit_code == 0, result.output
    # ' the' and "it's" are four bytes long
    assert "loaded:     4" in result.stdout
    assert "skipped:    2" in result.stdout


def test_demo(vocab_file):
    result = runner.invoke(app, ["demo", "--vocab", str(vocab_file)])
    assert result.exit_code == 0, result.output
    assert "Loaded 6 tokens" in result.stdout
    assert "Decoded text: Q: System with two quadratic equations" in result.stdout


def test_pack_uses_data_config(vocab_file, tmp_path):
    text = tmp_path / "corpus.txt"
    text.write_bytes(bytes(range(40, 80)))
    result = runner.invoke(app, [
        "pack", str(text), "--vocab", str(vocab_file),
        "--set", "data.seq_len=8", "--set", "data.batch_size=2",
    ])
    assert result.exit_code == 0, result.output
    assert "tokens:  40" in result.stdout
    assert "windows: 4" in result.stdout
    assert "batches: 2" in result.stdout
