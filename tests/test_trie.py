"""Tests for the byte-keyed prefix index."""
from trie_tokenizer.trie import PrefixIndex


def make_index(**tokens):
    index = PrefixIndex()
    for key, value in tokens.items():
        index.insert(key.encode(), value)
    return index


class TestInsert:
    def test_shared_prefix_reuses_nodes(self):
        index = make_index(ab=1, abc=2)
        # root + a + b + c
        assert len(index) == 4
    
    def test_last_write_wins(self):
        index = PrefixIndex()
        index.insert(b"ab", 1)
        index.insert(b"ab", 2)
        assert index.get(b"ab") == 2
    
    def test_intermediate_nodes_are_not_terminal(self):
        index = make_index(abc=7)
        assert index.get(b"abc") == 7
        assert index.get(b"ab") is None
        assert b"a" not in index
        assert b"abc" in index
    
    def test_full_byte_range(self):
        index = PrefixIndex()
        key = bytes(range(256))
        index.insert(key, 999)
        assert index.get(key) == 999


class TestLongestMatch:
    def test_prefers_longest_terminal(self):
        index = make_index(a=10, ab=11)
        assert index.longest_match(b"ab") == (11, 2)
    
    def test_falls_back_to_last_terminal_seen(self):
        index = make_index(a=10, abcd=11)
        assert index.longest_match(b"abcx") == (10, 1)
    
    def test_no_terminal_on_path(self):
        index = make_index(abcd=11)
        assert index.longest_match(b"abc") == (None, 0)
    
    def test_no_edge_at_all(self):
        index = make_index(a=10)
        assert index.longest_match(b"zzz") == (None, 0)
    
    def test_start_offset(self):
        index = make_index(bc=5)
        assert index.longest_match(b"abc", 1) == (5, 2)
        assert index.longest_match(b"abc", 3) == (None, 0)
    
    def test_empty_key_is_never_matched(self):
        index = PrefixIndex()
        index.insert(b"", 42)
        assert index.longest_match(b"anything") == (None, 0)


def test_clear_releases_nodes():
    index = make_index(hello=1, help=2)
    index.clear()
    assert len(index) == 1
    assert index.get(b"hello") is None
