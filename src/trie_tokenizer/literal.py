"""Decoding of quoted vocabulary literals into raw token bytes.

Accepted shape: an optional `b` marker, then a literal quoted with ' or ".
Supported escapes are \\n \\r \\t \\\\ \\' \\" and \\xHH; anything else is an error.
"""
from __future__ import annotations

from trie_tokenizer.errors import CapacityExceededError, LiteralParseError

MAX_TOKEN_LENGTH = 256

SIMPLE_ESCAPES: dict[str, int] = {
    "n": ord("\n"),
    "r": ord("\r"),
    "t": ord("\t"),
    "\\": ord("\\"),
    "'": ord("'"),
    '"': ord('"'),
}
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def parse_token_literal(literal: str, max_length: int | None = MAX_TOKEN_LENGTH) -> bytes:
    """Turn a vocabulary literal like `b'\\xe4\\xb8'` or `' the'` into bytes.

    The leading quote, if present, is also the terminator: parsing stops at
    its next unescaped occurrence. Unquoted input is parsed to the end.
    Plain characters are UTF-8 encoded.

    Raises:
        LiteralParseError: unsupported escape, dangling backslash or bad \\xHH
        CapacityExceededError: decoded token longer than `max_length`
    """
    body = literal
    if body.startswith("b") and len(body) > 1 and body[1] in "'\"":
        body = body[1:]

    quote = None
    if body and body[0] in "'\"":
        quote = body[0]
        body = body[1:]

    out = bytearray()
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == quote:
            break
        if ch != "\\":
            out += ch.encode("utf-8")
            i += 1
        elif i + 1 >= n:
            raise LiteralParseError(f"Dangling backslash in literal {literal!r}", literal)
        else:
            esc = body[i + 1]
            if esc in SIMPLE_ESCAPES:
                out.append(SIMPLE_ESCAPES[esc])
                i += 2
            elif esc == "x":
                pair = body[i + 2 : i + 4]
                if len(pair) != 2 or not set(pair) <= HEX_DIGITS:
                    raise LiteralParseError(f"Invalid \\x escape in literal {literal!r}", literal)
                out.append(int(pair, 16))
                i += 4
            else:
                raise LiteralParseError(f"Unknown escape sequence \\{esc} in literal {literal!r}", literal)

        if max_length is not None and len(out) > max_length:
            raise CapacityExceededError(
                f"Token literal {literal!r} decodes to more than {max_length} bytes"
            )

    return bytes(out)
