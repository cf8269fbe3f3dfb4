"""Address token decoding with per-tag running bases."""

from __future__ import annotations

from jsprofile.runtime.errors import parse_int

ADDRESS_TAG_CODE = "code"
ADDRESS_TAG_CODE_MOVE = "code-move"
ADDRESS_TAG_STACK = "stack"
ADDRESS_TAG_SCRATCH = "scratch"

OVERFLOW_TOKEN = "overflow"


class AddressCodec:
    """Turn log address tokens into absolute addresses.

    The log writes most addresses as signed hex deltas from the previous
    address seen under the same tag, so decoding is stateful: every token
    parsed with a tag (other than the literal forms) moves that tag's base.
    """

    def __init__(self) -> None:
        self._bases: dict[str, int] = {}
        self.reset()

    def reset(self) -> None:
        """Return all tags to their start-of-log bases."""
        self._bases.clear()
        self._bases[ADDRESS_TAG_CODE] = 0
        self._bases[ADDRESS_TAG_CODE_MOVE] = 0
        self._bases[ADDRESS_TAG_STACK] = 0

    def base(self, tag: str) -> int:
        return self._bases.get(tag, 0)

    def set_base(self, tag: str, address: int) -> None:
        self._bases[tag] = address

    def parse_address(self, token: str, tag: str | None = None) -> int:
        """Decode one address token, updating the base for `tag`."""
        if token == OVERFLOW_TOKEN:
            return 0
        if token.startswith("0x"):
            return parse_int(token[2:], base=16, what="hex address")
        if token.startswith("0"):
            return parse_int(token, base=8, what="octal address")

        base_address = self.base(tag) if tag is not None else 0
        if token.startswith("+"):
            address = base_address + parse_int(token[1:], base=16, what="address delta")
        elif token.startswith("-"):
            address = base_address - parse_int(token[1:], base=16, what="address delta")
        else:
            address = parse_int(token, base=16, what="address")
        if tag is not None:
            self._bases[tag] = address
        return address
