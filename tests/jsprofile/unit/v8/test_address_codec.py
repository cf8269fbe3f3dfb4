from __future__ import annotations

import pytest

from jsprofile.runtime.errors import LogFormatError
from jsprofile.v8.address import (
    ADDRESS_TAG_CODE,
    ADDRESS_TAG_SCRATCH,
    ADDRESS_TAG_STACK,
    AddressCodec,
)


def test_parse_address_literal_forms() -> None:
    codec = AddressCodec()
    assert codec.parse_address("0x1a", "code") == 26
    assert codec.parse_address("010", "code") == 8
    assert codec.parse_address("overflow", None) == 0
    # Literal forms leave the base alone.
    assert codec.base(ADDRESS_TAG_CODE) == 0


def test_parse_address_relative_moves_tag_base() -> None:
    codec = AddressCodec()
    assert codec.parse_address("a", "code") == 10
    assert codec.parse_address("+5", "code") == 15
    assert codec.base(ADDRESS_TAG_CODE) == 15
    assert codec.parse_address("-f", "code") == 0
    assert codec.base(ADDRESS_TAG_CODE) == 0


def test_parse_address_tags_are_independent() -> None:
    codec = AddressCodec()
    codec.parse_address("1000", ADDRESS_TAG_CODE)
    assert codec.parse_address("+10", ADDRESS_TAG_STACK) == 0x10
    assert codec.parse_address("+10", ADDRESS_TAG_CODE) == 0x1010


def test_relative_address_without_base_starts_from_zero() -> None:
    codec = AddressCodec()
    assert codec.parse_address("+20", ADDRESS_TAG_SCRATCH) == 0x20
    assert codec.parse_address("+20", None) == 0x20
    assert codec.base(ADDRESS_TAG_SCRATCH) == 0x20


def test_reset_restores_start_bases() -> None:
    codec = AddressCodec()
    codec.parse_address("ff", ADDRESS_TAG_CODE)
    codec.set_base(ADDRESS_TAG_SCRATCH, 99)
    codec.reset()
    assert codec.base(ADDRESS_TAG_CODE) == 0
    assert codec.base(ADDRESS_TAG_SCRATCH) == 0


@pytest.mark.parametrize("token", ["0xzz", "09", "+g1", "-", "12 3", "", "0x"])
def test_malformed_address_raises_format_error(token: str) -> None:
    codec = AddressCodec()
    with pytest.raises(LogFormatError):
        codec.parse_address(token, ADDRESS_TAG_CODE)
