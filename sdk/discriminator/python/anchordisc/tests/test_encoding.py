import base58  # type: ignore[import-untyped]

from anchordisc.encoding import (
    to_base58,
    to_base64,
    to_byte_array,
    to_hex,
    to_prefixed_hex,
)

MY_NAME = bytes([181, 16, 140, 34, 85, 113, 210, 20])


def test_hex():
    assert to_hex(MY_NAME) == "b5108c225571d214"


def test_prefixed_hex():
    assert to_prefixed_hex(MY_NAME) == "0xb5108c225571d214"


def test_hex_keeps_leading_zeros():
    assert to_hex(bytes([0, 1, 2, 3, 4, 5, 6, 7])) == "0001020304050607"


def test_byte_array():
    assert to_byte_array(MY_NAME) == "[181, 16, 140, 34, 85, 113, 210, 20]"


def test_base64():
    assert to_base64(MY_NAME) == "tRCMIlVx0hQ="


def test_base58():
    assert base58.b58decode(to_base58(MY_NAME)) == MY_NAME
    assert to_base58(bytes(8)) == "11111111"
