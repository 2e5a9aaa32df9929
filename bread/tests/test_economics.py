import pytest

from bread.economics import format_bread, parse_bread


def test_parse_bread():
    assert parse_bread("1") == 10 ** 18
    assert parse_bread("1.5") == 15 * 10 ** 17
    assert parse_bread(420) == 420 * 10 ** 18
    assert parse_bread("0.000000000000000001") == 1
    assert parse_bread("123456789012345.123456789012345678") == 123456789012345123456789012345678


@pytest.mark.parametrize("amount", ["-1", "abc", "0.0000000000000000001", "NaN"])
def test_parse_bread_invalid(amount):
    with pytest.raises(ValueError):
        parse_bread(amount)


def test_format_bread():
    assert format_bread(0) == "0"
    assert format_bread(420 * 10 ** 18) == "420"
    assert format_bread(15 * 10 ** 17) == "1.5"
    assert format_bread(1) == "0.000000000000000001"
