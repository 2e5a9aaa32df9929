import re


ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_address(address) -> bool:
    return isinstance(address, str) and bool(ADDRESS_PATTERN.match(address))


def normalize_address(address: str) -> str:
    """
    Lower-case a 0x-prefixed 20-byte hex address so comparisons ignore checksum casing.
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return address.lower()


def short(address: str) -> str:
    return f"{address[:8]}..."
