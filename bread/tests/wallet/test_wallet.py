import pytest

from bread.util.address import is_valid_address
from bread.wallet.wallet import Wallet


class StubToken:
    def __init__(self, balances):
        self.balances = balances

    def balance_of(self, address):
        return self.balances.get(address, 0)


def test_verify_valid_signature():
    data = {"method": "pause_minting"}
    wallet = Wallet()
    signature = wallet.sign(data)

    assert Wallet.verify(wallet.public_key, data, signature)


def test_verify_invalid_signature():
    data = {"method": "pause_minting"}
    wallet = Wallet()
    signature = wallet.sign(data)

    assert not Wallet.verify(Wallet().public_key, data, signature)


def test_verify_tampered_data():
    wallet = Wallet()
    signature = wallet.sign({"amount": 1})

    assert not Wallet.verify(wallet.public_key, {"amount": 2}, signature)


def test_verify_garbage():
    assert not Wallet.verify("not-hex", {}, (1, 2))
    assert not Wallet.verify(Wallet().public_key, {}, "bad")


def test_address():
    wallet = Wallet()

    assert is_valid_address(wallet.address)
    assert wallet.address == Wallet.address_from_public_key(wallet.public_key)


def test_balance():
    wallet = Wallet()
    wallet.token = StubToken({wallet.address: 42})

    assert wallet.balance == 42
    assert Wallet().balance == 0


@pytest.mark.parametrize("prefix", ["", "0x"])
def test_from_private_key_hex(prefix):
    wallet = Wallet()
    restored = Wallet.from_private_key(prefix + wallet.private_key_hex())

    assert restored.address == wallet.address
    assert restored.public_key == wallet.public_key


def test_from_private_key_invalid():
    with pytest.raises(ValueError, match='Invalid private key'):
        Wallet.from_private_key("zz-not-a-key")
