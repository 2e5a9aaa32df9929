import pytest

from bread.token.errors import InvalidTransactionError
from bread.wallet.transaction import Transaction
from bread.wallet.wallet import Wallet

RECIPIENT = "0x" + "11" * 20


@pytest.fixture
def wallet():
    return Wallet()


@pytest.fixture
def transaction(wallet):
    return Transaction(wallet, "owner_mint", {"to": RECIPIENT, "amount": "5"})


def test_transaction(wallet, transaction):
    assert transaction.method == "owner_mint"
    assert transaction.args == {"to": RECIPIENT, "amount": "5"}
    assert transaction.sender == wallet.address

    assert "timestamp" in transaction.input
    assert transaction.input["address"] == wallet.address
    assert transaction.input["public_key"] == wallet.public_key

    assert Wallet.verify(
        transaction.input["public_key"],
        transaction.payload(transaction.input["timestamp"]),
        transaction.input["signature"],
    )


def test_transaction_ids_are_unique(wallet):
    first = Transaction(wallet, "pause_minting")
    second = Transaction(wallet, "pause_minting")

    assert first.id != second.id


def test_transaction_requires_wallet():
    with pytest.raises(InvalidTransactionError):
        Transaction(method="pause_minting")


def test_valid_transaction(transaction):
    Transaction.is_valid_transaction(transaction)


def test_valid_transaction_from_json(transaction):
    restored = Transaction.from_json(transaction.to_json())

    assert restored.id == transaction.id
    Transaction.is_valid_transaction(restored)


def test_from_json_malformed():
    with pytest.raises(InvalidTransactionError, match='Malformed transaction'):
        Transaction.from_json({"method": "pause_minting"})


@pytest.mark.parametrize("field, value", [
    ("id", 7),
    ("id", ""),
    ("method", ["pause_minting"]),
    ("method", {"name": "pause_minting"}),
])
def test_from_json_non_string_fields(transaction, field, value):
    transaction_json = transaction.to_json()
    transaction_json[field] = value

    with pytest.raises(InvalidTransactionError, match=f"{field} must be a non-empty string"):
        Transaction.from_json(transaction_json)


def test_from_json_not_an_object():
    with pytest.raises(InvalidTransactionError, match="expected an object"):
        Transaction.from_json(["pause_minting"])


def test_unknown_method(wallet):
    transaction = Transaction(wallet, "mint_everything", {})

    with pytest.raises(InvalidTransactionError, match='Unknown method'):
        Transaction.is_valid_transaction(transaction)


def test_wrong_arguments(wallet):
    transaction = Transaction(wallet, "owner_mint", {"to": RECIPIENT})

    with pytest.raises(InvalidTransactionError, match='Invalid arguments'):
        Transaction.is_valid_transaction(transaction)


def test_tampered_args(transaction):
    transaction.args["amount"] = "5000"

    with pytest.raises(InvalidTransactionError, match='Invalid signature'):
        Transaction.is_valid_transaction(transaction)


def test_signed_by_another_wallet(transaction):
    other = Wallet()
    transaction.input["signature"] = other.sign(
        transaction.payload(transaction.input["timestamp"])
    )

    with pytest.raises(InvalidTransactionError, match='Invalid signature'):
        Transaction.is_valid_transaction(transaction)


def test_spoofed_address(transaction):
    transaction.input["address"] = "0x" + "ee" * 20

    with pytest.raises(InvalidTransactionError, match='Address does not match'):
        Transaction.is_valid_transaction(transaction)


def test_missing_input_field(transaction):
    del transaction.input["signature"]

    with pytest.raises(InvalidTransactionError, match='missing signature'):
        Transaction.is_valid_transaction(transaction)
