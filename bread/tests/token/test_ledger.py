import pytest

from bread.config import ZERO_ADDRESS
from bread.token.errors import (
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    ERC20InvalidAmount,
    ERC20InvalidReceiver,
    InvalidAddress,
)
from bread.token.events import APPROVAL, TRANSFER
from bread.token.ledger import Ledger, require_amount

ALICE = "0x" + "aa" * 20
BOB = "0x" + "bb" * 20
CAROL = "0x" + "cc" * 20


@pytest.fixture
def emitted():
    return []


@pytest.fixture
def ledger(emitted):
    ledger = Ledger(emit=emitted.append)
    ledger.mint(ALICE, 100)
    return ledger


def test_mint(ledger, emitted):
    assert ledger.balance_of(ALICE) == 100
    assert ledger.total_supply() == 100
    assert emitted[-1].name == TRANSFER
    assert emitted[-1].args == {"from": ZERO_ADDRESS, "to": ALICE, "value": 100}


def test_mint_to_zero_address(ledger):
    with pytest.raises(ERC20InvalidReceiver):
        ledger.mint(ZERO_ADDRESS, 1)


def test_burn(ledger, emitted):
    ledger.burn(ALICE, 40)

    assert ledger.balance_of(ALICE) == 60
    assert ledger.total_supply() == 60
    assert emitted[-1].args == {"from": ALICE, "to": ZERO_ADDRESS, "value": 40}


def test_burn_insufficient_balance(ledger):
    with pytest.raises(ERC20InsufficientBalance) as excinfo:
        ledger.burn(ALICE, 101)

    assert excinfo.value.details == {"sender": ALICE, "balance": 100, "needed": 101}
    assert ledger.balance_of(ALICE) == 100


def test_transfer(ledger):
    ledger.transfer(ALICE, BOB, 30)

    assert ledger.balance_of(ALICE) == 70
    assert ledger.balance_of(BOB) == 30
    assert ledger.total_supply() == 100


def test_transfer_insufficient_balance(ledger):
    with pytest.raises(ERC20InsufficientBalance):
        ledger.transfer(BOB, ALICE, 1)


def test_transfer_to_zero_address(ledger):
    with pytest.raises(ERC20InvalidReceiver):
        ledger.transfer(ALICE, ZERO_ADDRESS, 1)


def test_transfer_from(ledger, emitted):
    ledger.approve(ALICE, BOB, 50)
    assert emitted[-1].name == APPROVAL
    assert ledger.allowance(ALICE, BOB) == 50

    ledger.transfer_from(BOB, ALICE, CAROL, 20)

    assert ledger.balance_of(CAROL) == 20
    assert ledger.allowance(ALICE, BOB) == 30


def test_transfer_from_insufficient_allowance(ledger):
    ledger.approve(ALICE, BOB, 10)

    with pytest.raises(ERC20InsufficientAllowance):
        ledger.transfer_from(BOB, ALICE, CAROL, 11)


def test_transfer_from_insufficient_balance_keeps_allowance(ledger):
    ledger.approve(ALICE, BOB, 500)

    with pytest.raises(ERC20InsufficientBalance):
        ledger.transfer_from(BOB, ALICE, CAROL, 101)

    assert ledger.allowance(ALICE, BOB) == 500


def test_addresses_are_case_insensitive(ledger):
    assert ledger.balance_of(ALICE.upper().replace("0X", "0x")) == 100


def test_malformed_address(ledger):
    with pytest.raises(InvalidAddress):
        ledger.balance_of("0x1234")


@pytest.mark.parametrize("amount", [-1, 1.5, "10", True, None])
def test_require_amount_rejects(amount):
    with pytest.raises(ERC20InvalidAmount):
        require_amount(amount)


def test_require_amount():
    assert require_amount(0) == 0
    assert require_amount(10 ** 30) == 10 ** 30
