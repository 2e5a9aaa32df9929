from typing import Callable, Dict, Optional

from bread.config import ZERO_ADDRESS
from bread.token.errors import (
    ERC20InsufficientAllowance,
    ERC20InsufficientBalance,
    ERC20InvalidAmount,
    ERC20InvalidReceiver,
    InvalidAddress,
)
from bread.token.events import APPROVAL, TRANSFER, Event
from bread.util.address import is_valid_address


def _address(address) -> str:
    if not is_valid_address(address):
        raise InvalidAddress(address=address)
    return address.lower()


def require_amount(amount) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise ERC20InvalidAmount(amount=amount)
    return amount


class Ledger:
    """
    Plain ERC-20 bookkeeping: balances, total supply and allowances.

    Mint and burn carry no access control; callers are expected to gate them.
    Every mutation emits a Transfer or Approval event through `emit`.
    """
    def __init__(self, emit: Optional[Callable[[Event], None]] = None):
        self.balances: Dict[str, int] = {}
        self.allowances: Dict[str, Dict[str, int]] = {}
        self._total_supply = 0
        self.emit = emit or (lambda event: None)

    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self.balances.get(_address(account), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self.allowances.get(_address(owner), {}).get(_address(spender), 0)

    def mint(self, to: str, amount: int):
        to = _address(to)
        require_amount(amount)
        if to == ZERO_ADDRESS:
            raise ERC20InvalidReceiver(receiver=to)

        self._total_supply += amount
        self.balances[to] = self.balances.get(to, 0) + amount
        self.emit(Event(TRANSFER, {"from": ZERO_ADDRESS, "to": to, "value": amount}))

    def burn(self, account: str, amount: int):
        account = _address(account)
        require_amount(amount)
        balance = self.balances.get(account, 0)
        if amount > balance:
            raise ERC20InsufficientBalance(sender=account, balance=balance, needed=amount)

        self.balances[account] = balance - amount
        self._total_supply -= amount
        self.emit(Event(TRANSFER, {"from": account, "to": ZERO_ADDRESS, "value": amount}))

    def transfer(self, sender: str, to: str, amount: int):
        sender = _address(sender)
        to = _address(to)
        require_amount(amount)
        if to == ZERO_ADDRESS:
            raise ERC20InvalidReceiver(receiver=to)

        balance = self.balances.get(sender, 0)
        if amount > balance:
            raise ERC20InsufficientBalance(sender=sender, balance=balance, needed=amount)

        self.balances[sender] = balance - amount
        self.balances[to] = self.balances.get(to, 0) + amount
        self.emit(Event(TRANSFER, {"from": sender, "to": to, "value": amount}))

    def approve(self, owner: str, spender: str, amount: int):
        owner = _address(owner)
        spender = _address(spender)
        require_amount(amount)
        if spender == ZERO_ADDRESS:
            raise ERC20InvalidReceiver(spender=spender)

        self.allowances.setdefault(owner, {})[spender] = amount
        self.emit(Event(APPROVAL, {"owner": owner, "spender": spender, "value": amount}))

    def transfer_from(self, spender: str, owner: str, to: str, amount: int):
        current = self.allowance(owner, spender)
        require_amount(amount)
        if amount > current:
            raise ERC20InsufficientAllowance(spender=spender, allowance=current, needed=amount)

        self.transfer(owner, to, amount)
        self.allowances[_address(owner)][_address(spender)] = current - amount
