"""
BuidlGuidl Bread: rate-limited, pausable issuance on top of the ledger.

Three roles, each held by exactly one address:

- owner: changes roles and limits, mints through its own rate-limited channel.
- batch minter: mints and burns in batches, completes batch minting periods.
- pause address: freezes issuance for PAUSE_DURATION seconds.

Issuance runs through two independent channels. The batch channel is capped
per period and needs an explicit completion followed by a cooldown before the
next period can start. The owner channel resets itself on the first mint after
its cooldown. The pause blocks both channels, batch burns and period
completion, but never the owner's setters, so a compromised batch minter key
can be rotated while issuance is frozen.

Every state-changing method validates the whole call before touching state,
so a raised error leaves the token exactly as it was.
"""

from contextlib import contextmanager
from typing import Callable, List, Optional, Sequence

from bread.config import (
    BATCH_MINT_COOLDOWN,
    BATCH_MINT_LIMIT,
    DECIMALS,
    MAX_BATCH_SIZE,
    OWNER_MINT_COOLDOWN,
    OWNER_MINT_LIMIT,
    PAUSE_DURATION,
    TOKEN_NAME,
    TOKEN_SYMBOL,
    ZERO_ADDRESS,
)
from bread.token import events
from bread.token.errors import (
    ArrayLengthMismatch,
    BatchMintAmountExceedsLimit,
    BatchMintCooldownNotExpired,
    BatchMintingPeriodCompletionPaused,
    BatchMintLimitCannotBeZero,
    BatchSizeTooLarge,
    CannotBurnFromZeroAddress,
    CannotBurnWhilePaused,
    CannotBurnZeroAmount,
    CannotMintToZeroAddress,
    CannotMintWhilePaused,
    CannotMintZeroAmount,
    CannotSetZeroAddress,
    CooldownCannotBeZero,
    EmptyArrays,
    ERC20InsufficientBalance,
    InvalidAddress,
    OwnableUnauthorizedAccount,
    OwnerMintAmountExceedsLimit,
    OwnerMintLimitCannotBeZero,
    UnauthorizedBatchMinter,
    UnauthorizedPause,
)
from bread.token.events import Event
from bread.token.ledger import Ledger, require_amount
from bread.token.period import PeriodAccounting, ResetPolicy
from bread.util.address import is_valid_address, normalize_address
from bread.util.clock import ManualClock, SystemClock


def _require_address(address, zero_error=CannotSetZeroAddress) -> str:
    if not is_valid_address(address):
        raise InvalidAddress(address=address)
    address = normalize_address(address)
    if address == ZERO_ADDRESS:
        raise zero_error(address=address)
    return address


def _require_positive(amount, zero_error) -> int:
    if require_amount(amount) == 0:
        raise zero_error()
    return amount


def _is(caller, role_address: str) -> bool:
    return isinstance(caller, str) and caller.lower() == role_address


class BuidlGuidlBread:
    name = TOKEN_NAME
    symbol = TOKEN_SYMBOL
    decimals = DECIMALS

    PAUSE_DURATION = PAUSE_DURATION
    MAX_BATCH_SIZE = MAX_BATCH_SIZE

    def __init__(
        self,
        owner: str,
        batch_minter_address: str,
        pause_address: str,
        clock: Optional[Callable[[], int]] = None,
        ledger: Optional[Ledger] = None,
    ):
        self.owner = _require_address(owner)
        self.batch_minter_address = _require_address(batch_minter_address)
        self.pause_address = _require_address(pause_address)
        self.clock = clock or SystemClock()

        # Events emitted since the last drain. A Node moves them into blocks after
        # each call, so under a Node this holds at most one call's events.
        self.event_log: List[Event] = []
        self.ledger = ledger or Ledger()
        self.ledger.emit = self._emit

        self.batch_period = PeriodAccounting(
            policy=ResetPolicy.EXPLICIT_COMPLETION,
            cap=BATCH_MINT_LIMIT,
            cooldown=BATCH_MINT_COOLDOWN,
            limit_error=BatchMintAmountExceedsLimit,
            cooldown_error=BatchMintCooldownNotExpired,
        )
        self.owner_period = PeriodAccounting(
            policy=ResetPolicy.AUTO_RESET_ON_NEXT_MINT,
            cap=OWNER_MINT_LIMIT,
            cooldown=OWNER_MINT_COOLDOWN,
            limit_error=OwnerMintAmountExceedsLimit,
        )
        self.pause_end_time = 0

    def _emit(self, event: Event):
        self.event_log.append(event)

    def _now(self) -> int:
        return int(self.clock())

    @contextmanager
    def frozen_clock(self, timestamp: int):
        """
        Pin the clock to `timestamp` while one call runs.
        """
        clock = self.clock
        self.clock = ManualClock(timestamp)
        try:
            yield timestamp
        finally:
            self.clock = clock

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _only_owner(self, caller: str):
        if not _is(caller, self.owner):
            raise OwnableUnauthorizedAccount(account=caller)

    def _only_batch_minter(self, caller: str):
        if not _is(caller, self.batch_minter_address):
            raise UnauthorizedBatchMinter(account=caller)

    def _only_pause_address(self, caller: str):
        if not _is(caller, self.pause_address):
            raise UnauthorizedPause(account=caller)

    def is_paused(self, now: Optional[int] = None) -> bool:
        now = self._now() if now is None else now
        return now < self.pause_end_time

    def _validate_batch_shape(self, addresses: Sequence, amounts: Sequence):
        if len(addresses) != len(amounts):
            raise ArrayLengthMismatch(addresses=len(addresses), amounts=len(amounts))
        if not addresses:
            raise EmptyArrays()
        if len(addresses) > self.MAX_BATCH_SIZE:
            raise BatchSizeTooLarge(size=len(addresses), max_size=self.MAX_BATCH_SIZE)

    # ------------------------------------------------------------------
    # Batch minter channel
    # ------------------------------------------------------------------

    def batch_mint(self, caller: str, recipients: Sequence[str], amounts: Sequence[int]):
        now = self._now()
        self._only_batch_minter(caller)
        if self.is_paused(now):
            raise CannotMintWhilePaused(pause_end_time=self.pause_end_time)
        self._validate_batch_shape(recipients, amounts)

        # Cooldown, then the aggregate cap, then each item.
        batch_total = sum(require_amount(amount) for amount in amounts)
        next_period = self.batch_period.record(batch_total, now)
        checked = [
            (
                _require_address(recipient, CannotMintToZeroAddress),
                _require_positive(amount, CannotMintZeroAmount),
            )
            for recipient, amount in zip(recipients, amounts)
        ]

        for recipient, amount in checked:
            self.ledger.mint(recipient, amount)
            self._emit(Event(events.BATCH_MINT, {"user": recipient, "amount": amount}))
        self.batch_period = next_period

    def batch_burn(self, caller: str, targets: Sequence[str], amounts: Sequence[int]):
        now = self._now()
        self._only_batch_minter(caller)
        if self.is_paused(now):
            raise CannotBurnWhilePaused(pause_end_time=self.pause_end_time)
        self._validate_batch_shape(targets, amounts)

        checked = [
            (
                _require_address(target, CannotBurnFromZeroAddress),
                _require_positive(amount, CannotBurnZeroAmount),
            )
            for target, amount in zip(targets, amounts)
        ]

        needed = {}
        for target, amount in checked:
            needed[target] = needed.get(target, 0) + amount
        for target, amount in needed.items():
            balance = self.ledger.balance_of(target)
            if amount > balance:
                raise ERC20InsufficientBalance(sender=target, balance=balance, needed=amount)

        for target, amount in checked:
            self.ledger.burn(target, amount)
            self._emit(Event(events.BATCH_BURN, {"user": target, "amount": amount}))

    def complete_batch_minting_period(self, caller: str):
        now = self._now()
        self._only_batch_minter(caller)
        if self.is_paused(now):
            raise BatchMintingPeriodCompletionPaused(pause_end_time=self.pause_end_time)

        self.batch_period = self.batch_period.complete(now)
        self._emit(Event(events.BATCH_MINTING_PERIOD_COMPLETED, {"timestamp": now}))

    # ------------------------------------------------------------------
    # Owner channel
    # ------------------------------------------------------------------

    def owner_mint(self, caller: str, to: str, amount: int):
        now = self._now()
        self._only_owner(caller)
        if self.is_paused(now):
            raise CannotMintWhilePaused(pause_end_time=self.pause_end_time)
        to = _require_address(to, CannotMintToZeroAddress)
        _require_positive(amount, CannotMintZeroAmount)

        next_period = self.owner_period.record(amount, now)

        self.ledger.mint(to, amount)
        self.owner_period = next_period
        self._emit(Event(events.OWNER_MINT, {"to": to, "amount": amount}))

    # ------------------------------------------------------------------
    # Pause
    # ------------------------------------------------------------------

    def pause_minting(self, caller: str):
        now = self._now()
        self._only_pause_address(caller)

        self.pause_end_time = now + self.PAUSE_DURATION
        self._emit(Event(events.MINTING_PAUSED, {"pause_end_time": self.pause_end_time}))

    # ------------------------------------------------------------------
    # Owner administration (never pause-gated)
    # ------------------------------------------------------------------

    def transfer_ownership(self, caller: str, new_owner: str):
        self._only_owner(caller)
        new_owner = _require_address(new_owner)

        previous, self.owner = self.owner, new_owner
        self._emit(Event(events.OWNERSHIP_TRANSFERRED, {"previous_owner": previous, "new_owner": new_owner}))

    def set_batch_minter_address(self, caller: str, new_address: str):
        self._only_owner(caller)
        self.batch_minter_address = _require_address(new_address)
        self._emit(Event(events.BATCH_MINTER_ADDRESS_UPDATED, {"new_address": self.batch_minter_address}))

    def set_pause_address(self, caller: str, new_address: str):
        self._only_owner(caller)
        self.pause_address = _require_address(new_address)
        self._emit(Event(events.PAUSE_ADDRESS_UPDATED, {"new_address": self.pause_address}))

    def set_batch_mint_limit(self, caller: str, new_limit: int):
        self._only_owner(caller)
        _require_positive(new_limit, BatchMintLimitCannotBeZero)

        self.batch_period = self.batch_period.with_cap(new_limit)
        self._emit(Event(events.BATCH_MINT_LIMIT_UPDATED, {"new_limit": new_limit}))

    def set_batch_mint_cooldown(self, caller: str, new_cooldown: int):
        self._only_owner(caller)
        _require_positive(new_cooldown, CooldownCannotBeZero)

        self.batch_period = self.batch_period.with_cooldown(new_cooldown)
        self._emit(Event(events.BATCH_MINT_COOLDOWN_UPDATED, {"new_cooldown": new_cooldown}))

    def set_owner_mint_limit(self, caller: str, new_limit: int):
        self._only_owner(caller)
        _require_positive(new_limit, OwnerMintLimitCannotBeZero)

        self.owner_period = self.owner_period.with_cap(new_limit)
        self._emit(Event(events.OWNER_MINT_LIMIT_UPDATED, {"new_limit": new_limit}))

    def set_owner_mint_cooldown(self, caller: str, new_cooldown: int):
        self._only_owner(caller)
        _require_positive(new_cooldown, CooldownCannotBeZero)

        self.owner_period = self.owner_period.with_cooldown(new_cooldown)
        self._emit(Event(events.OWNER_MINT_COOLDOWN_UPDATED, {"new_cooldown": new_cooldown}))

    # ------------------------------------------------------------------
    # Standard token operations
    # ------------------------------------------------------------------

    def transfer(self, caller: str, to: str, amount: int):
        self.ledger.transfer(caller, to, amount)

    def approve(self, caller: str, spender: str, amount: int):
        self.ledger.approve(caller, spender, amount)

    def transfer_from(self, caller: str, owner: str, to: str, amount: int):
        self.ledger.transfer_from(caller, owner, to, amount)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def total_supply(self) -> int:
        return self.ledger.total_supply()

    def balance_of(self, account: str) -> int:
        return self.ledger.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        return self.ledger.allowance(owner, spender)

    @property
    def batch_mint_limit(self) -> int:
        return self.batch_period.cap

    @property
    def batch_mint_cooldown(self) -> int:
        return self.batch_period.cooldown

    @property
    def owner_mint_limit(self) -> int:
        return self.owner_period.cap

    @property
    def owner_mint_cooldown(self) -> int:
        return self.owner_period.cooldown

    @property
    def batch_minting_occurred_this_period(self) -> bool:
        return self.batch_period.active

    @property
    def batch_mint_period_completed_at(self) -> int:
        return self.batch_period.reference_timestamp

    @property
    def owner_mint_period_start(self) -> int:
        return self.owner_period.reference_timestamp

    def get_remaining_batch_mint_cooldown(self) -> int:
        return self.batch_period.remaining_cooldown(self._now())

    def get_total_batch_minted_in_period(self) -> int:
        return self.batch_period.total_minted

    def get_remaining_batch_mint_amount(self) -> int:
        return self.batch_period.remaining_amount()

    def get_owner_mint_remaining_cooldown(self) -> int:
        return self.owner_period.remaining_cooldown(self._now())

    def get_total_owner_minted_in_period(self) -> int:
        return self.owner_period.total_minted

    def get_remaining_owner_mint_amount(self) -> int:
        """
        Remaining owner allowance for the period as last recorded. After the
        cooldown this keeps reporting the old period until the next owner mint.
        """
        return self.owner_period.remaining_amount()

    def get_effective_remaining_owner_mint_amount(self) -> int:
        """
        What an owner mint could issue right now, counting a pending reset.
        """
        return self.owner_period.effective_remaining_amount(self._now())

    def get_effective_remaining_batch_mint_amount(self) -> int:
        return self.batch_period.effective_remaining_amount(self._now())

    def rate_limits(self) -> dict:
        now = self._now()
        return {
            "timestamp": now,
            "paused": self.is_paused(now),
            "pause_end_time": self.pause_end_time,
            "batch": {
                "limit": self.batch_mint_limit,
                "cooldown": self.batch_mint_cooldown,
                "minted_in_period": self.get_total_batch_minted_in_period(),
                "remaining_amount": self.get_remaining_batch_mint_amount(),
                "effective_remaining_amount": self.get_effective_remaining_batch_mint_amount(),
                "remaining_cooldown": self.get_remaining_batch_mint_cooldown(),
                "minting_occurred_this_period": self.batch_minting_occurred_this_period,
                "period_completed_at": self.batch_mint_period_completed_at,
            },
            "owner": {
                "limit": self.owner_mint_limit,
                "cooldown": self.owner_mint_cooldown,
                "minted_in_period": self.get_total_owner_minted_in_period(),
                "remaining_amount": self.get_remaining_owner_mint_amount(),
                "effective_remaining_amount": self.get_effective_remaining_owner_mint_amount(),
                "remaining_cooldown": self.get_owner_mint_remaining_cooldown(),
                "minting_occurred_this_period": self.owner_period.active,
                "period_start": self.owner_mint_period_start,
            },
        }

    def info(self) -> dict:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "decimals": self.decimals,
            "total_supply": self.total_supply(),
            "owner": self.owner,
            "batch_minter_address": self.batch_minter_address,
            "pause_address": self.pause_address,
            "batch_mint_limit": self.batch_mint_limit,
            "batch_mint_cooldown": self.batch_mint_cooldown,
            "owner_mint_limit": self.owner_mint_limit,
            "owner_mint_cooldown": self.owner_mint_cooldown,
            "pause_duration": self.PAUSE_DURATION,
            "max_batch_size": self.MAX_BATCH_SIZE,
        }
