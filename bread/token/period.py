"""
Period accounting shared by both issuance channels.

A period accumulates minted amounts toward a cap. How a period ends depends on
the channel's reset policy:

- EXPLICIT_COMPLETION: the period stays open until it is completed by an
  explicit call. Completion records a timestamp, and no new period may start
  until the cooldown has elapsed from it.
- AUTO_RESET_ON_NEXT_MINT: the period opens on the first mint. Once the
  cooldown has elapsed from that start, the next mint silently resets the
  total and starts a new period.

All transitions return a new PeriodAccounting and never mutate the receiver,
so the caller can validate a whole request before committing anything.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Type

from bread.token.errors import CapacityError, NoBatchMintingOccurredThisPeriod, TimingError


class ResetPolicy(Enum):
    EXPLICIT_COMPLETION = "explicit_completion"
    AUTO_RESET_ON_NEXT_MINT = "auto_reset_on_next_mint"


@dataclass(frozen=True)
class PeriodAccounting:
    policy: ResetPolicy
    cap: int
    cooldown: int
    limit_error: Type[CapacityError]
    cooldown_error: Type[TimingError] = TimingError
    total_minted: int = 0
    active: bool = False
    # Completion time for EXPLICIT_COMPLETION, period start for AUTO_RESET_ON_NEXT_MINT.
    reference_timestamp: int = 0

    def cooldown_expired(self, now: int) -> bool:
        return now >= self.reference_timestamp + self.cooldown

    def remaining_cooldown(self, now: int) -> int:
        return max(0, self.reference_timestamp + self.cooldown - now)

    def remaining_amount(self) -> int:
        """
        Cap minus the total recorded so far. Does not anticipate a pending
        automatic reset; see effective_remaining_amount.
        """
        return max(0, self.cap - self.total_minted)

    def effective_remaining_amount(self, now: int) -> int:
        return self.open(now).remaining_amount() if self._can_open(now) else 0

    def _can_open(self, now: int) -> bool:
        if self.policy is ResetPolicy.EXPLICIT_COMPLETION:
            return self.active or self.cooldown_expired(now)
        return True

    def open(self, now: int) -> "PeriodAccounting":
        """
        Return the state a mint at `now` is checked against, applying any reset
        the policy allows. Raises the channel's cooldown error when an explicit
        period was completed and its cooldown is still running.
        """
        if self.policy is ResetPolicy.EXPLICIT_COMPLETION:
            if self.active:
                return self
            if not self.cooldown_expired(now):
                raise self.cooldown_error(
                    remaining_cooldown=self.remaining_cooldown(now)
                )
            return replace(self, total_minted=0)

        if self.cooldown_expired(now):
            return replace(self, total_minted=0, reference_timestamp=now)
        return self

    def record(self, amount: int, now: int) -> "PeriodAccounting":
        """
        Open the period for `now` and add `amount`, rejecting the whole amount
        if it would take the total over the cap.
        """
        current = self.open(now)
        if current.total_minted + amount > current.cap:
            raise self.limit_error(
                requested=amount,
                minted_in_period=current.total_minted,
                limit=current.cap,
            )
        return replace(current, total_minted=current.total_minted + amount, active=True)

    def complete(self, now: int) -> "PeriodAccounting":
        if self.policy is not ResetPolicy.EXPLICIT_COMPLETION:
            raise ValueError(f"Periods with policy {self.policy.value} cannot be completed")
        if not self.active:
            raise NoBatchMintingOccurredThisPeriod()
        return replace(self, total_minted=0, active=False, reference_timestamp=now)

    def with_cap(self, cap: int) -> "PeriodAccounting":
        return replace(self, cap=cap)

    def with_cooldown(self, cooldown: int) -> "PeriodAccounting":
        return replace(self, cooldown=cooldown)
