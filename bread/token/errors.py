"""
Rejection errors raised by the token.

Every error aborts the whole call. Concrete classes are named after the revert
they correspond to on the deployed contract so tooling can match on the name;
the intermediate classes group them by failure category.
"""

from typing import Any, Dict, Optional


class BreadError(Exception):
    """Base exception for rejected token calls."""

    category = "error"
    status_code = 400
    default_message = "Call rejected"

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.default_message
        self.details: Dict[str, Any] = details
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_json(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "category": self.category,
            "message": self.message,
            "details": self.details,
        }


class AuthorizationError(BreadError):
    category = "authorization"
    status_code = 403
    default_message = "Caller is not authorized"


class InputValidationError(BreadError):
    category = "input_validation"
    default_message = "Invalid input"


class CapacityError(BreadError):
    category = "capacity"
    default_message = "Period cap would be exceeded"


class TimingError(BreadError):
    category = "timing"
    default_message = "Not allowed at this time"


class InsufficientFundsError(BreadError):
    category = "insufficient_funds"
    default_message = "Insufficient balance"


class ConfigurationError(BreadError):
    category = "configuration"
    default_message = "Invalid configuration value"


class InvalidTransactionError(BreadError):
    category = "transaction"
    default_message = "Invalid transaction"


# Authorization

class OwnableUnauthorizedAccount(AuthorizationError):
    default_message = "Caller is not the owner"


class UnauthorizedBatchMinter(AuthorizationError):
    default_message = "Caller is not the batch minter"


class UnauthorizedPause(AuthorizationError):
    default_message = "Caller is not the pause address"


# Input validation

class InvalidAddress(InputValidationError):
    default_message = "Not a 0x-prefixed 20-byte hex address"


class CannotSetZeroAddress(InputValidationError):
    default_message = "Address cannot be the zero address"


class CannotMintToZeroAddress(InputValidationError):
    default_message = "Cannot mint to the zero address"


class CannotMintZeroAmount(InputValidationError):
    default_message = "Cannot mint a zero amount"


class CannotBurnFromZeroAddress(InputValidationError):
    default_message = "Cannot burn from the zero address"


class CannotBurnZeroAmount(InputValidationError):
    default_message = "Cannot burn a zero amount"


class ArrayLengthMismatch(InputValidationError):
    default_message = "Address and amount arrays differ in length"


class EmptyArrays(InputValidationError):
    default_message = "Address and amount arrays are empty"


class BatchSizeTooLarge(InputValidationError):
    default_message = "Batch exceeds the maximum batch size"


class ERC20InvalidReceiver(InputValidationError):
    default_message = "Invalid receiver"


class ERC20InvalidAmount(InputValidationError):
    default_message = "Amount must be a non-negative integer"


# Capacity

class BatchMintAmountExceedsLimit(CapacityError):
    default_message = "Batch mint would exceed the batch mint limit for this period"


class OwnerMintAmountExceedsLimit(CapacityError):
    default_message = "Owner mint would exceed the owner mint limit for this period"


# Timing

class CannotMintWhilePaused(TimingError):
    default_message = "Minting is paused"


class CannotBurnWhilePaused(TimingError):
    default_message = "Burning is paused"


class BatchMintCooldownNotExpired(TimingError):
    default_message = "Batch mint cooldown has not expired"


class BatchMintingPeriodCompletionPaused(TimingError):
    default_message = "Cannot complete the batch minting period while paused"


class NoBatchMintingOccurredThisPeriod(TimingError):
    default_message = "No batch minting occurred this period"


# Insufficient funds

class ERC20InsufficientBalance(InsufficientFundsError):
    default_message = "Insufficient balance"


class ERC20InsufficientAllowance(InsufficientFundsError):
    default_message = "Insufficient allowance"


# Configuration

class BatchMintLimitCannotBeZero(ConfigurationError):
    default_message = "Batch mint limit cannot be zero"


class OwnerMintLimitCannotBeZero(ConfigurationError):
    default_message = "Owner mint limit cannot be zero"


class CooldownCannotBeZero(ConfigurationError):
    default_message = "Cooldown cannot be zero"
