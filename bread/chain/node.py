import threading

from bread.chain.blockchain import Blockchain
from bread.token.errors import BreadError, InvalidTransactionError
from bread.util.address import short
from bread.util.log import log_debug, log_success, log_warn
from bread.wallet.transaction import Transaction


INTEGER_ARGS = {"amount", "new_limit", "new_cooldown"}
INTEGER_LIST_ARGS = {"amounts"}


def _to_int(value):
    if isinstance(value, bool):
        raise InvalidTransactionError(f"Expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        try:
            return int(value.strip())
        except ValueError as exc:
            raise InvalidTransactionError(f"Expected an integer, got {value[:40]!r}: {exc}")
    raise InvalidTransactionError(f"Expected an integer, got {value!r}")


def coerce_args(args):
    """
    Accept decimal strings for integer arguments so clients can send
    amounts larger than a JSON number safely holds.
    """
    coerced = {}
    for key, value in args.items():
        if key in INTEGER_ARGS:
            coerced[key] = _to_int(value)
        elif key in INTEGER_LIST_ARGS:
            if not isinstance(value, list):
                raise InvalidTransactionError(f"{key} must be a list")
            coerced[key] = [_to_int(item) for item in value]
        elif key in ("recipients", "targets") and not isinstance(value, list):
            raise InvalidTransactionError(f"{key} must be a list")
        else:
            coerced[key] = value
    return coerced


class Node:
    """
    Applies signed calls to the token one at a time.

    A call either runs to completion and is recorded as a block carrying the
    events it emitted, or raises and leaves both the token and the chain as
    they were. The clock is read once per call, so the block timestamp and
    any timestamp the call records agree. Events are drained from the
    token once they are written into the block.
    """
    def __init__(self, token, blockchain=None):
        self.token = token
        self.blockchain = blockchain or Blockchain()
        self.lock = threading.Lock()

    def submit(self, transaction):
        with self.lock:
            Transaction.is_valid_transaction(transaction)
            if self.blockchain.has_transaction(transaction.id):
                raise InvalidTransactionError(f"Transaction {transaction.id} was already applied")

            sender = transaction.sender
            args = coerce_args(transaction.args)
            events_before = len(self.token.event_log)
            timestamp = int(self.token.clock())

            try:
                with self.token.frozen_clock(timestamp):
                    getattr(self.token, transaction.method)(sender, **args)
            except BreadError as exc:
                del self.token.event_log[events_before:]
                log_warn(
                    f"[NODE] Rejected {transaction.method} from {short(sender)}: "
                    f"{exc.code} {exc.details or ''}"
                )
                raise

            emitted = [event.to_json() for event in self.token.event_log[events_before:]]
            del self.token.event_log[events_before:]
            block = self.blockchain.add_block(timestamp, transaction.to_json(), emitted)

        log_success(
            f"[NODE] Applied {transaction.method} from {short(sender)} "
            f"block={block.number} events={len(emitted)}"
        )
        for event in emitted:
            log_debug(f"[EVENT] {event['name']} {event['args']}")
        return block
