import time
import uuid

from bread.token.errors import InvalidTransactionError
from bread.wallet.wallet import Wallet


# Methods a signed call may invoke on the token, with their argument names.
CALLABLE_METHODS = {
    "batch_mint": ("recipients", "amounts"),
    "batch_burn": ("targets", "amounts"),
    "complete_batch_minting_period": (),
    "owner_mint": ("to", "amount"),
    "pause_minting": (),
    "transfer_ownership": ("new_owner",),
    "set_batch_minter_address": ("new_address",),
    "set_pause_address": ("new_address",),
    "set_batch_mint_limit": ("new_limit",),
    "set_batch_mint_cooldown": ("new_cooldown",),
    "set_owner_mint_limit": ("new_limit",),
    "set_owner_mint_cooldown": ("new_cooldown",),
    "transfer": ("to", "amount"),
    "approve": ("spender", "amount"),
    "transfer_from": ("owner", "to", "amount"),
}


class Transaction:
    """
    A signed request to run one token method as the signing wallet's address.
    """
    def __init__(self, sender_wallet=None, method=None, args=None, id=None, input=None):
        self.id = id or uuid.uuid4().hex
        self.method = method
        self.args = dict(args or {})
        self.input = input or self.create_input(sender_wallet)

    def payload(self, timestamp):
        return {
            "id": self.id,
            "method": self.method,
            "args": self.args,
            "timestamp": timestamp,
        }

    def create_input(self, sender_wallet):
        if sender_wallet is None:
            raise InvalidTransactionError("A sender wallet is required to sign a transaction")
        timestamp = time.time_ns()
        return {
            "timestamp": timestamp,
            "address": sender_wallet.address,
            "public_key": sender_wallet.public_key,
            "signature": sender_wallet.sign(self.payload(timestamp)),
        }

    @property
    def sender(self):
        return self.input["address"]

    def to_json(self):
        return {
            "id": self.id,
            "method": self.method,
            "args": self.args,
            "input": self.input,
        }

    @staticmethod
    def from_json(transaction_json):
        if not isinstance(transaction_json, dict):
            raise InvalidTransactionError("Malformed transaction: expected an object")
        for key in ("id", "method"):
            if not isinstance(transaction_json.get(key), str) or not transaction_json[key]:
                raise InvalidTransactionError(f"Malformed transaction: {key} must be a non-empty string")

        try:
            return Transaction(
                method=transaction_json["method"],
                args=transaction_json.get("args") or {},
                id=transaction_json["id"],
                input=transaction_json["input"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTransactionError(f"Malformed transaction: {exc}")

    @staticmethod
    def is_valid_transaction(transaction):
        """
        Validate a transaction envelope:
        - the method is one the token exposes, with exactly its arguments;
        - the address is the one derived from the public key;
        - the signature covers the id, method, args and timestamp.
        """
        expected_args = CALLABLE_METHODS.get(transaction.method)
        if expected_args is None:
            raise InvalidTransactionError(f"Unknown method: {transaction.method}")

        if not isinstance(transaction.args, dict) or set(transaction.args) != set(expected_args):
            raise InvalidTransactionError(
                f"Invalid arguments for {transaction.method}",
                expected=list(expected_args),
                got=sorted(transaction.args),
            )

        tx_input = transaction.input
        if not isinstance(tx_input, dict):
            raise InvalidTransactionError("Transaction input must be an object")
        for key in ("timestamp", "address", "public_key", "signature"):
            if key not in tx_input:
                raise InvalidTransactionError(f"Transaction input is missing {key}")

        try:
            derived = Wallet.address_from_public_key(tx_input["public_key"])
        except (ValueError, TypeError):
            raise InvalidTransactionError("Invalid public key")
        if derived != str(tx_input["address"]).lower():
            raise InvalidTransactionError("Address does not match public key")

        if not Wallet.verify(
            tx_input["public_key"],
            transaction.payload(tx_input["timestamp"]),
            tx_input["signature"],
        ):
            raise InvalidTransactionError("Invalid signature")
