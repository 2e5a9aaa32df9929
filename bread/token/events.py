from dataclasses import dataclass, field
from typing import Any, Dict


TRANSFER = "Transfer"
APPROVAL = "Approval"
OWNERSHIP_TRANSFERRED = "OwnershipTransferred"
BATCH_MINT = "BatchMint"
BATCH_BURN = "BatchBurn"
OWNER_MINT = "OwnerMint"
MINTING_PAUSED = "MintingPaused"
BATCH_MINTING_PERIOD_COMPLETED = "BatchMintingPeriodCompleted"
BATCH_MINTER_ADDRESS_UPDATED = "BatchMinterAddressUpdated"
PAUSE_ADDRESS_UPDATED = "PauseAddressUpdated"
BATCH_MINT_LIMIT_UPDATED = "BatchMintLimitUpdated"
BATCH_MINT_COOLDOWN_UPDATED = "BatchMintCooldownUpdated"
OWNER_MINT_LIMIT_UPDATED = "OwnerMintLimitUpdated"
OWNER_MINT_COOLDOWN_UPDATED = "OwnerMintCooldownUpdated"


@dataclass(frozen=True)
class Event:
    name: str
    args: Dict[str, Any] = field(default_factory=dict)

    def involves(self, address: str) -> bool:
        """
        True when any string argument equals the address (case-insensitive).
        """
        if not address:
            return True
        address = address.lower()
        return any(
            isinstance(value, str) and value.lower() == address
            for value in self.args.values()
        )

    def to_json(self):
        return {"name": self.name, "args": dict(self.args)}

    @staticmethod
    def from_json(event_json):
        return Event(name=event_json["name"], args=dict(event_json.get("args") or {}))
