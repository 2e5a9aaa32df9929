from bread.util.crypto_hash import crypto_hash


GENESIS_DATA = {
    "number": 0,
    "timestamp": 0,
    "last_hash": "genesis_last_hash",
    "hash": "genesis_hash",
    "transaction": None,
    "events": [],
}


class Block:
    """
    One applied token call: the signed transaction, the events it emitted and
    the time it was applied at. Blocks link to their predecessor by hash.
    """
    def __init__(self, number, timestamp, last_hash, hash, transaction, events):
        self.number = number
        self.timestamp = timestamp
        self.last_hash = last_hash
        self.hash = hash
        self.transaction = transaction
        self.events = events

    def __repr__(self):
        return (
            'Block('
            f'number: {self.number}, '
            f'timestamp: {self.timestamp}, '
            f'last_hash: {self.last_hash}, '
            f'hash: {self.hash}, '
            f'transaction: {self.transaction}, '
            f'events: {self.events})'
        )

    def __eq__(self, other):
        return isinstance(other, Block) and self.__dict__ == other.__dict__

    def to_json(self):
        return dict(self.__dict__)

    @staticmethod
    def from_json(block_json):
        return Block(**block_json)

    @staticmethod
    def compute_hash(number, timestamp, last_hash, transaction, events):
        return crypto_hash(number, timestamp, last_hash, transaction, events)

    @staticmethod
    def create_block(last_block, timestamp, transaction, events):
        """
        Build the block that follows `last_block`.
        """
        number = last_block.number + 1
        last_hash = last_block.hash
        hash = Block.compute_hash(number, timestamp, last_hash, transaction, events)

        return Block(number, timestamp, last_hash, hash, transaction, events)

    @staticmethod
    def genesis():
        return Block(**GENESIS_DATA)

    @staticmethod
    def is_valid_block(last_block, block):
        """
        Validate a block against its predecessor:
        - numbers must be consecutive;
        - last_hash must point at the predecessor;
        - time must not go backwards;
        - the hash must match the block's contents.
        """
        if block.number != last_block.number + 1:
            raise Exception(f'Block number must follow {last_block.number}')

        if block.last_hash != last_block.hash:
            raise Exception('The block last_hash must be correct')

        if block.timestamp < last_block.timestamp:
            raise Exception('The block timestamp must not go backwards')

        reconstructed_hash = Block.compute_hash(
            block.number,
            block.timestamp,
            block.last_hash,
            block.transaction,
            block.events,
        )

        if block.hash != reconstructed_hash:
            raise Exception('The block hash must be correct')
