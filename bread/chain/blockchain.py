from bread.chain.block import Block
from bread.token.events import Event


class Blockchain:
    """
    Append-only record of applied token calls, in the order they were applied.
    """
    def __init__(self):
        self.chain = [Block.genesis()]

    def add_block(self, timestamp, transaction, events):
        block = Block.create_block(self.chain[-1], timestamp, transaction, events)
        self.chain.append(block)
        return block

    def __repr__(self):
        return f'Blockchain: {self.chain}'

    def __len__(self):
        return len(self.chain)

    @property
    def height(self):
        return len(self.chain) - 1

    def to_json(self):
        return list(map(lambda block: block.to_json(), self.chain))

    @staticmethod
    def from_json(chain_json):
        blockchain = Blockchain()
        blockchain.chain = list(
            map(lambda block_json: Block.from_json(block_json), chain_json)
        )
        return blockchain

    def has_transaction(self, transaction_id):
        return self.find_transaction(transaction_id) is not None

    def find_transaction(self, transaction_id):
        """
        Return (block, transaction_json) for an applied call, or None.
        """
        for block in self.chain:
            if block.transaction and block.transaction.get("id") == transaction_id:
                return block, block.transaction
        return None

    def events(self, name=None, address=None, limit=None):
        """
        Walk the chain newest first and collect emitted events, optionally
        filtered by event name and by an address appearing in the event args.
        """
        address = (address or "").lower()
        entries = []
        for block in reversed(self.chain):
            for index, event in enumerate(block.events):
                if name and event.get("name") != name:
                    continue
                if address and not Event.from_json(event).involves(address):
                    continue
                entries.append({
                    "name": event.get("name"),
                    "args": event.get("args"),
                    "block_number": block.number,
                    "block_hash": block.hash,
                    "log_index": index,
                    "timestamp": block.timestamp,
                    "transaction_id": (block.transaction or {}).get("id"),
                })
                if limit and len(entries) >= limit:
                    return entries
        return entries

    @staticmethod
    def is_valid_chain(chain):
        """
        Validate the entire chain:
        - Must start with the genesis block.
        - Each block must be valid and linked.
        - Every transaction id is applied at most once.
        """
        if chain[0] != Block.genesis():
            raise Exception('The genesis block must be valid')

        for i in range(1, len(chain)):
            Block.is_valid_block(chain[i - 1], chain[i])

        Blockchain.is_valid_transaction_chain(chain)

    @staticmethod
    def is_valid_transaction_chain(chain):
        transaction_ids = set()
        for block in chain[1:]:
            if not block.transaction:
                raise Exception(f'Block {block.number} has no transaction')

            transaction_id = block.transaction.get("id")
            if transaction_id in transaction_ids:
                raise Exception(f'Transaction: {transaction_id} is not unique')
            transaction_ids.add(transaction_id)
