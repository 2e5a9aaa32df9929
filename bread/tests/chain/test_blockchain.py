import pytest

from bread.chain.block import GENESIS_DATA
from bread.chain.blockchain import Blockchain

USER1 = "0x" + "11" * 20
USER2 = "0x" + "22" * 20


def transaction(id):
    return {"id": id, "method": "batch_mint", "args": {}, "input": {}}


def mint_events(user, amount):
    return [
        {"name": "Transfer", "args": {"from": "0x" + "0" * 40, "to": user, "value": amount}},
        {"name": "BatchMint", "args": {"user": user, "amount": amount}},
    ]


@pytest.fixture
def blockchain():
    blockchain = Blockchain()
    blockchain.add_block(10, transaction("tx-1"), mint_events(USER1, 5))
    blockchain.add_block(20, transaction("tx-2"), mint_events(USER2, 7))
    blockchain.add_block(30, transaction("tx-3"), [])
    return blockchain


def test_blockchain_instance():
    blockchain = Blockchain()

    assert blockchain.chain[0].hash == GENESIS_DATA['hash']
    assert blockchain.height == 0


def test_add_block():
    blockchain = Blockchain()
    block = blockchain.add_block(10, transaction("tx-1"), [])

    assert blockchain.chain[-1] == block
    assert block.number == 1
    assert len(blockchain) == 2


def test_is_valid_chain(blockchain):
    Blockchain.is_valid_chain(blockchain.chain)


def test_is_valid_chain_bad_genesis(blockchain):
    blockchain.chain[0].hash = 'evil_hash'

    with pytest.raises(Exception, match='genesis block must be valid'):
        Blockchain.is_valid_chain(blockchain.chain)


def test_is_valid_chain_tampered_block(blockchain):
    blockchain.chain[2].events = []

    with pytest.raises(Exception, match='hash must be correct'):
        Blockchain.is_valid_chain(blockchain.chain)


def test_is_valid_transaction_chain_duplicate(blockchain):
    blockchain.add_block(40, transaction("tx-1"), [])

    with pytest.raises(Exception, match='is not unique'):
        Blockchain.is_valid_transaction_chain(blockchain.chain)


def test_is_valid_transaction_chain_missing_transaction(blockchain):
    blockchain.add_block(40, None, [])

    with pytest.raises(Exception, match='has no transaction'):
        Blockchain.is_valid_transaction_chain(blockchain.chain)


def test_blockchain_json(blockchain):
    restored = Blockchain.from_json(blockchain.to_json())

    assert restored.chain == blockchain.chain


def test_find_transaction(blockchain):
    block, transaction_json = blockchain.find_transaction("tx-2")

    assert block.number == 2
    assert transaction_json["id"] == "tx-2"
    assert blockchain.has_transaction("tx-3")
    assert blockchain.find_transaction("missing") is None


def test_events_newest_first(blockchain):
    entries = blockchain.events()

    assert [entry["block_number"] for entry in entries] == [2, 2, 1, 1]
    assert entries[0]["log_index"] == 0
    assert entries[0]["transaction_id"] == "tx-2"
    assert entries[0]["timestamp"] == 20


def test_events_filters(blockchain):
    batch_mints = blockchain.events(name="BatchMint")
    assert [entry["args"]["user"] for entry in batch_mints] == [USER2, USER1]

    for_user1 = blockchain.events(address=USER1.upper().replace("0X", "0x"))
    assert len(for_user1) == 2
    assert all(entry["block_number"] == 1 for entry in for_user1)

    assert len(blockchain.events(limit=3)) == 3
