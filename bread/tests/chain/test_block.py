import pytest

from bread.chain.block import Block, GENESIS_DATA


TRANSACTION = {"id": "tx-1", "method": "pause_minting", "args": {}, "input": {}}
EVENTS = [{"name": "MintingPaused", "args": {"pause_end_time": 86400}}]


@pytest.fixture
def last_block():
    return Block.genesis()


@pytest.fixture
def block(last_block):
    return Block.create_block(last_block, 100, TRANSACTION, EVENTS)


def test_create_block(last_block, block):
    assert isinstance(block, Block)
    assert block.number == 1
    assert block.timestamp == 100
    assert block.last_hash == last_block.hash
    assert block.transaction == TRANSACTION
    assert block.events == EVENTS
    assert block.hash.startswith("0x")


def test_genesis():
    genesis = Block.genesis()

    assert isinstance(genesis, Block)
    for key, value in GENESIS_DATA.items():
        assert getattr(genesis, key) == value


def test_block_json(block):
    assert Block.from_json(block.to_json()) == block


def test_is_valid_block(last_block, block):
    Block.is_valid_block(last_block, block)


def test_is_valid_block_bad_number(last_block, block):
    block.number = 5

    with pytest.raises(Exception, match='Block number must follow'):
        Block.is_valid_block(last_block, block)


def test_is_valid_block_bad_last_hash(last_block, block):
    block.last_hash = 'evil_last_hash'

    with pytest.raises(Exception, match='last_hash must be correct'):
        Block.is_valid_block(last_block, block)


def test_is_valid_block_timestamp_backwards(block):
    next_block = Block.create_block(block, block.timestamp - 1, TRANSACTION, [])

    with pytest.raises(Exception, match='must not go backwards'):
        Block.is_valid_block(block, next_block)


def test_is_valid_block_tampered_events(last_block, block):
    block.events = [{"name": "MintingPaused", "args": {"pause_end_time": 1}}]

    with pytest.raises(Exception, match='The block hash must be correct'):
        Block.is_valid_block(last_block, block)
