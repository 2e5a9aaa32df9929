from flask import Flask, jsonify, request

from bread.chain.node import Node
from bread.config import (
    API_PORT,
    BATCH_MINTER_ADDRESS,
    EVENT_FEED_DEFAULT_LIMIT,
    EVENT_FEED_MAX_LIMIT,
    OWNER_ADDRESS,
    PAUSE_ADDRESS,
)
from bread.economics import format_bread
from bread.token.bread import BuidlGuidlBread
from bread.token.errors import BreadError, InvalidTransactionError
from bread.util.address import is_valid_address, short
from bread.util.log import log_info, log_success, log_warn
from bread.wallet.transaction import Transaction
from bread.wallet.wallet import Wallet

app = Flask(__name__)
token = BuidlGuidlBread(OWNER_ADDRESS, BATCH_MINTER_ADDRESS, PAUSE_ADDRESS)
node = Node(token)
PORT = API_PORT

log_info(
    f"[HTTP] Token {token.symbol} owner={short(token.owner)} "
    f"batch_minter={short(token.batch_minter_address)} pause={short(token.pause_address)}"
)


@app.errorhandler(BreadError)
def handle_bread_error(exc):
    return jsonify(exc.to_json()), exc.status_code


@app.route("/token")
def route_token():
    return jsonify(token.info())


@app.route("/balance")
def route_balance():
    address = request.args.get("address")
    if not address:
        return jsonify({"error": "address is required"}), 400
    if not is_valid_address(address):
        return jsonify({"error": "invalid address"}), 400

    balance = token.balance_of(address)
    return jsonify({
        "address": address.lower(),
        "balance": balance,
        "formatted": format_bread(balance),
        "symbol": token.symbol,
    })


@app.route("/rate_limits")
def route_rate_limits():
    return jsonify(token.rate_limits())


@app.route("/events")
def route_events():
    """
    Event history, newest first.
    Optional params:
    - name: event name (BatchMint, OwnerMint, BatchBurn, Transfer, ...)
    - address: only events with this address among their args
    - limit: max events to return (default 50, max 200)
    """
    name = (request.args.get("name") or "").strip() or None
    address = (request.args.get("address") or "").strip() or None
    try:
        limit = max(1, min(EVENT_FEED_MAX_LIMIT, int(request.args.get("limit", EVENT_FEED_DEFAULT_LIMIT))))
    except (TypeError, ValueError):
        limit = EVENT_FEED_DEFAULT_LIMIT

    return jsonify({
        "events": node.blockchain.events(name=name, address=address, limit=limit),
        "height": node.blockchain.height,
    })


@app.route("/blockchain")
def route_blockchain():
    return jsonify(node.blockchain.to_json())


@app.route("/transactions/<txid>")
def route_transaction_detail(txid):
    found = node.blockchain.find_transaction(txid)
    if not found:
        return jsonify({"error": "transaction not found", "id": txid, "status": "unknown"}), 404

    block, transaction_json = found
    return jsonify({
        "id": txid,
        "status": "confirmed",
        "block_number": block.number,
        "block_hash": block.hash,
        "timestamp": block.timestamp,
        "confirmations": node.blockchain.height - block.number,
        "transaction": transaction_json,
        "events": block.events,
    })


@app.route("/transact", methods=["POST"])
def route_transact():
    transaction_json = request.get_json(silent=True)
    if not isinstance(transaction_json, dict):
        raise InvalidTransactionError("Expected a JSON transaction body")

    transaction = Transaction.from_json(transaction_json)
    log_info(f"[TX] Submitting {transaction.method} id={transaction.id[:8]}")
    block = node.submit(transaction)
    log_success(f"[TX] {transaction.id[:8]} confirmed in block {block.number}")

    return jsonify({
        "id": transaction.id,
        "status": "confirmed",
        "block_number": block.number,
        "block_hash": block.hash,
        "timestamp": block.timestamp,
        "events": block.events,
    })


@app.route("/wallet/create", methods=["POST"])
def route_wallet_create():
    """
    Create a standalone key pair and return it. Nothing is stored server-side.
    """
    new_wallet = Wallet(token)
    log_info(f"[WALLET] Created standalone wallet {short(new_wallet.address)}")
    return jsonify({
        "address": new_wallet.address,
        "public_key": new_wallet.public_key,
        "private_key": new_wallet.private_key_hex(),
    })


@app.route("/wallet/import", methods=["POST"])
def route_wallet_import():
    """
    Derive the address and balance for a hex or PEM private key. The key is not echoed back.
    """
    body = request.get_json(silent=True) or {}
    private_key = body.get("private_key")
    if not private_key:
        return jsonify({"error": "private_key is required"}), 400

    try:
        imported_wallet = Wallet.from_private_key(private_key, token)
    except ValueError as exc:
        log_warn(f"[WALLET] Import rejected: {exc}")
        return jsonify({"error": str(exc)}), 400

    return jsonify({
        "address": imported_wallet.address,
        "public_key": imported_wallet.public_key,
        "balance": imported_wallet.balance,
    })


if __name__ == '__main__':
    app.run(port=PORT)
