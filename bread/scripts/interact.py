"""
Walk through the token's issuance rules against a running API.

Start the API with role addresses matching the keys below, e.g.

    BREAD_OWNER_ADDRESS=... BREAD_BATCH_MINTER_ADDRESS=... BREAD_PAUSE_ADDRESS=... \
        python -m bread.app

then run

    BREAD_OWNER_KEY=<hex> BREAD_BATCH_MINTER_KEY=<hex> BREAD_PAUSE_KEY=<hex> \
        python -m bread.scripts.interact

Pass --pause to finish by pausing issuance for 24 hours.
"""

import argparse
import os
import sys

import requests

from bread.chain.blockchain import Blockchain
from bread.config import API_URL
from bread.economics import format_bread, parse_bread
from bread.util.log import log_error, log_info, log_success, log_warn
from bread.wallet.transaction import Transaction
from bread.wallet.wallet import Wallet

TIMEOUT = 5


def get(path, **params):
    resp = requests.get(f"{API_URL}{path}", params=params, timeout=TIMEOUT)
    resp.raise_for_status()
    return resp.json()


def transact(wallet, method, **args):
    """
    Sign and submit a call. Returns (ok, response_json).
    """
    transaction = Transaction(wallet, method, args)
    resp = requests.post(f"{API_URL}/transact", json=transaction.to_json(), timeout=TIMEOUT)
    return resp.ok, resp.json()


def audit_chain():
    """
    Rebuild the served block log locally and check its hash links and
    transaction ids. Raises when the log does not verify.
    """
    blockchain = Blockchain.from_json(get("/blockchain"))
    Blockchain.is_valid_chain(blockchain.chain)
    return blockchain


def load_wallet(env_var):
    key = os.environ.get(env_var)
    if not key:
        log_error(f"{env_var} is not set")
        sys.exit(1)
    return Wallet.from_private_key(key)


def show_rate_limits():
    limits = get("/rate_limits")
    batch = limits["batch"]
    owner = limits["owner"]
    log_info(
        f"  batch: minted={format_bread(batch['minted_in_period'])} "
        f"remaining={format_bread(batch['remaining_amount'])} "
        f"cooldown={batch['remaining_cooldown']}s active={batch['minting_occurred_this_period']}"
    )
    log_info(
        f"  owner: minted={format_bread(owner['minted_in_period'])} "
        f"remaining={format_bread(owner['remaining_amount'])} "
        f"cooldown={owner['remaining_cooldown']}s"
    )
    log_info(f"  paused={limits['paused']} pause_end_time={limits['pause_end_time']}")


def expect(ok, response, should_succeed, label):
    if ok == should_succeed:
        detail = "" if ok else f" ({response.get('error')})"
        log_success(f"  {label}: {'ok' if ok else 'rejected as expected'}{detail}")
    else:
        log_warn(f"  {label}: unexpected result {response}")


def main():
    parser = argparse.ArgumentParser(description="BuidlGuidl Bread interaction demo")
    parser.add_argument("--pause", action="store_true", help="Pause issuance at the end")
    args = parser.parse_args()

    owner = load_wallet("BREAD_OWNER_KEY")
    minter = load_wallet("BREAD_BATCH_MINTER_KEY")
    pauser = load_wallet("BREAD_PAUSE_KEY")
    user1 = Wallet()
    user2 = Wallet()

    info = get("/token")
    log_info(f"{info['name']} ({info['symbol']}) at {API_URL}")
    log_info(f"  total supply: {format_bread(info['total_supply'])}")
    log_info(f"  batch mint limit: {format_bread(info['batch_mint_limit'])} every {info['batch_mint_cooldown']}s")
    log_info(f"  owner mint limit: {format_bread(info['owner_mint_limit'])} every {info['owner_mint_cooldown']}s")

    log_info("Batch minting:")
    ok, resp = transact(
        minter, "batch_mint",
        recipients=[user1.address, user2.address],
        amounts=[str(parse_bread("50")), str(parse_bread("75"))],
    )
    expect(ok, resp, True, "mint 50 + 75")
    for user in (user1, user2):
        balance = get("/balance", address=user.address)
        log_info(f"  {user.address}: {balance['formatted']} {balance['symbol']}")
    show_rate_limits()

    log_info("Rate limit enforcement:")
    ok, resp = transact(minter, "batch_mint", recipients=[user1.address], amounts=[str(parse_bread("300"))])
    expect(ok, resp, False, "mint 300 more in the same period")

    log_info("Owner functions:")
    ok, resp = transact(owner, "set_batch_mint_limit", new_limit=str(parse_bread("500")))
    expect(ok, resp, True, "raise batch mint limit to 500")
    ok, resp = transact(owner, "owner_mint", to=user1.address, amount=str(parse_bread("1000")))
    expect(ok, resp, True, "owner mint 1000")

    log_info("Batch burning:")
    ok, resp = transact(
        minter, "batch_burn",
        targets=[user1.address, user2.address],
        amounts=[str(parse_bread("10")), str(parse_bread("15"))],
    )
    expect(ok, resp, True, "burn 10 + 15")

    log_info("Access control:")
    ok, resp = transact(user1, "batch_mint", recipients=[user2.address], amounts=[str(parse_bread("10"))])
    expect(ok, resp, False, "batch mint from a random wallet")
    ok, resp = transact(user1, "set_batch_mint_limit", new_limit=str(parse_bread("200")))
    expect(ok, resp, False, "owner setter from a random wallet")

    log_info("Period completion:")
    ok, resp = transact(minter, "complete_batch_minting_period")
    expect(ok, resp, True, "complete period")
    ok, resp = transact(minter, "batch_mint", recipients=[user1.address], amounts=[str(parse_bread("1"))])
    expect(ok, resp, False, "mint during cooldown")
    show_rate_limits()

    if args.pause:
        log_info("Pause:")
        ok, resp = transact(pauser, "pause_minting")
        expect(ok, resp, True, "pause issuance")
        ok, resp = transact(owner, "owner_mint", to=user1.address, amount=str(parse_bread("1")))
        expect(ok, resp, False, "owner mint while paused")
        show_rate_limits()

    log_info("Block log audit:")
    try:
        blockchain = audit_chain()
    except Exception as exc:
        log_error(f"  block log failed verification: {exc}")
        sys.exit(1)
    log_success(f"  {blockchain.height} blocks verified")

    supply = get("/token")["total_supply"]
    log_success(f"Done. Total supply: {format_bread(supply)} {info['symbol']}")


if __name__ == "__main__":
    try:
        main()
    except requests.RequestException as exc:
        log_error(f"API request failed: {exc}")
        sys.exit(1)
