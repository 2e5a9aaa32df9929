import os

SECONDS = 1
MINUTES = 60 * SECONDS
HOURS = 60 * MINUTES

# Token identity
TOKEN_NAME = "BuidlGuidl Bread"
TOKEN_SYMBOL = "BGBRD"
DECIMALS = 18
UNITS_PER_TOKEN = 10 ** DECIMALS

ZERO_ADDRESS = "0x" + "0" * 40

# Batch minter channel (explicit period completion)
BATCH_MINT_LIMIT = 420 * UNITS_PER_TOKEN
BATCH_MINT_COOLDOWN = 23 * HOURS
MAX_BATCH_SIZE = 100

# Owner channel (period resets on the next mint after cooldown)
OWNER_MINT_LIMIT = 10_000 * UNITS_PER_TOKEN
OWNER_MINT_COOLDOWN = 24 * HOURS

# Emergency pause
PAUSE_DURATION = 24 * HOURS

# Deployment roles: initialOwner, batchMinterAddress, pauseAddress
OWNER_ADDRESS = os.environ.get(
    "BREAD_OWNER_ADDRESS", "0x8c4f1FB34565650e176d2cd2761B3be10Ca8d35b"
)
BATCH_MINTER_ADDRESS = os.environ.get(
    "BREAD_BATCH_MINTER_ADDRESS", "0xaC9A4652dF3878d24f35A6a6c022544aeE9748Ff"
)
PAUSE_ADDRESS = os.environ.get(
    "BREAD_PAUSE_ADDRESS", "0x38c772B96D73733F425746bd368B4B4435A37967"
)

# HTTP API
API_PORT = int(os.environ.get("API_PORT", 5000))
API_URL = os.environ.get("BREAD_API_URL", f"http://localhost:{API_PORT}")
EVENT_FEED_DEFAULT_LIMIT = 50
EVENT_FEED_MAX_LIMIT = 200

# Logging: debug | info | warn | error
LOG_LEVEL = os.environ.get("BREAD_LOG_LEVEL", "info")
