import hashlib
import json


def crypto_hash(*args) -> str:
    """
    0x-prefixed sha-256 over the canonical JSON of each argument.
    The encodings are sorted first, so argument order does not change the digest.
    """
    digest = hashlib.sha256()
    for encoded in sorted(json.dumps(arg, sort_keys=True) for arg in args):
        digest.update(encoded.encode("utf-8"))
    return "0x" + digest.hexdigest()
