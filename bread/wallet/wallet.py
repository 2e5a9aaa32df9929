import hashlib
import json

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)


class Wallet:
    """
    A secp256k1 key pair identifying one account on the token.

    The address is derived from the public key, so a signature checked against
    the public key also proves which address made a call.
    """
    def __init__(self, token=None, private_key=None):
        self.token = token
        if private_key:
            self.private_key = private_key
        else:
            self.private_key = ec.generate_private_key(ec.SECP256K1(), default_backend())
        self.public_key_obj = self.private_key.public_key()
        self.public_key = self.public_key_hex()
        self.address = Wallet.address_from_public_key(self.public_key)

    @property
    def balance(self):
        if not self.token:
            return 0
        return self.token.balance_of(self.address)

    def sign(self, data):
        return decode_dss_signature(
            self.private_key.sign(
                json.dumps(data, sort_keys=True).encode("utf-8"),
                ec.ECDSA(hashes.SHA256())
            ))

    def public_key_hex(self):
        bytes_uncompressed = self.public_key_obj.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint
        )
        return bytes_uncompressed.hex()

    def private_key_hex(self):
        return self.private_key.private_numbers().private_value.to_bytes(32, "big").hex()

    @staticmethod
    def address_from_public_key(public_key: str) -> str:
        # Last 20 bytes of the key hash, 0x-prefixed like an Ethereum address.
        digest = hashlib.sha256(bytes.fromhex(public_key)).hexdigest()
        return "0x" + digest[-40:]

    @classmethod
    def from_private_key(cls, private_key_hex: str, token=None):
        """
        Load a wallet from a PEM string or a hex-encoded private scalar.
        """
        errors = []
        private_key = None
        key_str = private_key_hex if isinstance(private_key_hex, str) else private_key_hex.decode()

        try:
            private_key = serialization.load_pem_private_key(
                key_str.encode("utf-8"),
                password=None,
                backend=default_backend()
            )
        except (ValueError, TypeError) as exc:
            errors.append(exc)

        if private_key is None:
            try:
                int_key = int(key_str.strip().removeprefix("0x"), 16)
                private_key = ec.derive_private_key(int_key, ec.SECP256K1(), default_backend())
            except (ValueError, TypeError) as exc:
                errors.append(exc)

        if private_key is None:
            last_error = errors[-1] if errors else "unknown error"
            raise ValueError(f"Invalid private key: {last_error}")
        return cls(token=token, private_key=private_key)

    @staticmethod
    def verify(public_key, data, signature):
        """
        Check a (r, s) signature over `data` against a hex uncompressed public key.
        """
        try:
            deserialized_public_key = ec.EllipticCurvePublicKey.from_encoded_point(
                ec.SECP256K1(),
                bytes.fromhex(public_key)
            )
            (r, s) = signature
            deserialized_public_key.verify(
                encode_dss_signature(int(r), int(s)),
                json.dumps(data, sort_keys=True).encode("utf-8"),
                ec.ECDSA(hashes.SHA256())
            )
            return True
        except (InvalidSignature, ValueError, TypeError):
            return False
