"""AES-GCM encryption and ECDH (NIST P-256) key agreement."""

from __future__ import annotations

import secrets
from enum import Enum

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

__all__ = [
    "AES_GCM_TAG_SIZE",
    "AES_GCM_IV_SIZE",
    "AES_GCM_KEY_SIZE",
    "EncryptionResult",
    "ECDHResult",
    "EncryptionError",
    "ECDHError",
    "encryption_result_to_string",
    "ecdh_result_to_string",
    "encrypt_data",
    "decrypt_data",
    "generate_ecdh_keypair",
    "compute_ecdh_shared_secret",
    "derive_key_from_shared_secret",
    "generate_random_iv",
]

AES_GCM_TAG_SIZE = 16
AES_GCM_IV_SIZE = 12
AES_GCM_KEY_SIZE = 32

_VALID_KEY_SIZES = (16, 24, 32)
_PRIVATE_KEY_SIZE = 32
_HKDF_SALT = b"fenris-salt"
_HKDF_INFO = b"AES-Key"
_CURVE = ec.SECP256R1()


class EncryptionResult(Enum):
    """Outcome of an encryption or decryption operation."""

    SUCCESS = 0
    INVALID_KEY_SIZE = 1
    INVALID_IV_SIZE = 2
    INVALID_DATA = 3
    ENCRYPTION_FAILED = 4
    DECRYPTION_FAILED = 5
    IV_GENERATION_FAILED = 6


class ECDHResult(Enum):
    """Outcome of a key agreement or key derivation operation."""

    SUCCESS = 0
    KEY_GENERATION_FAILED = 1
    SHARED_SECRET_FAILED = 2
    KEY_DERIVATION_FAILED = 3
    INVALID_KEY_SIZE = 4


_ENCRYPTION_DESCRIPTIONS = {
    EncryptionResult.SUCCESS: "success",
    EncryptionResult.INVALID_KEY_SIZE: "invalid key size",
    EncryptionResult.INVALID_IV_SIZE: "invalid initialization vector size",
    EncryptionResult.INVALID_DATA: "invalid data",
    EncryptionResult.ENCRYPTION_FAILED: "encryption operation failed",
    EncryptionResult.DECRYPTION_FAILED: "decryption operation failed",
    EncryptionResult.IV_GENERATION_FAILED: "IV generation failed",
}

_ECDH_DESCRIPTIONS = {
    ECDHResult.SUCCESS: "success",
    ECDHResult.KEY_GENERATION_FAILED: "key generation failed",
    ECDHResult.SHARED_SECRET_FAILED: "shared secret computation failed",
    ECDHResult.KEY_DERIVATION_FAILED: "key derivation failed",
    ECDHResult.INVALID_KEY_SIZE: "invalid key size",
}


def encryption_result_to_string(result: EncryptionResult) -> str:
    """Return a human-readable description of an encryption result."""
    return _ENCRYPTION_DESCRIPTIONS.get(result, "unrecognized encryption result")


def ecdh_result_to_string(result: ECDHResult) -> str:
    """Return a human-readable description of an ECDH result."""
    return _ECDH_DESCRIPTIONS.get(result, "unrecognized ECDH result")


class EncryptionError(Exception):
    """Raised when encryption, decryption or IV generation fails."""

    def __init__(self, result: EncryptionResult) -> None:
        super().__init__(encryption_result_to_string(result))
        self.result = result


class ECDHError(Exception):
    """Raised when key generation, agreement or derivation fails."""

    def __init__(self, result: ECDHResult) -> None:
        super().__init__(ecdh_result_to_string(result))
        self.result = result


def _check_key_and_iv(key: bytes, iv: bytes) -> None:
    if len(key) not in _VALID_KEY_SIZES:
        raise EncryptionError(EncryptionResult.INVALID_KEY_SIZE)
    if len(iv) != AES_GCM_IV_SIZE:
        raise EncryptionError(EncryptionResult.INVALID_IV_SIZE)


def encrypt_data(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt with AES-GCM; the result is the ciphertext followed by the tag."""
    _check_key_and_iv(key, iv)
    try:
        return AESGCM(bytes(key)).encrypt(bytes(iv), bytes(plaintext), None)
    except (ValueError, OverflowError) as exc:
        raise EncryptionError(EncryptionResult.ENCRYPTION_FAILED) from exc


def decrypt_data(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt and authenticate AES-GCM ciphertext that ends with its tag."""
    _check_key_and_iv(key, iv)
    if len(ciphertext) < AES_GCM_TAG_SIZE:
        raise EncryptionError(EncryptionResult.INVALID_DATA)
    try:
        return AESGCM(bytes(key)).decrypt(bytes(iv), bytes(ciphertext), None)
    except (InvalidTag, ValueError, OverflowError) as exc:
        raise EncryptionError(EncryptionResult.DECRYPTION_FAILED) from exc


def generate_ecdh_keypair() -> tuple[bytes, bytes]:
    """Generate a P-256 key pair.

    The private key is a 32-byte big-endian scalar; the public key is the
    65-byte uncompressed point encoding.
    """
    try:
        private_key = ec.generate_private_key(_CURVE)
        scalar = private_key.private_numbers().private_value
        public_bytes = private_key.public_key().public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.UncompressedPoint,
        )
    except (ValueError, TypeError) as exc:
        raise ECDHError(ECDHResult.KEY_GENERATION_FAILED) from exc
    return scalar.to_bytes(_PRIVATE_KEY_SIZE, "big"), public_bytes


def compute_ecdh_shared_secret(private_key: bytes, peer_public_key: bytes) -> bytes:
    """Compute the 32-byte P-256 shared secret with a peer's public key."""
    try:
        if len(private_key) != _PRIVATE_KEY_SIZE:
            raise ValueError("private key has the wrong length")
        own_key = ec.derive_private_key(int.from_bytes(bytes(private_key), "big"), _CURVE)
        peer_key = ec.EllipticCurvePublicKey.from_encoded_point(
            _CURVE, bytes(peer_public_key)
        )
        return own_key.exchange(ec.ECDH(), peer_key)
    except (ValueError, TypeError) as exc:
        raise ECDHError(ECDHResult.SHARED_SECRET_FAILED) from exc


def derive_key_from_shared_secret(
    shared_secret: bytes, key_size: int, context: bytes = b""
) -> bytes:
    """Derive an AES key of ``key_size`` bytes from a shared secret with HKDF-SHA256."""
    if key_size not in _VALID_KEY_SIZES:
        raise ECDHError(ECDHResult.INVALID_KEY_SIZE)
    try:
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=key_size,
            salt=_HKDF_SALT,
            info=_HKDF_INFO + bytes(context),
        )
        return hkdf.derive(bytes(shared_secret))
    except (ValueError, TypeError) as exc:
        raise ECDHError(ECDHResult.KEY_DERIVATION_FAILED) from exc


def generate_random_iv() -> bytes:
    """Return a cryptographically secure random IV for AES-GCM."""
    try:
        return secrets.token_bytes(AES_GCM_IV_SIZE)
    except OSError as exc:
        raise EncryptionError(EncryptionResult.IV_GENERATION_FAILED) from exc