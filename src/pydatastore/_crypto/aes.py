"""AES-256-CBC encryption for store files.

The file body is the hex-encoded ciphertext of the JSON text. The default
IV is sixteen zero bytes, which keeps files readable by other
implementations of the same format. With ``random_iv`` a fresh IV is
generated per write and stored as the first block of the ciphertext.
"""

from __future__ import annotations

import secrets

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from pydatastore.exceptions import DataStoreCryptoError

IV_SIZE = 16
_ZERO_IV = b"\x00" * IV_SIZE


def _parse_hex_bytes(value: str, *, name: str) -> bytes:
    text = value.strip()
    if not text:
        raise DataStoreCryptoError(f"{name} is empty")
    if len(text) % 2 != 0:
        raise DataStoreCryptoError(f"{name} hex length must be even (got {len(text)})")
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise DataStoreCryptoError(f"{name} must be hex-encoded") from exc


def aes_encrypt_hex(plaintext: str, key: bytes, *, random_iv: bool = False) -> str:
    """AES-256-CBC encrypt, returning lowercase hex.

    Parameters
    ----------
    plaintext : str
        UTF-8 string to encrypt.
    key : bytes
        32-byte key (see :func:`pydatastore._crypto.keys.normalize_key`).
    random_iv : bool
        Use a random IV and prefix it to the ciphertext instead of the
        constant zero IV.

    Returns
    -------
    str
        Lowercase hex ciphertext.

    Raises
    ------
    DataStoreCryptoError
        If encryption fails.
    """
    try:
        iv = secrets.token_bytes(IV_SIZE) if random_iv else _ZERO_IV
        padder = padding.PKCS7(128).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        ct = encryptor.update(padded) + encryptor.finalize()
        if random_iv:
            ct = iv + ct
        return ct.hex()
    except Exception as exc:
        raise DataStoreCryptoError(f"AES encryption failed: {exc}") from exc


def aes_decrypt_utf8(cipher_hex: str, key: bytes, *, random_iv: bool = False) -> str:
    """Decrypt hex produced by :func:`aes_encrypt_hex` back to text.

    Raises
    ------
    DataStoreCryptoError
        If the content is not hex, the key is wrong, or the padding or
        UTF-8 decoding fails.
    """
    try:
        ct = _parse_hex_bytes(cipher_hex, name="AES ciphertext")
        iv = _ZERO_IV
        if random_iv:
            if len(ct) < 2 * IV_SIZE:
                raise DataStoreCryptoError("AES ciphertext is too short to carry an IV")
            iv, ct = ct[:IV_SIZE], ct[IV_SIZE:]
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ct) + decryptor.finalize()
        unpadder = padding.PKCS7(128).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode("utf-8")
    except DataStoreCryptoError:
        raise
    except Exception as exc:
        raise DataStoreCryptoError(f"AES decryption failed: {exc}") from exc
