import os
import hmac

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac


class SecurePRNG:
    """Cryptographically secure pseudorandom number generator"""

    @staticmethod
    def generate_bytes(length=32):
        """
        Generate cryptographically secure random bytes

        Args:
            length (int): Number of bytes to generate

        Returns:
            bytes: Random bytes
        """
        if length < 0:
            raise ValueError(f"length must not be negative, got {length}")
        return os.urandom(length)


class HMAC_SHA1:
    """HMAC-SHA1 operations used for one-time code derivation"""

    @staticmethod
    def create(key):
        """
        Create a keyed HMAC-SHA1 context

        The context is single use: feed it with update() and call finalize()
        once. Use copy() on an unused context to hash several messages with
        the same key.

        Args:
            key (bytes): The key for HMAC

        Returns:
            cryptography.hazmat.primitives.hmac.HMAC: The keyed context
        """
        return crypto_hmac.HMAC(key, hashes.SHA1())

    @staticmethod
    def digest(key, message):
        """
        Compute HMAC-SHA1 of a message

        Args:
            key (bytes): The key for HMAC
            message (bytes): The message to authenticate

        Returns:
            bytes: 20-byte digest
        """
        h = HMAC_SHA1.create(key)
        h.update(message)
        return h.finalize()

    @staticmethod
    def compare(expected, actual):
        """Constant-time comparison of two str or bytes values"""
        return hmac.compare_digest(expected, actual)
