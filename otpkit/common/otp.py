import logging
import re
import struct
import time

from .base32 import Base32
from .constants import (
    CODE_DIGITS,
    CODE_MODULUS,
    COUNTER_MAX,
    DEFAULT_KEY_LENGTH,
    MAX_CODE_VALUE,
    MAX_MESSAGE_LENGTH,
    TIME_STEP_SECONDS,
    VALIDATION_WINDOW,
)
from .crypto_utils import HMAC_SHA1, SecurePRNG
from .errors import ArgumentError, FormatError

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def format_code(code):
    """Render a code zero-padded to the fixed digit count"""
    return f"{code:0{CODE_DIGITS}d}"


def parse_code(candidate):
    """
    Turn a user-supplied code into an integer

    Args:
        candidate (int or str): The code as typed; surrounding whitespace is ignored

    Returns:
        int: The numeric code

    Raises:
        FormatError: If a string is not purely numeric or does not fit a 32-bit integer
    """
    if isinstance(candidate, int):
        return candidate
    if not isinstance(candidate, str):
        raise TypeError(f"code must be int or str, not {type(candidate).__name__}")

    text = candidate.strip()
    if not _DIGITS.fullmatch(text):
        raise FormatError(f"Code {candidate!r} is not numeric")
    if len(text.lstrip("0")) > len(str(MAX_CODE_VALUE)):
        raise FormatError(f"Code {candidate!r} is out of range")
    value = int(text)
    if value > MAX_CODE_VALUE:
        raise FormatError(f"Code {candidate!r} is out of range")
    return value


class OtpEngine:
    """
    HOTP (RFC 4226) and TOTP (RFC 6238) code engine

    The clock, random source and HMAC primitive are collaborators handed in
    at construction so tests can pin them. Defaults are time.time, os.urandom
    via SecurePRNG, and HMAC-SHA1 from the cryptography package. An engine
    keeps no other state and is safe to share between threads.
    """

    def __init__(self, clock=None, prng=SecurePRNG, hmac_factory=HMAC_SHA1, audit=None):
        """
        Args:
            clock (callable, optional): Returns seconds since the Unix epoch; time.time when omitted
            prng: Object with generate_bytes(length)
            hmac_factory: Object with create(key) returning a keyed HMAC context and compare(a, b)
            audit (AuditLogger, optional): Receives one record per validation
        """
        self.clock = clock
        self.prng = prng
        self.hmac_factory = hmac_factory
        self.audit = audit

    def generate_random_key(self, length=DEFAULT_KEY_LENGTH):
        """
        Generate a new secret key

        Args:
            length (int): Number of bytes, 10 (80 bits) by default

        Returns:
            bytes: Random bytes from the secure source
        """
        return self.prng.generate_bytes(length)

    def current_time_step(self):
        """Number of whole 30-second steps since the Unix epoch"""
        now = self.clock() if self.clock is not None else time.time()
        return int(now // TIME_STEP_SECONDS)

    def compute_code(self, secret, counter, modifier=None):
        """
        Derive the one-time code for a counter

        Args:
            secret (bytes or str): HMAC key, or its Base32 text form
            counter (int): Unsigned 64-bit moving factor
            modifier (str, optional): Context whose UTF-8 bytes follow the counter in the hashed message

        Returns:
            int: Code in [0, 10**6)
        """
        key = self._resolve_secret(secret)
        return self._compute(self.hmac_factory.create(key), counter, modifier)

    def generate_totp_code(self, secret, modifier=None):
        """Code for the current time step"""
        key = self._resolve_secret(secret)
        step = self.current_time_step() & COUNTER_MAX
        return self._compute(self.hmac_factory.create(key), step, modifier)

    def generate_code(self, secret, modifier=None):
        return self.generate_totp_code(secret, modifier)

    def validate_code(self, secret, candidate, modifier=None):
        """
        Check a code against the steps around the current one

        Steps from current - 2 to current + 2 are tried in order, which
        tolerates up to 60 seconds of clock skew either way.

        Args:
            secret (bytes or str): HMAC key, or its Base32 text form
            candidate (int or str): The code to check
            modifier (str, optional): Context the code was bound to

        Returns:
            bool: True if any step in the window produces the candidate
        """
        key = self._resolve_secret(secret)
        code = parse_code(candidate)
        if not 0 <= code < CODE_MODULUS:
            self._record(modifier, "validate_code failed")
            return False
        expected = format_code(code)

        current = self.current_time_step()
        keyed = self.hmac_factory.create(key)
        for delta in range(-VALIDATION_WINDOW, VALIDATION_WINDOW + 1):
            # Steps below zero wrap like an unsigned 64-bit counter
            step = (current + delta) & COUNTER_MAX
            computed = self._compute(keyed.copy(), step, modifier)
            if self.hmac_factory.compare(format_code(computed), expected):
                logger.debug("Code matched at step offset %+d", delta)
                self._record(modifier, "validate_code succeeded")
                return True

        logger.debug("Code did not match any of %d steps", 2 * VALIDATION_WINDOW + 1)
        self._record(modifier, "validate_code failed")
        return False

    def _record(self, modifier, action):
        if self.audit is not None:
            self.audit.log_action(modifier, action)

    @staticmethod
    def _resolve_secret(secret):
        if secret is None:
            raise ArgumentError("secret must not be None")
        if isinstance(secret, str):
            return Base32.decode(secret)
        return bytes(memoryview(secret))

    @staticmethod
    def _message(counter, modifier):
        if not isinstance(counter, int):
            raise TypeError(f"counter must be int, not {type(counter).__name__}")
        if not 0 <= counter <= COUNTER_MAX:
            raise OverflowError(f"Counter {counter} does not fit an unsigned 64-bit integer")
        message = struct.pack(">Q", counter)

        if modifier is None:
            return message
        if not isinstance(modifier, str):
            raise TypeError(f"modifier must be str, not {type(modifier).__name__}")

        modifier_bytes = modifier.encode("utf-8")
        if len(modifier_bytes) > MAX_MESSAGE_LENGTH - len(message):
            raise OverflowError("Modifier is too long to append to the counter")
        return message + modifier_bytes

    def _compute(self, context, counter, modifier):
        context.update(self._message(counter, modifier))
        mac = context.finalize()

        # RFC 4226 dynamic truncation
        offset = mac[-1] & 0x0F
        binary = ((mac[offset] & 0x7F) << 24 |
                  mac[offset + 1] << 16 |
                  mac[offset + 2] << 8 |
                  mac[offset + 3])
        return binary % CODE_MODULUS


_default_engine = OtpEngine()


def generate_random_key(length=DEFAULT_KEY_LENGTH):
    return _default_engine.generate_random_key(length)


def current_time_step():
    return _default_engine.current_time_step()


def compute_code(secret, counter, modifier=None):
    return _default_engine.compute_code(secret, counter, modifier)


def generate_totp_code(secret, modifier=None):
    return _default_engine.generate_totp_code(secret, modifier)


def generate_code(secret, modifier=None):
    return _default_engine.generate_code(secret, modifier)


def validate_code(secret, candidate, modifier=None):
    return _default_engine.validate_code(secret, candidate, modifier)
