"""Fixed RFC 4648 / RFC 4226 / RFC 6238 parameters."""

import sys

# RFC 4648 Base32
BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
BASE32_PAD = "="

# Real (non-pad) characters emitted for a tail block of 1..5 bytes
BASE32_TAIL_CHARS = {1: 2, 2: 4, 3: 5, 4: 7, 5: 8}

# RFC 6238 time step and RFC 4226 code size
TIME_STEP_SECONDS = 30
CODE_DIGITS = 6
CODE_MODULUS = 10 ** CODE_DIGITS

# Steps accepted on either side of the current one when validating
VALIDATION_WINDOW = 2

# 80-bit secret
DEFAULT_KEY_LENGTH = 10

COUNTER_BYTES = 8
COUNTER_MAX = 2 ** 64 - 1

# Largest candidate accepted when parsing a code string (signed 32-bit)
MAX_CODE_VALUE = 2 ** 31 - 1

# Upper bound on the hashed message length
MAX_MESSAGE_LENGTH = sys.maxsize
