from .base32 import Base32
from .crypto_utils import HMAC_SHA1, SecurePRNG
from .errors import ArgumentError, FormatError
from .otp import (
    OtpEngine,
    compute_code,
    current_time_step,
    format_code,
    generate_code,
    generate_random_key,
    generate_totp_code,
    parse_code,
    validate_code,
)
