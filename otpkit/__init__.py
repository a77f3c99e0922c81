"""Base32 codec and HOTP/TOTP one-time code engine"""

from .common import (
    ArgumentError,
    Base32,
    FormatError,
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

__version__ = "1.0.0"
