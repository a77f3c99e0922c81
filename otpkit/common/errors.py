class FormatError(ValueError):
    """Raised when text cannot be parsed: bad Base32 characters or a non-numeric code"""


class ArgumentError(ValueError):
    """Raised when a required argument such as the secret is missing"""
