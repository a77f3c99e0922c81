import logging

from .constants import BASE32_ALPHABET, BASE32_PAD, BASE32_TAIL_CHARS
from .errors import ArgumentError, FormatError

logger = logging.getLogger(__name__)

# Case-insensitive lookup restricted to ASCII so that no Unicode case mapping
# can turn a foreign character into a valid one
_DECODE_MAP = {char: index for index, char in enumerate(BASE32_ALPHABET)}
_DECODE_MAP.update({char.lower(): index for index, char in enumerate(BASE32_ALPHABET)})


def _as_bytes(data):
    if isinstance(data, str):
        raise TypeError("Base32 encoding requires a bytes-like object, not str")
    return bytes(memoryview(data))


class Base32:
    """RFC 4648 Base32 codec used to render secrets as text"""

    @staticmethod
    def encode(data):
        """
        Encode bytes as padded, uppercase Base32 text

        Every 5-byte block becomes 8 characters. A short final block is
        zero-filled and the character slots that carry no input bits are
        replaced with '='.

        Args:
            data (bytes): The bytes to encode

        Returns:
            str: Base32 text whose length is a multiple of 8
        """
        if data is None:
            raise ArgumentError("data must not be None")
        data = _as_bytes(data)

        chunks = []
        for start in range(0, len(data), 5):
            block = data[start:start + 5]
            used = BASE32_TAIL_CHARS[len(block)]
            bits = int.from_bytes(block.ljust(5, b"\x00"), "big")

            groups = [(bits >> shift) & 0x1F for shift in range(35, -1, -5)]
            chars = "".join(BASE32_ALPHABET[group] for group in groups[:used])
            chunks.append(chars + BASE32_PAD * (8 - used))

        return "".join(chunks)

    @staticmethod
    def decode(text):
        """
        Decode Base32 text back to bytes

        Decoding is case-insensitive and ignores trailing padding. Bits left
        over after the last full byte are dropped, so the result holds
        floor(len(stripped) * 5 / 8) bytes.

        Args:
            text (str): Base32 text, padded or not

        Returns:
            bytes: The decoded bytes

        Raises:
            FormatError: If a character outside the Base32 alphabet is found
        """
        if text is None:
            raise ArgumentError("text must not be None")
        if isinstance(text, (bytes, bytearray)):
            try:
                text = text.decode("ascii")
            except UnicodeDecodeError as e:
                raise FormatError(f"Invalid Base32 input: {e}") from e

        value = text.rstrip(BASE32_PAD)
        if not value:
            return b""

        result = bytearray()
        buffer = 0
        bits = 0
        for position, char in enumerate(value):
            index = _DECODE_MAP.get(char)
            if index is None:
                raise FormatError(f"Invalid Base32 character {char!r} at position {position}")

            buffer = (buffer << 5) | index
            bits += 5
            if bits >= 8:
                bits -= 8
                result.append((buffer >> bits) & 0xFF)
                buffer &= (1 << bits) - 1

        if bits:
            logger.debug("Discarded %d trailing Base32 bits", bits)
        return bytes(result)


encode = Base32.encode
decode = Base32.decode
