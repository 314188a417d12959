"""
Deck code codec.

Converts between (card code, count) pairs and the deck code string the
game client imports and exports.

Wire format (base32, RFC 4648 alphabet, padding stripped):

    byte 0      format << 4 | version
    section 3   varint group count, then per group:
                varint size, varint set, varint faction id, size x varint number
    section 2   same, for cards with exactly two copies
    section 1   same, for single copies
    tail        (count, set, faction id, number) varints for counts above 3

A group shares set and faction. The codec is a structural transform over
codes and counts and never consults the card catalog.
"""

import base64
import binascii
import re
from collections.abc import Iterable

from lorbuilder.models.failure import InvalidCardCount, InvalidDeckCode, MalformedIdentifier

FORMAT = 1
INITIAL_VERSION = 1
MAX_KNOWN_VERSION = 5

CARD_CODE_PATTERN = re.compile(r"^\d{2}[A-Z]{2}\d{3}$")

FACTION_IDS: dict[str, int] = {
    "DE": 0,
    "FR": 1,
    "IO": 2,
    "NX": 3,
    "PZ": 4,
    "SI": 5,
    "BW": 6,
    "SH": 7,
    "MT": 9,
    "BC": 10,
    "RU": 12,
}

FACTION_CODES: dict[int, str] = {faction_id: code for code, faction_id in FACTION_IDS.items()}

# Lowest format version whose decoders know each faction
FACTION_VERSIONS: dict[str, int] = {
    "DE": 1,
    "FR": 1,
    "IO": 1,
    "NX": 1,
    "PZ": 1,
    "SI": 1,
    "BW": 2,
    "MT": 2,
    "SH": 3,
    "BC": 4,
    "RU": 5,
}

_GROUPED_COPY_COUNTS = (3, 2, 1)

_BASE32_PATTERN = re.compile(r"^[A-Z2-7]+=*$")

_MAX_VARINT_SHIFT = 63


def is_valid_card_code(code: object) -> bool:
    """True if the code has the 7-character shape and a known faction."""
    return (
        isinstance(code, str)
        and CARD_CODE_PATTERN.match(code) is not None
        and code[2:4] in FACTION_IDS
    )


def encode(entries: Iterable[tuple[str, int]]) -> str:
    """
    Encode card codes and counts as a deck code.

    Every code is validated before anything is packed, so a bad batch
    never yields a partial code. Repeated codes are merged.

    Args:
        entries: (card code, count) pairs

    Returns:
        Deck code string

    Raises:
        MalformedIdentifier: If any code is malformed or has an unknown faction
        InvalidCardCount: If any count is below 1
    """
    pairs = list(entries)

    malformed = [code for code, _ in pairs if not is_valid_card_code(code)]
    if malformed:
        raise MalformedIdentifier(malformed)

    counts: dict[str, int] = {}
    for code, count in pairs:
        if count < 1:
            raise InvalidCardCount(code, count)
        counts[code] = counts.get(code, 0) + count

    payload = bytearray([FORMAT << 4 | _min_supported_version(counts)])

    for copies in _GROUPED_COPY_COUNTS:
        groups = _group_by_set_and_faction(
            [code for code, count in counts.items() if count == copies]
        )
        payload += _varint(len(groups))
        for group in groups:
            set_number, faction, _ = _split_code(group[0])
            payload += _varint(len(group))
            payload += _varint(set_number)
            payload += _varint(FACTION_IDS[faction])
            for code in group:
                payload += _varint(_split_code(code)[2])

    for code in sorted(code for code, count in counts.items() if count > 3):
        set_number, faction, number = _split_code(code)
        payload += _varint(counts[code])
        payload += _varint(set_number)
        payload += _varint(FACTION_IDS[faction])
        payload += _varint(number)

    return base64.b32encode(bytes(payload)).decode("ascii").rstrip("=")


def decode(code: str) -> list[tuple[str, int]]:
    """
    Decode a deck code into card codes and counts.

    Args:
        code: Deck code string (case-insensitive, padding optional)

    Returns:
        (card code, count) pairs

    Raises:
        InvalidDeckCode: If the code cannot be parsed
    """
    payload = _unbase32(code)

    format_number = payload[0] >> 4
    version = payload[0] & 0x0F
    if format_number != FORMAT:
        raise InvalidDeckCode(f"unsupported format {format_number}")
    if version > MAX_KNOWN_VERSION:
        raise InvalidDeckCode(f"version {version} is newer than supported {MAX_KNOWN_VERSION}")

    reader = _ByteReader(payload, offset=1)
    cards: list[tuple[str, int]] = []

    for copies in _GROUPED_COPY_COUNTS:
        for _ in range(reader.varint()):
            size = reader.varint()
            set_number = reader.varint()
            faction_id = reader.varint()
            for _ in range(size):
                cards.append((_join_code(set_number, faction_id, reader.varint()), copies))

    while not reader.at_end():
        count = reader.varint()
        set_number = reader.varint()
        faction_id = reader.varint()
        number = reader.varint()
        if count < 1:
            raise InvalidDeckCode(f"card count {count} is not positive")
        cards.append((_join_code(set_number, faction_id, number), count))

    return cards


def _min_supported_version(counts: dict[str, int]) -> int:
    if not counts:
        return INITIAL_VERSION
    return max(FACTION_VERSIONS[code[2:4]] for code in counts)


def _group_by_set_and_faction(codes: list[str]) -> list[list[str]]:
    groups: dict[tuple[int, str], list[str]] = {}
    for code in codes:
        set_number, faction, _ = _split_code(code)
        groups.setdefault((set_number, faction), []).append(code)

    # Stable sort: equal-sized groups keep the order their set and faction
    # first appear in, as the game client writes them
    return sorted((sorted(group) for group in groups.values()), key=len)


def _split_code(code: str) -> tuple[int, str, int]:
    return int(code[:2]), code[2:4], int(code[4:])


def _join_code(set_number: int, faction_id: int, number: int) -> str:
    faction = FACTION_CODES.get(faction_id)
    if faction is None:
        raise InvalidDeckCode(f"unknown faction id {faction_id}")
    if set_number > 99 or number > 999:
        raise InvalidDeckCode(f"card {set_number}/{faction}/{number} is out of range")
    return f"{set_number:02d}{faction}{number:03d}"


def _varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _unbase32(code: str) -> bytes:
    if not isinstance(code, str) or not code.strip():
        raise InvalidDeckCode("deck code is empty")

    text = code.strip().upper()
    if not _BASE32_PATTERN.match(text):
        raise InvalidDeckCode("deck code contains characters outside the base32 alphabet")

    text = text.rstrip("=")
    try:
        payload = base64.b32decode(text + "=" * (-len(text) % 8))
    except binascii.Error as e:
        raise InvalidDeckCode(f"deck code has an invalid length ({len(text)})") from e

    if not payload:
        raise InvalidDeckCode("deck code is empty")
    return payload


class _ByteReader:
    """Sequential varint reader over a decoded payload."""

    def __init__(self, payload: bytes, offset: int = 0) -> None:
        self._payload = payload
        self._pos = offset

    def at_end(self) -> bool:
        return self._pos >= len(self._payload)

    def varint(self) -> int:
        result = 0
        shift = 0
        while True:
            if self.at_end():
                raise InvalidDeckCode("deck code ends inside a value")
            byte = self._payload[self._pos]
            self._pos += 1
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return result
            shift += 7
            if shift > _MAX_VARINT_SHIFT:
                raise InvalidDeckCode("deck code holds an oversized value")
