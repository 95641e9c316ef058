'''
    Description:
        - Strict DER reader used by the public key decoders. Walks an in-memory
          buffer depth-first, checking every tag and length on the way.
        - Also carries the handful of DER writers needed to re-encode keys.

    Only definite, minimal lengths and low tag numbers are accepted. Anything
    else (BER indefinite length, padded length octets, values running past the
    enclosing value) is a MalformedEncodingError rather than a lenient parse.
'''

# ========== Imports ==========
from __future__ import annotations
from typing import List, Tuple, Union

from ..errors import MalformedEncodingError

# ========== Universal tags ==========
INTEGER = 0x02
BIT_STRING = 0x03
OCTET_STRING = 0x04
NULL = 0x05
OBJECT_IDENTIFIER = 0x06
SEQUENCE = 0x30

_MAX_LENGTH_OCTETS = 4


# ========== Reader ==========
class DerReader:
    """Tag-checked cursor over a DER buffer.

    ``enter`` steps inside a value and makes its end the read boundary,
    ``expect_tag`` consumes a whole value, ``seek`` rewinds to a recorded offset.
    """

    def __init__(self, data: bytes):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("DER data must be bytes-like, not %s" % type(data).__name__)
        self._data = bytes(data)
        self._offset = 0
        # (payload_start, payload_end) of each value the cursor has entered
        self._frames: List[Tuple[int, int]] = []

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def limit(self) -> int:
        return self._frames[-1][1] if self._frames else len(self._data)

    def at_end(self) -> bool:
        return self._offset >= self.limit

    def peek_tag(self) -> int:
        if self.at_end():
            raise MalformedEncodingError(f"unexpected end of data at offset {self._offset}")
        return self._data[self._offset]

    def expect_tag(self, *tags: int) -> bytes:
        """Read the value at the cursor, return its payload and move past it."""
        tag, start, end = self._read_header()
        self._check_tag(tag, tags)
        self._offset = end
        return self._data[start:end]

    def enter(self, *tags: int) -> bytes:
        """Like expect_tag, but leave the cursor on the first payload byte."""
        tag, start, end = self._read_header()
        self._check_tag(tag, tags)
        self._frames.append((start, end))
        self._offset = start
        return self._data[start:end]

    def leave(self) -> None:
        if not self._frames:
            raise MalformedEncodingError("not inside a constructed value")
        _, end = self._frames.pop()
        self._offset = end

    def seek(self, offset: int) -> None:
        if not 0 <= offset <= len(self._data):
            raise MalformedEncodingError(f"offset {offset} is outside the buffer")
        while self._frames and not (self._frames[-1][0] <= offset <= self._frames[-1][1]):
            self._frames.pop()
        self._offset = offset

    def expect_end(self) -> None:
        if not self.at_end():
            raise MalformedEncodingError(
                f"{self.limit - self._offset} unexpected trailing byte(s) at offset {self._offset}"
            )

    # ---- internals ----

    def _check_tag(self, tag: int, tags: Tuple[int, ...]) -> None:
        if tag not in tags:
            expected = ", ".join("0x%02x" % t for t in tags)
            raise MalformedEncodingError(
                f"unexpected tag 0x{tag:02x} at offset {self._offset}, expected {expected}"
            )

    def _read_header(self) -> Tuple[int, int, int]:
        """Return (tag, payload_start, payload_end) for the value at the cursor."""
        here = self._offset
        limit = self.limit
        if here >= limit:
            raise MalformedEncodingError(f"unexpected end of data at offset {here}")
        tag = self._data[here]
        if tag & 0x1F == 0x1F:
            raise MalformedEncodingError(f"high tag number form at offset {here} is not supported")

        pos = here + 1
        if pos >= limit:
            raise MalformedEncodingError(f"truncated length at offset {pos}")
        first = self._data[pos]
        pos += 1
        if first < 0x80:
            length = first
        elif first == 0x80:
            raise MalformedEncodingError(f"indefinite length at offset {here} is not allowed in DER")
        else:
            count = first & 0x7F
            if count > _MAX_LENGTH_OCTETS:
                raise MalformedEncodingError(f"length at offset {here} uses {count} octets")
            if pos + count > limit:
                raise MalformedEncodingError(f"truncated length at offset {here}")
            octets = self._data[pos:pos + count]
            length = int.from_bytes(octets, "big")
            if octets[0] == 0 or length < 0x80:
                raise MalformedEncodingError(f"non-minimal length encoding at offset {here}")
            pos += count

        end = pos + length
        if end > limit:
            raise MalformedEncodingError(
                f"value at offset {here} claims {length} byte(s) but only {limit - pos} remain"
            )
        return tag, pos, end


# ========== Payload helpers ==========
def check_integer(payload: bytes) -> bytes:
    ''' Validate an INTEGER payload is present and minimally encoded. '''
    if not payload:
        raise MalformedEncodingError("empty INTEGER")
    if len(payload) > 1:
        if payload[0] == 0x00 and payload[1] < 0x80:
            raise MalformedEncodingError("INTEGER has a redundant leading zero byte")
        if payload[0] == 0xFF and payload[1] >= 0x80:
            raise MalformedEncodingError("INTEGER has a redundant leading 0xff byte")
    return payload


def bit_string_octets(payload: bytes) -> bytes:
    ''' Strip the unused-bits octet of a BIT STRING that must hold whole bytes. '''
    if not payload:
        raise MalformedEncodingError("empty BIT STRING")
    if payload[0] != 0:
        raise MalformedEncodingError(f"BIT STRING has {payload[0]} unused bit(s), expected 0")
    return payload[1:]


def decode_oid(payload: bytes) -> str:
    ''' OBJECT IDENTIFIER payload -> dotted decimal string. '''
    if not payload:
        raise MalformedEncodingError("empty OBJECT IDENTIFIER")
    if payload[-1] & 0x80:
        raise MalformedEncodingError("truncated OBJECT IDENTIFIER sub-identifier")

    arcs: List[int] = []
    value = 0
    fresh = True
    for octet in payload:
        if fresh and octet == 0x80:
            raise MalformedEncodingError("OBJECT IDENTIFIER sub-identifier has a padding octet")
        value = (value << 7) | (octet & 0x7F)
        fresh = not octet & 0x80
        if fresh:
            arcs.append(value)
            value = 0

    first = arcs[0]
    if first < 40:
        head = [0, first]
    elif first < 80:
        head = [1, first - 40]
    else:
        head = [2, first - 80]
    return ".".join(str(arc) for arc in head + arcs[1:])


# ========== Writers ==========
def encode_length(length: int) -> bytes:
    if length < 0:
        raise ValueError("length must be >= 0")
    if length < 0x80:
        return bytes([length])
    octets = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([0x80 | len(octets)]) + octets


def encode_tlv(tag: int, payload: bytes) -> bytes:
    return bytes([tag]) + encode_length(len(payload)) + payload


def encode_sequence(*items: bytes) -> bytes:
    return encode_tlv(SEQUENCE, b"".join(items))


def encode_unsigned_integer(value: Union[int, bytes]) -> bytes:
    ''' INTEGER for a non-negative value, adding the 0x00 pad when the top bit is set. '''
    if isinstance(value, int):
        if value < 0:
            raise ValueError("value must be >= 0")
        octets = value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
    else:
        octets = bytes(value).lstrip(b"\x00") or b"\x00"
    if octets[0] & 0x80:
        octets = b"\x00" + octets
    return encode_tlv(INTEGER, octets)


def encode_null() -> bytes:
    return encode_tlv(NULL, b"")


def encode_bit_string(octets: bytes) -> bytes:
    return encode_tlv(BIT_STRING, b"\x00" + octets)


def encode_oid(dotted: str) -> bytes:
    try:
        arcs = [int(part) for part in dotted.split(".")]
    except ValueError:
        raise ValueError(f"invalid OBJECT IDENTIFIER {dotted!r}") from None
    if len(arcs) < 2 or arcs[0] > 2 or any(arc < 0 for arc in arcs) or (arcs[0] < 2 and arcs[1] >= 40):
        raise ValueError(f"invalid OBJECT IDENTIFIER {dotted!r}")

    body = bytearray()
    for arc in [arcs[0] * 40 + arcs[1]] + arcs[2:]:
        chunk = [arc & 0x7F]
        arc >>= 7
        while arc:
            chunk.append(0x80 | (arc & 0x7F))
            arc >>= 7
        body.extend(reversed(chunk))
    return encode_tlv(OBJECT_IDENTIFIER, bytes(body))
