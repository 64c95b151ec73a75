"""Log record and its binary wire encoding."""

from __future__ import annotations

from dataclasses import dataclass

_ID_FIELD = 1
_DATA_FIELD = 2

_WIRE_VARINT = 0
_WIRE_FIXED64 = 1
_WIRE_LENGTH = 2
_WIRE_FIXED32 = 5

_MASK64 = (1 << 64) - 1
_SIGN64 = 1 << 63


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _decode_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise ValueError("truncated varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7
        if shift >= 70:
            raise ValueError("varint too long")


def _key(field: int, wire: int) -> bytes:
    return _encode_varint((field << 3) | wire)


@dataclass
class Record:
    """A single log entry: an identifier and its text."""

    id: int = 0
    data: str = ""

    def encode(self) -> bytes:
        """Serialise the record; fields holding default values are omitted."""
        out = bytearray()
        if self.id:
            out += _key(_ID_FIELD, _WIRE_VARINT)
            out += _encode_varint(self.id & _MASK64)
        if self.data:
            raw = self.data.encode("utf-8")
            out += _key(_DATA_FIELD, _WIRE_LENGTH)
            out += _encode_varint(len(raw))
            out += raw
        return bytes(out)

    @classmethod
    def decode(cls, data: bytes) -> Record:
        """Parse a record, skipping unknown fields; raise ValueError on malformed input."""
        view = bytes(data)
        record = cls()
        pos = 0
        while pos < len(view):
            key, pos = _decode_varint(view, pos)
            field, wire = key >> 3, key & 0x07
            if field == 0:
                raise ValueError("invalid field number 0")
            if wire == _WIRE_VARINT:
                value, pos = _decode_varint(view, pos)
                if field == _ID_FIELD:
                    value &= _MASK64
                    record.id = value - (1 << 64) if value >= _SIGN64 else value
            elif wire == _WIRE_LENGTH:
                length, pos = _decode_varint(view, pos)
                end = pos + length
                if end > len(view):
                    raise ValueError("truncated length-delimited field")
                chunk = view[pos:end]
                pos = end
                if field == _DATA_FIELD:
                    record.data = chunk.decode("utf-8")
            elif wire in (_WIRE_FIXED64, _WIRE_FIXED32):
                pos += 8 if wire == _WIRE_FIXED64 else 4
                if pos > len(view):
                    raise ValueError("truncated fixed-width field")
            else:
                raise ValueError(f"unsupported wire type {wire}")
        return record