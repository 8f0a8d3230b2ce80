"""
Primitive field codecs for the Borsh-style wire format used by the
governance program.

Integers are fixed width little-endian, strings carry a u32 byte-length
prefix, fixed arrays are copied verbatim. Every codec exposes the same three
methods so that `Struct` can compose them:

    encode(value, field) -> bytes
    decode(reader, field) -> value
    size(value) -> int
"""

import struct
from enum import IntEnum
from typing import Type, Union

from constants.constants import STRING_LENGTH_PREFIX_SIZE, U32_MAX
from governance.enums.malformed_reason import MalformedReason
from governance.errors import MalformedRecord, ValueOutOfRange


class ByteReader(object):
    """
    Forward-only cursor over a byte buffer.

    Wraps the buffer in a memoryview; only the bytes of each field read are
    copied out.
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview]):
        self._data = memoryview(data)
        self.offset = 0

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def read(self, size: int, field: str) -> bytes:
        if size > self.remaining:
            raise MalformedRecord(
                MalformedReason.TRUNCATED,
                f"Field '{field}' needs {size} bytes at offset {self.offset}, only {self.remaining} left",
                field=field,
            )
        chunk = self._data[self.offset : self.offset + size].tobytes()
        self.offset += size
        return chunk


class UnsignedInt(object):
    def __init__(self, fmt: str, bits: int):
        self._struct = struct.Struct(fmt)
        self.bits = bits
        self.max_value = 2**bits - 1

    def encode(self, value: int, field: str) -> bytes:
        if not isinstance(value, int):
            raise ValueOutOfRange(field, value, f"Field '{field}' expects an integer, got {type(value).__name__}")
        if value < 0 or value > self.max_value:
            raise ValueOutOfRange(field, value, f"Value {value} does not fit u{self.bits} field '{field}'")
        return self._struct.pack(value)

    def decode(self, reader: ByteReader, field: str) -> int:
        return self._struct.unpack(reader.read(self._struct.size, field))[0]

    def size(self, value=None) -> int:
        return self._struct.size


U8 = UnsignedInt("<B", 8)
U32 = UnsignedInt("<I", 32)
U64 = UnsignedInt("<Q", 64)


class Bool(object):
    """Boolean carried as a single 0/1 byte."""

    def encode(self, value: bool, field: str) -> bytes:
        return U8.encode(1 if value else 0, field)

    def decode(self, reader: ByteReader, field: str) -> bool:
        raw = U8.decode(reader, field)
        if raw not in (0, 1):
            raise MalformedRecord(
                MalformedReason.INVALID_VARIANT, f"Field '{field}' holds {raw}, expected 0 or 1", field=field
            )
        return raw == 1

    def size(self, value=None) -> int:
        return 1


class FixedBytes(object):
    def __init__(self, length: int):
        self.length = length

    def encode(self, value: bytes, field: str) -> bytes:
        raw = bytes(value)
        if len(raw) != self.length:
            raise ValueOutOfRange(field, value, f"Field '{field}' must be exactly {self.length} bytes, got {len(raw)}")
        return raw

    def decode(self, reader: ByteReader, field: str) -> bytes:
        return reader.read(self.length, field)

    def size(self, value=None) -> int:
        return self.length


class String(object):
    def encode(self, value: str, field: str) -> bytes:
        if not isinstance(value, str):
            raise ValueOutOfRange(field, value, f"Field '{field}' expects text, got {type(value).__name__}")
        raw = value.encode("utf-8")
        if len(raw) > U32_MAX:
            raise ValueOutOfRange(field, len(raw), f"Field '{field}' is longer than a u32 length prefix allows")
        return U32.encode(len(raw), field) + raw

    def decode(self, reader: ByteReader, field: str) -> str:
        length = U32.decode(reader, field)
        if length > reader.remaining:
            raise MalformedRecord(
                MalformedReason.STRING_OVERRUN,
                f"String '{field}' declares {length} bytes but only {reader.remaining} remain",
                field=field,
            )
        raw = reader.read(length, field)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecord(
                MalformedReason.INVALID_UTF8, f"String '{field}' is not valid UTF-8: {e}", field=field
            ) from e

    def size(self, value: str) -> int:
        return STRING_LENGTH_PREFIX_SIZE + len(value.encode("utf-8"))


class U8Enum(object):
    """u8 ordinal restricted to the members of an IntEnum."""

    def __init__(self, enum_cls: Type[IntEnum]):
        self.enum_cls = enum_cls

    def encode(self, value: int, field: str) -> bytes:
        try:
            member = self.enum_cls(value)
        except ValueError as e:
            raise ValueOutOfRange(field, value, f"{value!r} is not a valid {self.enum_cls.__name__}") from e
        return U8.encode(int(member), field)

    def decode(self, reader: ByteReader, field: str) -> IntEnum:
        raw = U8.decode(reader, field)
        try:
            return self.enum_cls(raw)
        except ValueError as e:
            raise MalformedRecord(
                MalformedReason.INVALID_VARIANT,
                f"Field '{field}' holds {raw}, not a valid {self.enum_cls.__name__}",
                field=field,
            ) from e

    def size(self, value=None) -> int:
        return 1
