from enum import Enum


class MalformedReason(str, Enum):
    TRUNCATED = "truncated"
    STRING_OVERRUN = "string_overrun"
    INVALID_UTF8 = "invalid_utf8"
    INVALID_VARIANT = "invalid_variant"
    TRAILING_BYTES = "trailing_bytes"
