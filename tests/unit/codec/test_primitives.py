import pytest

from governance.codec.primitives import U8, U64, Bool, ByteReader, FixedBytes, String, U8Enum
from governance.enums.malformed_reason import MalformedReason
from governance.enums.proposal_status import ProposalStatus
from governance.errors import MalformedRecord, ValueOutOfRange


def test_u64_is_little_endian():
    assert U64.encode(1, "n") == b"\x01\x00\x00\x00\x00\x00\x00\x00"
    assert U64.encode(0x0102, "n") == b"\x02\x01\x00\x00\x00\x00\x00\x00"
    assert U64.decode(ByteReader(b"\xff" * 8), "n") == 2**64 - 1


@pytest.mark.parametrize("value", [-1, 2**64])
def test_u64_out_of_range(value):
    with pytest.raises(ValueOutOfRange) as exc_info:
        U64.encode(value, "vote_weight")
    assert exc_info.value.field == "vote_weight"


def test_u8_rejects_256():
    with pytest.raises(ValueOutOfRange):
        U8.encode(256, "variant")


def test_u64_rejects_non_integer():
    with pytest.raises(ValueOutOfRange):
        U64.encode("10", "voting_period")


def test_string_prefix_counts_bytes_not_characters():
    encoded = String().encode("héllo", "title")
    # 'é' is two bytes in UTF-8
    assert encoded[:4] == b"\x06\x00\x00\x00"
    assert encoded[4:] == "héllo".encode("utf-8")
    assert String().size("héllo") == 10


def test_empty_string():
    assert String().encode("", "title") == b"\x00\x00\x00\x00"
    assert String().decode(ByteReader(b"\x00\x00\x00\x00"), "title") == ""


def test_string_overrun():
    reader = ByteReader(b"\x05\x00\x00\x00abc")
    with pytest.raises(MalformedRecord) as exc_info:
        String().decode(reader, "title")
    assert exc_info.value.reason is MalformedReason.STRING_OVERRUN


def test_string_invalid_utf8():
    with pytest.raises(MalformedRecord) as exc_info:
        String().decode(ByteReader(b"\x02\x00\x00\x00\xc3\x28"), "title")
    assert exc_info.value.reason is MalformedReason.INVALID_UTF8


def test_truncated_fixed_width_field():
    with pytest.raises(MalformedRecord) as exc_info:
        U64.decode(ByteReader(b"\x01\x02\x03"), "votes_for")
    assert exc_info.value.reason is MalformedReason.TRUNCATED
    assert exc_info.value.field == "votes_for"


def test_fixed_bytes_copied_verbatim():
    raw = bytes(range(32))
    assert FixedBytes(32).encode(raw, "creator") == raw
    with pytest.raises(ValueOutOfRange):
        FixedBytes(32).encode(raw[:31], "creator")


def test_bool_rejects_values_other_than_zero_and_one():
    assert Bool().decode(ByteReader(b"\x01"), "is_for") is True
    assert Bool().decode(ByteReader(b"\x00"), "is_for") is False
    with pytest.raises(MalformedRecord) as exc_info:
        Bool().decode(ByteReader(b"\x02"), "is_for")
    assert exc_info.value.reason is MalformedReason.INVALID_VARIANT


def test_enum_decodes_members_only():
    codec = U8Enum(ProposalStatus)
    assert codec.decode(ByteReader(b"\x02"), "status") is ProposalStatus.REJECTED
    with pytest.raises(MalformedRecord) as exc_info:
        codec.decode(ByteReader(b"\x04"), "status")
    assert exc_info.value.reason is MalformedReason.INVALID_VARIANT
    with pytest.raises(ValueOutOfRange):
        codec.encode(7, "status")


def test_reader_tracks_offset():
    reader = ByteReader(b"abcdef")
    assert reader.read(2, "x") == b"ab"
    assert reader.offset == 2
    assert reader.remaining == 4
