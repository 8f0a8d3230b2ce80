import pytest

from governance.enums.malformed_reason import MalformedReason
from governance.errors import MalformedRecord, ValueOutOfRange
from governance.mappers.instruction_mapper import decode_instruction, encode_instruction
from governance.models.instructions import CreateProposal, ExecuteProposal, Vote


def test_create_proposal_round_trip():
    instruction = CreateProposal(title="T", description="D", ai_summary="S", ai_sentiment="Pos", voting_period=86400)

    data = encode_instruction(instruction)

    assert data[0] == 0
    assert decode_instruction(data) == instruction


def test_create_proposal_layout():
    data = encode_instruction(
        CreateProposal(title="T", description="D", ai_summary="S", ai_sentiment="Pos", voting_period=86400)
    )
    assert data == (
        b"\x00"
        + b"\x01\x00\x00\x00T"
        + b"\x01\x00\x00\x00D"
        + b"\x01\x00\x00\x00S"
        + b"\x03\x00\x00\x00Pos"
        + (86400).to_bytes(8, "little")
    )


def test_vote_for_is_ten_bytes():
    data = encode_instruction(Vote(is_for=True))
    assert data == bytes([1, 1, 1, 0, 0, 0, 0, 0, 0, 0])
    assert len(data) == 10


def test_vote_against():
    data = encode_instruction(Vote(is_for=False))
    assert data[:2] == b"\x01\x00"
    assert decode_instruction(data) == Vote(is_for=False, vote_weight=1)


def test_execute_proposal_is_tag_only():
    assert encode_instruction(ExecuteProposal()) == b"\x02"
    assert decode_instruction(b"\x02") == ExecuteProposal()


def test_vote_weight_overflow():
    with pytest.raises(ValueOutOfRange):
        encode_instruction(Vote(is_for=True, vote_weight=2**64))


def test_negative_voting_period():
    with pytest.raises(ValueOutOfRange):
        encode_instruction(CreateProposal(title="T", description="D", ai_summary="S", ai_sentiment="P", voting_period=-1))


def test_unknown_tag():
    with pytest.raises(MalformedRecord) as exc_info:
        decode_instruction(b"\x03")
    assert exc_info.value.reason is MalformedReason.INVALID_VARIANT


def test_empty_payload():
    with pytest.raises(MalformedRecord) as exc_info:
        decode_instruction(b"")
    assert exc_info.value.reason is MalformedReason.TRUNCATED


def test_trailing_bytes_after_instruction():
    with pytest.raises(MalformedRecord) as exc_info:
        decode_instruction(b"\x02\x00")
    assert exc_info.value.is_trailing_bytes
