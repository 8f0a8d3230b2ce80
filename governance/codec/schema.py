from typing import Any, Dict, List, Mapping, Tuple

from constants.constants import PUBKEY_LENGTH
from governance.codec.primitives import U64, Bool, ByteReader, FixedBytes, String, U8Enum
from governance.enums.malformed_reason import MalformedReason
from governance.enums.proposal_status import ProposalStatus
from governance.errors import MalformedRecord


class Struct(object):
    """Fields encoded in declaration order and concatenated without padding."""

    def __init__(self, name: str, fields: List[Tuple[str, Any]]):
        self.name = name
        self.fields = fields

    def encode(self, values: Mapping[str, Any]) -> bytes:
        return b"".join(codec.encode(values[name], name) for name, codec in self.fields)

    def decode_from(self, reader: ByteReader) -> Dict[str, Any]:
        return {name: codec.decode(reader, name) for name, codec in self.fields}

    def decode(self, data: bytes, max_trailing: int = 0) -> Dict[str, Any]:
        """
        Decodes `data` into a field dict.

        With the default `max_trailing=0` the whole buffer must be consumed.
        A positive value tolerates up to that many unread bytes at the end.
        """
        reader = ByteReader(data)
        values = self.decode_from(reader)
        if reader.remaining > max_trailing:
            raise MalformedRecord(
                MalformedReason.TRAILING_BYTES,
                f"{self.name}: {reader.remaining} trailing bytes after {reader.offset} of {reader.length}",
                consumed=reader.offset,
                length=reader.length,
            )
        return values

    def size_of(self, values: Mapping[str, Any]) -> int:
        return sum(codec.size(values[name]) for name, codec in self.fields)


PROPOSAL_SCHEMA = Struct(
    "Proposal",
    [
        ("creator", FixedBytes(PUBKEY_LENGTH)),
        ("title", String()),
        ("description", String()),
        ("status", U8Enum(ProposalStatus)),
        ("votes_for", U64),
        ("votes_against", U64),
        ("ai_analysis_summary", String()),
        ("ai_analysis_sentiment", String()),
        ("created_at", U64),
        ("voting_ends_at", U64),
    ],
)

# Instruction bodies; the variant tag byte is written by the instruction mapper.
CREATE_PROPOSAL_SCHEMA = Struct(
    "CreateProposal",
    [
        ("title", String()),
        ("description", String()),
        ("ai_analysis_summary", String()),
        ("ai_analysis_sentiment", String()),
        ("voting_period", U64),
    ],
)

VOTE_SCHEMA = Struct(
    "Vote",
    [
        ("is_for", Bool()),
        ("vote_weight", U64),
    ],
)

EXECUTE_PROPOSAL_SCHEMA = Struct("ExecuteProposal", [])
