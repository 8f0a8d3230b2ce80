from typing import Any, Dict

from governance.codec.primitives import U8, ByteReader
from governance.codec.schema import (
    CREATE_PROPOSAL_SCHEMA,
    EXECUTE_PROPOSAL_SCHEMA,
    VOTE_SCHEMA,
)
from governance.enums.instruction_variant import InstructionVariant
from governance.enums.malformed_reason import MalformedReason
from governance.errors import MalformedRecord
from governance.models.instructions import (
    CreateProposal,
    ExecuteProposal,
    GovernanceInstruction,
    Vote,
)

INSTRUCTION_SCHEMAS = {
    InstructionVariant.CREATE_PROPOSAL: CREATE_PROPOSAL_SCHEMA,
    InstructionVariant.VOTE: VOTE_SCHEMA,
    InstructionVariant.EXECUTE_PROPOSAL: EXECUTE_PROPOSAL_SCHEMA,
}


class InstructionMapper(object):
    @staticmethod
    def instruction_to_fields(instruction: GovernanceInstruction) -> Dict[str, Any]:
        if isinstance(instruction, CreateProposal):
            return {
                "title": instruction.title,
                "description": instruction.description,
                "ai_analysis_summary": instruction.ai_summary,
                "ai_analysis_sentiment": instruction.ai_sentiment,
                "voting_period": instruction.voting_period,
            }
        if isinstance(instruction, Vote):
            return {"is_for": instruction.is_for, "vote_weight": instruction.vote_weight}
        if isinstance(instruction, ExecuteProposal):
            return {}
        raise TypeError(f"Unsupported instruction type: {type(instruction).__name__}")

    @staticmethod
    def fields_to_instruction(variant: InstructionVariant, fields: Dict[str, Any]) -> GovernanceInstruction:
        if variant is InstructionVariant.CREATE_PROPOSAL:
            return CreateProposal(
                title=fields["title"],
                description=fields["description"],
                ai_summary=fields["ai_analysis_summary"],
                ai_sentiment=fields["ai_analysis_sentiment"],
                voting_period=fields["voting_period"],
            )
        if variant is InstructionVariant.VOTE:
            return Vote(is_for=fields["is_for"], vote_weight=fields["vote_weight"])
        return ExecuteProposal()


def encode_instruction(instruction: GovernanceInstruction) -> bytes:
    """Tag byte followed by the variant's fields."""
    fields = InstructionMapper.instruction_to_fields(instruction)
    schema = INSTRUCTION_SCHEMAS[instruction.variant]
    return U8.encode(int(instruction.variant), "variant") + schema.encode(fields)


def decode_instruction(data: bytes) -> GovernanceInstruction:
    """Inverse of encode_instruction. The whole buffer must be consumed."""
    reader = ByteReader(data)
    tag = U8.decode(reader, "variant")
    try:
        variant = InstructionVariant(tag)
    except ValueError as e:
        raise MalformedRecord(
            MalformedReason.INVALID_VARIANT, f"Unknown instruction tag {tag}", field="variant"
        ) from e

    fields = INSTRUCTION_SCHEMAS[variant].decode_from(reader)
    if reader.remaining:
        raise MalformedRecord(
            MalformedReason.TRAILING_BYTES,
            f"{variant.name}: {reader.remaining} trailing bytes after {reader.offset} of {reader.length}",
            consumed=reader.offset,
            length=reader.length,
        )
    return InstructionMapper.fields_to_instruction(variant, fields)
