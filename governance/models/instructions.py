from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict

from constants.constants import DEFAULT_VOTE_WEIGHT, DEFAULT_VOTING_PERIOD_SECONDS
from governance.enums.instruction_variant import InstructionVariant


class CreateProposal(BaseModel):
    model_config = ConfigDict(frozen=True)

    variant: ClassVar[InstructionVariant] = InstructionVariant.CREATE_PROPOSAL

    title: str
    description: str
    ai_summary: str
    ai_sentiment: str
    # Range is checked by the u64 codec so that overflow surfaces as ValueOutOfRange
    voting_period: int = DEFAULT_VOTING_PERIOD_SECONDS


class Vote(BaseModel):
    model_config = ConfigDict(frozen=True)

    variant: ClassVar[InstructionVariant] = InstructionVariant.VOTE

    is_for: bool
    vote_weight: int = DEFAULT_VOTE_WEIGHT


class ExecuteProposal(BaseModel):
    model_config = ConfigDict(frozen=True)

    variant: ClassVar[InstructionVariant] = InstructionVariant.EXECUTE_PROPOSAL


GovernanceInstruction = Union[CreateProposal, Vote, ExecuteProposal]
