from pydantic import BaseModel, Field

from constants.constants import DEFAULT_ANALYSIS_SENTIMENT, DEFAULT_ANALYSIS_SUMMARY


class TransactionResult(BaseModel):
    signature: str
    success: bool = True


class CreateProposalResult(TransactionResult):
    proposal_pubkey: str


class ProposalAnalysis(BaseModel):
    """Output of the external analysis endpoint, used verbatim as proposal fields."""

    summary: str = Field(default=DEFAULT_ANALYSIS_SUMMARY)
    sentiment: str = Field(default=DEFAULT_ANALYSIS_SENTIMENT)
