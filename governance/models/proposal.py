from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from governance.enums.proposal_status import ProposalStatus
from utils.formatter_utils import address_to_bytes, bytes_to_address, to_pubkey


class Proposal(BaseModel):
    """
    A decoded proposal account.

    Instances are frozen: vote counters and status only change on chain, a
    fresh fetch is the only way to observe new values.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    creator: str = Field(description="Base58 address of the proposal creator")
    title: str
    description: str
    status: ProposalStatus
    votes_for: int = Field(default=0, ge=0)
    votes_against: int = Field(default=0, ge=0)
    ai_analysis_summary: str = ""
    ai_analysis_sentiment: str = ""
    created_at: int = Field(default=0, ge=0)
    voting_ends_at: int = Field(default=0, ge=0)

    pubkey: Optional[str] = Field(default=None, description="Address of the account holding this record")

    @field_validator("creator", mode="before")
    @classmethod
    def normalize_creator(cls, v):
        if isinstance(v, (bytes, bytearray)):
            return bytes_to_address(v)
        if isinstance(v, str):
            return str(to_pubkey(v))
        return v

    @property
    def creator_bytes(self) -> bytes:
        return address_to_bytes(self.creator)

    @property
    def status_label(self) -> str:
        return self.status.label

    @property
    def total_votes(self) -> int:
        return self.votes_for + self.votes_against

    @property
    def is_active(self) -> bool:
        return self.status is ProposalStatus.ACTIVE

    @property
    def can_vote(self) -> bool:
        return self.is_active

    @property
    def can_execute(self) -> bool:
        return self.status is ProposalStatus.PASSED

    @property
    def created_at_datetime(self) -> Optional[datetime]:
        return _to_utc_datetime(self.created_at)

    @property
    def voting_ends_at_datetime(self) -> Optional[datetime]:
        return _to_utc_datetime(self.voting_ends_at)


def _to_utc_datetime(seconds: int) -> Optional[datetime]:
    # Any u64 is a valid on-chain value; those past datetime.max have no date
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
