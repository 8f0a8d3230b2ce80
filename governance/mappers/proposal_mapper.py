from datetime import datetime
from typing import Any, Dict, Optional

from governance.codec.schema import PROPOSAL_SCHEMA
from governance.models.proposal import Proposal


class ProposalMapper(object):
    @staticmethod
    def record_to_proposal(record: Dict[str, Any], pubkey: Optional[str] = None) -> Proposal:
        return Proposal(
            creator=record["creator"],
            title=record["title"],
            description=record["description"],
            status=record["status"],
            votes_for=record["votes_for"],
            votes_against=record["votes_against"],
            ai_analysis_summary=record["ai_analysis_summary"],
            ai_analysis_sentiment=record["ai_analysis_sentiment"],
            created_at=record["created_at"],
            voting_ends_at=record["voting_ends_at"],
            pubkey=pubkey,
        )

    @staticmethod
    def proposal_to_record(proposal: Proposal) -> Dict[str, Any]:
        record = proposal.model_dump(exclude={"pubkey"})
        record["creator"] = proposal.creator_bytes
        return record

    @staticmethod
    def proposal_to_dict(proposal: Proposal) -> Dict[str, Any]:
        """JSON-friendly view with the named status and UTC timestamps, as shown to users."""
        item = proposal.model_dump(mode="json")
        item["status"] = proposal.status_label
        item["total_votes"] = proposal.total_votes
        item["created_at_utc"] = _isoformat(proposal.created_at_datetime)
        item["voting_ends_at_utc"] = _isoformat(proposal.voting_ends_at_datetime)
        return item


def encode_proposal(proposal: Proposal) -> bytes:
    return PROPOSAL_SCHEMA.encode(ProposalMapper.proposal_to_record(proposal))


def decode_proposal(data: bytes, pubkey: Optional[str] = None, max_trailing: int = 0) -> Proposal:
    """Strict decode of a proposal record. Raises MalformedRecord."""
    record = PROPOSAL_SCHEMA.decode(data, max_trailing=max_trailing)
    return ProposalMapper.record_to_proposal(record, pubkey=pubkey)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
