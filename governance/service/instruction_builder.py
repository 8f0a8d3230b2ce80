from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.system_program import CreateAccountParams, create_account

from constants.constants import DEFAULT_VOTE_WEIGHT, PROPOSAL_ACCOUNT_SPACE
from governance.mappers.instruction_mapper import encode_instruction
from governance.models.instructions import CreateProposal, ExecuteProposal, Vote
from utils.formatter_utils import to_pubkey
from utils.validation_utils import validate_text, validate_u64

AddressLike = Union[str, bytes, Pubkey]


class InstructionBundle(BaseModel):
    """Ordered instructions plus the pubkeys that must sign the transaction."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    instructions: List[Instruction]
    signers: List[Pubkey]


class CreateProposalBundle(InstructionBundle):
    proposal_keypair: Keypair

    @property
    def proposal_pubkey(self) -> Pubkey:
        return self.proposal_keypair.pubkey()


def encode_create_proposal(
    title: str,
    description: str,
    ai_summary: str,
    ai_sentiment: str,
    voting_period: int,
) -> bytes:
    """
    CreateProposal instruction payload (tag 0 followed by the arguments).

    Raises:
        ValueOutOfRange: If a text argument is not a str or voting_period does not fit u64.
    """
    validate_text("title", title)
    validate_text("description", description)
    validate_text("ai_summary", ai_summary)
    validate_text("ai_sentiment", ai_sentiment)
    validate_u64("voting_period", voting_period)

    return encode_instruction(
        CreateProposal(
            title=title,
            description=description,
            ai_summary=ai_summary,
            ai_sentiment=ai_sentiment,
            voting_period=voting_period,
        )
    )


def build_create_proposal(
    payer: AddressLike,
    title: str,
    description: str,
    ai_summary: str,
    ai_sentiment: str,
    voting_period: int,
    lamports: int,
    program_id: AddressLike,
    space: int = PROPOSAL_ACCOUNT_SPACE,
    proposal_keypair: Optional[Keypair] = None,
) -> CreateProposalBundle:
    """
    Builds [allocate proposal account, CreateProposal] for a fresh proposal account.

    The account is allocated with a fixed `space`; texts whose encoded record
    exceeds it are rejected by the program, not here.

    Raises:
        ValueOutOfRange: If a text is not a str, or voting_period, lamports
            or space do not fit u64.
    """
    data = encode_create_proposal(title, description, ai_summary, ai_sentiment, voting_period)
    validate_u64("lamports", lamports)
    validate_u64("space", space)

    payer_pubkey = to_pubkey(payer)
    program_pubkey = to_pubkey(program_id)
    proposal_keypair = proposal_keypair or Keypair()
    proposal_pubkey = proposal_keypair.pubkey()

    allocate_ix = create_account(
        CreateAccountParams(
            from_pubkey=payer_pubkey,
            to_pubkey=proposal_pubkey,
            lamports=lamports,
            space=space,
            owner=program_pubkey,
        )
    )
    create_ix = Instruction(
        program_pubkey,
        data,
        [
            AccountMeta(payer_pubkey, is_signer=True, is_writable=True),
            AccountMeta(proposal_pubkey, is_signer=True, is_writable=True),
            AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        ],
    )
    return CreateProposalBundle(
        instructions=[allocate_ix, create_ix],
        signers=[payer_pubkey, proposal_pubkey],
        proposal_keypair=proposal_keypair,
    )


def build_vote(voter: AddressLike, proposal: AddressLike, is_for: bool, program_id: AddressLike) -> InstructionBundle:
    voter_pubkey = to_pubkey(voter)
    data = encode_instruction(Vote(is_for=is_for, vote_weight=DEFAULT_VOTE_WEIGHT))
    vote_ix = Instruction(
        to_pubkey(program_id),
        data,
        [
            AccountMeta(voter_pubkey, is_signer=True, is_writable=True),
            AccountMeta(to_pubkey(proposal), is_signer=False, is_writable=True),
        ],
    )
    return InstructionBundle(instructions=[vote_ix], signers=[voter_pubkey])


def build_execute_proposal(invoker: AddressLike, proposal: AddressLike, program_id: AddressLike) -> InstructionBundle:
    invoker_pubkey = to_pubkey(invoker)
    execute_ix = Instruction(
        to_pubkey(program_id),
        encode_instruction(ExecuteProposal()),
        [
            AccountMeta(invoker_pubkey, is_signer=True, is_writable=False),
            AccountMeta(to_pubkey(proposal), is_signer=False, is_writable=True),
        ],
    )
    return InstructionBundle(instructions=[execute_ix], signers=[invoker_pubkey])
