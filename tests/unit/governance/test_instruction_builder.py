import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from solders.system_program import decode_create_account

from governance.errors import ValueOutOfRange
from governance.mappers.instruction_mapper import decode_instruction
from governance.models.instructions import CreateProposal, ExecuteProposal, Vote
from governance.service.instruction_builder import (
    build_create_proposal,
    build_execute_proposal,
    build_vote,
    encode_create_proposal,
)

PROGRAM_ID = Pubkey.from_string("C3hALGCa5NAEUYDBt3yM7vNPU44TZ3LCBkciXScri6Ba")


@pytest.fixture
def payer():
    return Keypair().pubkey()


@pytest.fixture
def proposal_address():
    return Keypair().pubkey()


def test_create_proposal_bundle(payer):
    proposal_keypair = Keypair()
    bundle = build_create_proposal(
        payer=payer,
        title="T",
        description="D",
        ai_summary="S",
        ai_sentiment="Pos",
        voting_period=86400,
        lamports=7_850_880,
        program_id=str(PROGRAM_ID),
        proposal_keypair=proposal_keypair,
    )
    allocate_ix, create_ix = bundle.instructions

    assert bundle.signers == [payer, proposal_keypair.pubkey()]
    assert bundle.proposal_pubkey == proposal_keypair.pubkey()

    assert allocate_ix.program_id == SYSTEM_PROGRAM_ID
    params = decode_create_account(allocate_ix)
    assert params["from_pubkey"] == payer
    assert params["to_pubkey"] == proposal_keypair.pubkey()
    assert params["space"] == 1000
    assert params["lamports"] == 7_850_880
    assert params["owner"] == PROGRAM_ID

    assert create_ix.program_id == PROGRAM_ID
    assert decode_instruction(bytes(create_ix.data)) == CreateProposal(
        title="T", description="D", ai_summary="S", ai_sentiment="Pos", voting_period=86400
    )
    metas = [(m.pubkey, m.is_signer, m.is_writable) for m in create_ix.accounts]
    assert metas == [
        (payer, True, True),
        (proposal_keypair.pubkey(), True, True),
        (SYSTEM_PROGRAM_ID, False, False),
    ]


def test_create_proposal_generates_fresh_keypair(payer):
    kwargs = dict(
        payer=payer, title="T", description="D", ai_summary="S", ai_sentiment="P",
        voting_period=60, lamports=1, program_id=PROGRAM_ID,
    )
    assert build_create_proposal(**kwargs).proposal_pubkey != build_create_proposal(**kwargs).proposal_pubkey


def test_create_proposal_custom_space(payer):
    bundle = build_create_proposal(
        payer=payer, title="T", description="D", ai_summary="S", ai_sentiment="P",
        voting_period=60, lamports=1, program_id=PROGRAM_ID, space=2048,
    )
    assert decode_create_account(bundle.instructions[0])["space"] == 2048


@pytest.mark.parametrize("voting_period", [-1, 2**64, 1.5])
def test_create_proposal_rejects_invalid_voting_period(payer, voting_period):
    with pytest.raises(ValueOutOfRange):
        build_create_proposal(
            payer=payer, title="T", description="D", ai_summary="S", ai_sentiment="P",
            voting_period=voting_period, lamports=1, program_id=PROGRAM_ID,
        )


def test_create_proposal_rejects_non_text_title(payer):
    with pytest.raises(ValueOutOfRange) as exc_info:
        build_create_proposal(
            payer=payer, title=None, description="D", ai_summary="S", ai_sentiment="P",
            voting_period=60, lamports=1, program_id=PROGRAM_ID,
        )
    assert exc_info.value.field == "title"


def test_encode_create_proposal_payload():
    data = encode_create_proposal("T", "D", "S", "P", 60)
    assert data[0] == 0
    assert decode_instruction(data) == CreateProposal(
        title="T", description="D", ai_summary="S", ai_sentiment="P", voting_period=60
    )


def test_vote_bundle(payer, proposal_address):
    bundle = build_vote(payer, str(proposal_address), True, PROGRAM_ID)
    (vote_ix,) = bundle.instructions

    assert bundle.signers == [payer]
    assert bytes(vote_ix.data) == bytes([1, 1, 1, 0, 0, 0, 0, 0, 0, 0])
    assert decode_instruction(bytes(vote_ix.data)) == Vote(is_for=True, vote_weight=1)
    metas = [(m.pubkey, m.is_signer, m.is_writable) for m in vote_ix.accounts]
    assert metas == [(payer, True, True), (proposal_address, False, True)]


def test_vote_against_bundle(payer, proposal_address):
    bundle = build_vote(payer, proposal_address, False, PROGRAM_ID)
    assert bytes(bundle.instructions[0].data)[1] == 0


def test_execute_bundle(payer, proposal_address):
    bundle = build_execute_proposal(payer, proposal_address, PROGRAM_ID)
    (execute_ix,) = bundle.instructions

    assert bundle.signers == [payer]
    assert bytes(execute_ix.data) == b"\x02"
    assert decode_instruction(bytes(execute_ix.data)) == ExecuteProposal()
    metas = [(m.pubkey, m.is_signer, m.is_writable) for m in execute_ix.accounts]
    # The invoker signs but is not writable
    assert metas == [(payer, True, False), (proposal_address, False, True)]


def test_invalid_proposal_address(payer):
    with pytest.raises(ValueError):
        build_vote(payer, "not-a-valid-address", True, PROGRAM_ID)
