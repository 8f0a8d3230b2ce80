import os
from unittest.mock import patch

import pytest

from governance.enums.proposal_status import ProposalStatus
from governance.errors import UnrecoverableAccount
from governance.mappers.proposal_mapper import encode_proposal
from governance.models.proposal import Proposal
from governance.service import account_decoder
from governance.service.account_decoder import decode_proposal_account, try_decode_proposal_account

ADDRESS = "11111111111111111111111111111112"

PROPOSAL = Proposal(
    creator=bytes([7]) * 32,
    title="Increase grants",
    description="Increase community treasury allocation for developer grants from 5% to 10%.",
    status=ProposalStatus.ACTIVE,
    votes_for=12,
    votes_against=4,
    ai_analysis_summary="Raises grant budget",
    ai_analysis_sentiment="Positive",
    created_at=1_700_000_000,
    voting_ends_at=1_700_086_400,
)
RECORD = encode_proposal(PROPOSAL)
EXPECTED = PROPOSAL.model_copy(update={"pubkey": ADDRESS})


def test_exact_buffer():
    assert decode_proposal_account(ADDRESS, RECORD) == EXPECTED


@pytest.mark.parametrize("padding", range(1, 30))
def test_recovers_record_after_padding(padding):
    data = RECORD + os.urandom(padding)
    assert decode_proposal_account(ADDRESS, data) == EXPECTED


@pytest.mark.parametrize("padding", [30, 45, 99, 1000 - len(RECORD)])
def test_padding_content_never_changes_result(padding):
    # Padding that looks like another record still yields the real record
    decoy = encode_proposal(PROPOSAL.model_copy(update={"title": "Other", "votes_for": 999}))
    data = RECORD + (decoy * 20)[:padding]
    assert decode_proposal_account(ADDRESS, data) == EXPECTED


def test_zero_padded_allocation():
    data = RECORD + b"\x00" * (1000 - len(RECORD))
    proposal = decode_proposal_account(ADDRESS, data)
    assert proposal.title == "Increase grants"
    assert proposal.pubkey == ADDRESS


def test_buffer_below_identifier_size():
    with pytest.raises(UnrecoverableAccount) as exc_info:
        decode_proposal_account(ADDRESS, RECORD[:31])
    assert exc_info.value.address == ADDRESS
    assert exc_info.value.data_length == 31
    assert try_decode_proposal_account(ADDRESS, bytes(31)) is None


def test_structural_error_fails_without_scan():
    assert try_decode_proposal_account(ADDRESS, RECORD[:-1]) is None
    assert try_decode_proposal_account(ADDRESS, RECORD[:60]) is None


def test_invalid_status_is_unrecoverable():
    data = bytearray(RECORD + b"\x00" * 40)
    status_offset = 32 + 4 + len(PROPOSAL.title) + 4 + len(PROPOSAL.description)
    data[status_offset] = 4
    assert try_decode_proposal_account(ADDRESS, bytes(data)) is None


def test_custom_step():
    data = RECORD + b"\xaa" * 23
    assert decode_proposal_account(ADDRESS, data, step=4) == EXPECTED


def test_step_must_be_positive():
    with pytest.raises(ValueError):
        decode_proposal_account(ADDRESS, RECORD, step=0)


def test_large_zero_padded_buffer():
    data = RECORD + b"\x00" * 2_000_000
    assert decode_proposal_account(ADDRESS, data) == EXPECTED


def test_scan_skips_candidates_that_leave_padding_unread():
    data = RECORD + b"\x00" * 5_000
    with patch.object(account_decoder, "decode_proposal", wraps=account_decoder.decode_proposal) as mock_decode:
        assert decode_proposal_account(ADDRESS, data) == EXPECTED
    # strict decode, the first window, then the window holding the record end
    assert mock_decode.call_count <= 3


def test_accepts_memoryview_input():
    data = memoryview(bytearray(RECORD + b"\x00" * 17))
    assert decode_proposal_account(ADDRESS, data) == EXPECTED
