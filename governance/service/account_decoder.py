from typing import Optional

from constants.constants import FALLBACK_SCAN_STEP, MIN_ACCOUNT_DATA_SIZE
from governance.errors import MalformedRecord, UnrecoverableAccount
from governance.mappers.proposal_mapper import decode_proposal
from governance.models.proposal import Proposal
from utils.logger_utils import get_logger

logger = get_logger("Account Decoder")


def _scan_padded(
    address: str, data: bytes, step: int, min_size: int
) -> Optional[Proposal]:
    """
    Walks candidate lengths n, n-step, n-2*step, ... down to `min_size`.

    Each candidate decodes the prefix `data[:length]` and accepts fewer than
    `step` unread bytes, so every record end falls inside exactly one window.
    The longest candidate that decodes wins.

    Candidates are memoryview slices of one buffer. A prefix reads the same
    bytes as the full buffer, so a candidate rejected for trailing bytes tells
    how many further candidates would be rejected the same way, and those are
    skipped. A structural failure repeats on every shorter prefix and ends the
    scan.
    """
    view = memoryview(data)
    length = len(data)
    while length >= min_size:
        try:
            proposal = decode_proposal(view[:length], pubkey=address, max_trailing=step - 1)
        except MalformedRecord as e:
            logger.debug(f"Account {address}: candidate length {length} rejected ({e.reason.value})")
            if not e.is_trailing_bytes:
                return None
            length -= max((e.length - e.consumed) // step, 1) * step
            continue
        logger.info(f"Account {address}: recovered proposal from {length} of {len(data)} bytes")
        return proposal
    return None


def decode_proposal_account(
    address: str,
    data: bytes,
    step: int = FALLBACK_SCAN_STEP,
    min_size: int = MIN_ACCOUNT_DATA_SIZE,
) -> Proposal:
    """
    Decodes the raw data of a proposal account, tolerating trailing padding.

    A strict decode of the full buffer is tried first. Only a trailing-bytes
    failure triggers the fallback scan; structural damage (truncation, string
    overrun, invalid status) fails straight away.

    Args:
        address: Account address, attached to the result as `pubkey`.
        data: Account data as returned by the RPC node.
        step: Distance between candidate lengths in the fallback scan.
        min_size: Buffers shorter than this are never decoded.

    Raises:
        UnrecoverableAccount: If no candidate length yields a valid record.
    """
    if step < 1:
        raise ValueError(f"Fallback scan step must be positive, got {step}")

    data = memoryview(data)
    if len(data) < min_size:
        logger.warning(f"Account {address}: data too short to be a proposal ({len(data)} bytes)")
        raise UnrecoverableAccount(address, len(data))

    try:
        return decode_proposal(data, pubkey=address)
    except MalformedRecord as e:
        if not e.is_trailing_bytes:
            logger.warning(f"Account {address}: malformed proposal record: {e}")
            raise UnrecoverableAccount(address, len(data)) from e
        logger.debug(f"Account {address}: strict decode failed: {e}")

    proposal = _scan_padded(address, data, step, min_size)
    if proposal is None:
        logger.warning(f"Account {address}: all decode attempts failed")
        raise UnrecoverableAccount(address, len(data))
    return proposal


def try_decode_proposal_account(
    address: str,
    data: bytes,
    step: int = FALLBACK_SCAN_STEP,
    min_size: int = MIN_ACCOUNT_DATA_SIZE,
) -> Optional[Proposal]:
    """Same as decode_proposal_account but returns None for unrecoverable accounts."""
    try:
        return decode_proposal_account(address, data, step=step, min_size=min_size)
    except UnrecoverableAccount:
        return None
