import base64
import binascii
from typing import Any, Optional, Union

import orjson
from solders.pubkey import Pubkey

from constants.constants import PROPOSAL_TITLE_MAX_CHARS, PROPOSAL_TITLE_PREFIX
from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")


def to_pubkey(address: Union[str, bytes, Pubkey]) -> Pubkey:
    """
    Accepts a base58 address, 32 raw bytes or a Pubkey and returns a Pubkey.

    Raises:
        ValueError: If the input is not a valid 32-byte public key.
    """
    if isinstance(address, Pubkey):
        return address
    if isinstance(address, (bytes, bytearray)):
        if len(address) != 32:
            raise ValueError(f"Public key must be 32 bytes, got {len(address)}")
        return Pubkey.from_bytes(bytes(address))
    if isinstance(address, str):
        try:
            return Pubkey.from_string(address.strip())
        except Exception as e:
            raise ValueError(f"Invalid address {address!r}: {e}") from e
    raise ValueError(f"Cannot convert {type(address).__name__} to a public key")


def bytes_to_address(raw: bytes) -> str:
    """Renders a 32-byte identifier as its canonical base58 address."""
    return str(to_pubkey(raw))


def address_to_bytes(address: str) -> bytes:
    return bytes(to_pubkey(address))


def decode_account_data(data: Any) -> Optional[bytes]:
    """
    Extracts raw bytes from the `data` field of a JSON-RPC account object.

    Handles the `[payload, "base64"]` form requested by the client and plain
    base64 strings. Returns None when the payload cannot be decoded.
    """
    if data is None:
        return None
    if isinstance(data, (list, tuple)):
        if len(data) != 2 or data[1] != "base64":
            logger.warning(f"Unsupported account data encoding: {data[1:] if data else data}")
            return None
        data = data[0]
    if isinstance(data, str):
        try:
            return base64.b64decode(data, validate=True)
        except binascii.Error as e:
            logger.warning(f"Account data is not valid base64: {e}")
            return None
    logger.warning(f"Unexpected account data type: {type(data).__name__}")
    return None


def make_proposal_title(text: str) -> str:
    """Short title derived from the proposal text, e.g. 'Proposal: Increase treasury...'."""
    text = text.strip()
    suffix = "..." if len(text) > PROPOSAL_TITLE_MAX_CHARS else ""
    return f"{PROPOSAL_TITLE_PREFIX}{text[:PROPOSAL_TITLE_MAX_CHARS]}{suffix}"


def to_pretty_json(item: Any) -> str:
    return orjson.dumps(item, option=orjson.OPT_INDENT_2).decode("utf-8")
