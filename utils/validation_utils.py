from constants.constants import U64_MAX
from governance.errors import ValueOutOfRange


def validate_u64(field: str, value: int) -> None:
    """
    Validate that a value fits an unsigned 64-bit field.

    Args:
        field: Field name used in the error message.
        value: The value to check, must be an int in [0, 2**64 - 1]

    Raises:
        ValueOutOfRange: If the value is not an integer or does not fit.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueOutOfRange(field, value, f"{field} must be an integer, got {type(value).__name__}")
    if value < 0 or value > U64_MAX:
        raise ValueOutOfRange(field, value, f"{field} must be between 0 and {U64_MAX}, got {value}")


def validate_proposal_text(text: str) -> None:
    """
    Validate the free text a proposal is created from.

    Raises:
        ValueError: If the text is empty or whitespace only.
    """
    if not text or not text.strip():
        raise ValueError("Proposal text must not be empty")


def validate_text(field: str, value: str) -> None:
    """
    Validate that a value can be written as a length-prefixed string field.

    Raises:
        ValueOutOfRange: If the value is not a str.
    """
    if not isinstance(value, str):
        raise ValueOutOfRange(field, value, f"{field} must be text, got {type(value).__name__}")
