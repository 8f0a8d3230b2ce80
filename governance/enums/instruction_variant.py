from enum import IntEnum

from constants.constants import CREATE_PROPOSAL_TAG, EXECUTE_PROPOSAL_TAG, VOTE_TAG


class InstructionVariant(IntEnum):
    CREATE_PROPOSAL = CREATE_PROPOSAL_TAG
    VOTE = VOTE_TAG
    EXECUTE_PROPOSAL = EXECUTE_PROPOSAL_TAG
