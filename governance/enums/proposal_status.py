from enum import IntEnum


class ProposalStatus(IntEnum):
    ACTIVE = 0
    PASSED = 1
    REJECTED = 2
    EXECUTED = 3

    @property
    def label(self) -> str:
        """Display name as stored by the program ('Active', 'Passed', ...)."""
        return self.name.capitalize()
