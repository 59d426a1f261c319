"""Team invitation lifecycle."""

from enum import StrEnum


class InvitationStatus(StrEnum):
    """PENDING is the only non-terminal state."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING
