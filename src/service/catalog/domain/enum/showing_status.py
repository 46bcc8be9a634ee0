from enum import StrEnum


class ShowingStatus(StrEnum):
    SCHEDULED = 'SCHEDULED'
    RUNNING = 'RUNNING'
    SOLD_OUT = 'SOLD_OUT'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'

    @property
    def is_releasable(self) -> bool:
        """Seats handed back to the ledger can still be sold to someone else."""
        return self in (ShowingStatus.SCHEDULED, ShowingStatus.RUNNING)
