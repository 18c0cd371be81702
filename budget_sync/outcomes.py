"""Per-event results and the batch report built from them."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class OutcomeStatus(Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class EventOutcome:
    status: OutcomeStatus
    event_id: Optional[str] = None
    account_id: Optional[str] = None
    value: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def written(cls, event_id, account_id, value):
        return cls(OutcomeStatus.WRITTEN, event_id, account_id, value)

    @classmethod
    def skipped(cls, event_id, reason=None, account_id=None):
        return cls(OutcomeStatus.SKIPPED, event_id, account_id, reason=reason)

    @classmethod
    def failed(cls, event_id, reason, account_id=None, value=None):
        return cls(OutcomeStatus.FAILED, event_id, account_id, value, reason)


@dataclass
class BatchReport:
    outcomes: List[EventOutcome] = field(default_factory=list)

    def add(self, outcome):
        self.outcomes.append(outcome)
        return outcome

    def _with_status(self, status):
        return [o for o in self.outcomes if o.status is status]

    @property
    def written(self):
        return self._with_status(OutcomeStatus.WRITTEN)

    @property
    def skipped(self):
        return self._with_status(OutcomeStatus.SKIPPED)

    @property
    def failed(self):
        return self._with_status(OutcomeStatus.FAILED)

    def summary(self):
        return {
            "records": len(self.outcomes),
            "written": len(self.written),
            "skipped": len(self.skipped),
            "failed": len(self.failed),
            "failed_accounts": [o.account_id for o in self.failed],
        }

    def log(self, logger):
        summary = self.summary()
        logger.info(
            "Processed %d records: %d written, %d skipped, %d failed",
            summary["records"],
            summary["written"],
            summary["skipped"],
            summary["failed"],
        )
        if summary["failed"]:
            logger.info("Accounts not updated: %s", summary["failed_accounts"])
