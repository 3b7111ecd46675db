from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SubmissionStatus(str, Enum):
    idle = "idle"
    processing = "processing"
    completed = "completed"
    failed = "failed"


class SubmissionLatch(str, Enum):
    not_started = "not_started"
    in_progress = "in_progress"
    done = "done"


class SubmissionStep(str, Enum):
    confirmation_email = "confirmation_email"
    marketing_notification = "marketing_notification"
    crm_record = "crm_record"


@dataclass(frozen=True)
class SubmissionOutcome:
    status: SubmissionStatus
    fired: bool = False  # True only for the call that ran the sequence
    completed_steps: tuple[SubmissionStep, ...] = field(default_factory=tuple)
    failed_step: SubmissionStep | None = None
    error: str | None = None
    account_id: str | None = None
