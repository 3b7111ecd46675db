from __future__ import annotations

import logging

from estimate_wizard.application.exceptions import SubmissionStepError
from estimate_wizard.application.ports.crm import CrmPort
from estimate_wizard.application.ports.email_delivery import EmailDeliveryPort
from estimate_wizard.application.utils.email_html import compose_confirmation_html, render_breakdown_html
from estimate_wizard.domain.entities.contact import FormContact
from estimate_wizard.domain.entities.content import EmailTemplate, ResultsContent
from estimate_wizard.domain.entities.estimate import EstimateBreakdown
from estimate_wizard.domain.entities.submission_state import (
    SubmissionLatch,
    SubmissionOutcome,
    SubmissionStatus,
    SubmissionStep,
)


class LeadSubmissionOrchestrator:
    """
    Runs the post-submission side effects (confirmation email, marketing
    notification, CRM record) at most once per contact/results pairing.

    The latch moves to in_progress before the first await, so a second trigger
    arriving while the first is suspended sees it and returns without firing.
    A failed step releases the latch; the next submit resumes at that step.
    """

    def __init__(self, email: EmailDeliveryPort, crm: CrmPort) -> None:
        self._email = email
        self._crm = crm
        self._logger = logging.getLogger(__name__)
        self._generation = 0
        self._reset_state()

    def _reset_state(self) -> None:
        self._key: tuple[FormContact, ResultsContent, EstimateBreakdown] | None = None
        self._latch = SubmissionLatch.not_started
        self._status = SubmissionStatus.idle
        self._completed: list[SubmissionStep] = []
        self._failed_step: SubmissionStep | None = None
        self._last_error: SubmissionStepError | None = None
        self._account_id: str | None = None

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def latch(self) -> SubmissionLatch:
        return self._latch

    @property
    def last_error(self) -> SubmissionStepError | None:
        return self._last_error

    def reset(self) -> None:
        """Forget the current pairing. Called when the contact is replaced or the wizard restarts."""
        self._generation += 1
        self._reset_state()

    def outcome(self, fired: bool = False) -> SubmissionOutcome:
        return SubmissionOutcome(
            status=self._status,
            fired=fired,
            completed_steps=tuple(self._completed),
            failed_step=self._failed_step,
            error=str(self._last_error) if self._last_error else None,
            account_id=self._account_id,
        )

    async def submit(
        self,
        contact: FormContact | None,
        results: ResultsContent | None,
        email_template: EmailTemplate | None,
        breakdown: EstimateBreakdown | None,
    ) -> SubmissionOutcome:
        if (
            contact is None
            or results is None
            or email_template is None
            or breakdown is None
            or not contact.name
            or not contact.email
        ):
            return self.outcome()

        key = (contact, results, breakdown)
        if key != self._key:
            self.reset()
            self._key = key

        if self._latch is not SubmissionLatch.not_started:
            return self.outcome()

        self._latch = SubmissionLatch.in_progress
        self._status = SubmissionStatus.processing
        self._failed_step = None
        self._last_error = None
        generation = self._generation

        breakdown_html = render_breakdown_html(breakdown)
        step = SubmissionStep.confirmation_email
        try:
            if step not in self._completed:
                await self._email.send_confirmation_email(
                    to_email=contact.email,
                    to_name=contact.name,
                    html_body=compose_confirmation_html(contact.name, email_template.html_body, breakdown_html),
                    subject=email_template.subject,
                )
                self._mark_done(generation, step)

            step = SubmissionStep.marketing_notification
            if step not in self._completed:
                await self._email.send_internal_notification(contact, breakdown_html)
                self._mark_done(generation, step)

            step = SubmissionStep.crm_record
            if step not in self._completed:
                account_id = await self._crm.create_account_and_contact(contact)
                if generation == self._generation:
                    self._account_id = account_id
                self._mark_done(generation, step)
        except Exception as e:
            error = SubmissionStepError(step.value, str(e))
            error.__cause__ = e
            self._logger.error(
                "Lead submission step failed",
                extra={"step": step.value, "error": str(e)},
            )
            if generation != self._generation:
                return SubmissionOutcome(status=SubmissionStatus.failed, fired=True, failed_step=step, error=str(error))
            self._latch = SubmissionLatch.not_started
            self._status = SubmissionStatus.failed
            self._failed_step = step
            self._last_error = error
            return self.outcome(fired=True)

        if generation != self._generation:
            return SubmissionOutcome(status=SubmissionStatus.completed, fired=True)
        self._latch = SubmissionLatch.done
        self._status = SubmissionStatus.completed
        self._logger.info(
            "Lead submission completed",
            extra={"status": self._status.value, "account_id": self._account_id},
        )
        return self.outcome(fired=True)

    def _mark_done(self, generation: int, step: SubmissionStep) -> None:
        if generation == self._generation:
            self._completed.append(step)
