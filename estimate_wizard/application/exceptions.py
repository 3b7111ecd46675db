from __future__ import annotations


class ContentFetchError(RuntimeError):
    """Raised when content cannot be loaded from the CMS."""

    kind = "fetch_failed"


class NetworkError(ContentFetchError):
    """Transient failure (timeout, connection error, 5xx). Retried by the fetch layer."""

    kind = "network"


class NotFoundError(ContentFetchError):
    """Unknown category or slug. Not retried."""

    kind = "not_found"


class MalformedContentError(ContentFetchError):
    """CMS answered but the payload is unusable (success=false, missing fields)."""

    kind = "malformed"


class ContactValidationError(ValueError):
    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        super().__init__("Invalid contact details: " + ", ".join(sorted(self.field_errors)))


class CostParseError(ValueError):
    def __init__(self, question_index: int, option_index: int, field: str, value: object) -> None:
        self.question_index = question_index
        self.option_index = option_index
        self.field = field
        self.value = value
        super().__init__(
            f"Option {option_index} of question {question_index} has an invalid {field}: {value!r}"
        )


class DeliveryError(RuntimeError):
    """Raised when an email or CRM relay call fails."""


class SubmissionStepError(RuntimeError):
    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step} failed: {message}")
