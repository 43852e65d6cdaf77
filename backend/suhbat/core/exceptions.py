"""
Interview error taxonomy.

Controller-level errors raised to the HTTP layer. Model transport errors live in
suhbat.utils.llm_retry.
"""


class InterviewError(Exception):
    """Base class for interview flow errors."""
    pass


class InvalidProfessionError(InterviewError):
    """Raised when a profession id is not one of the static profiles (HTTP 400)."""

    def __init__(self, profession_id):
        self.profession_id = profession_id
        super().__init__(f"Invalid profession: {profession_id!r}")


class UpstreamError(InterviewError):
    """Raised when the model call failed after all retries (HTTP 500)."""
    pass


class MalformedResponseError(InterviewError):
    """Raised when model output does not contain a usable evaluation object."""
    pass
