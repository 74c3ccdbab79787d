from enum import Enum


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid-argument"
    FAILED_PRECONDITION = "failed-precondition"
    DEADLINE_EXCEEDED = "deadline-exceeded"
    INTERNAL = "internal"


class PipelineError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


CONFIGURATION_ERROR = "AI service configuration error"
TIMEOUT_ERROR = "AI request timed out, please try again"
GENERIC_ERROR = "Failed to parse command. Please try rephrasing."


def classify_error(exc: BaseException) -> PipelineError:
    """Map any pipeline failure onto exactly one error kind.

    Already-classified errors pass through untouched. Everything else is
    matched on its message text only, and the caller never sees that text.
    """
    if isinstance(exc, PipelineError):
        return exc

    message = str(exc).lower()
    if "api key" in message:
        return PipelineError(ErrorKind.FAILED_PRECONDITION, CONFIGURATION_ERROR)
    if "timeout" in message:
        return PipelineError(ErrorKind.DEADLINE_EXCEEDED, TIMEOUT_ERROR)
    return PipelineError(ErrorKind.INTERNAL, GENERIC_ERROR)
