"""
Error taxonomy for the list-screen engine.

SelectionError subclasses are logical precondition failures: they are shown
to the user as transient notices and never change state. NetworkFailure is
shown as a retryable notice and empties the visible page. RequestCanceled
marks a superseded request and never reaches the user.
"""


class FreightUiError(Exception):
    """Base class for engine errors."""


class SelectionError(FreightUiError):
    """A selection operation whose precondition did not hold."""

    notice = "Selection could not be changed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.notice)


class EmptyUniverse(SelectionError):
    notice = "No items found to select based on current filters."


class NoMatches(SelectionError):
    notice = "No items match the current filters; nothing was excluded."


class NothingToExclude(SelectionError):
    notice = "No selected items on this page to exclude."


class NothingSelected(SelectionError):
    notice = "Nothing is selected."


class AlreadyAllMatching(SelectionError):
    notice = "All matching items are already selected; clear the selection first."


class RequestCanceled(FreightUiError):
    """A request was superseded by a newer one."""


class NetworkFailure(FreightUiError):
    """
    The backend could not be reached or answered with an error.

    Attributes:
        retryable: Always True; the UI offers a retry.
        status: HTTP status when the backend answered, else None.
    """

    retryable = True

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class CountMismatch(FreightUiError):
    """A bulk action returned a different number of records than selected."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} records, backend returned {actual}")
        self.expected = expected
        self.actual = actual
