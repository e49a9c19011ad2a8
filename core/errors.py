# =============================================================================
# core/errors.py  -  Error types for the conference feed
# =============================================================================
#
# Three things can go wrong while answering a query:
#   1. FetchError        - the feed could not be downloaded
#   2. ParseError        - the feed was downloaded but is not valid event JSON
#   3. InvalidDateError  - a caller passed a date option that isn't YYYY-MM-DD
#
# All three are RECOVERABLE.  core/ raises them; the tools/ layer catches
# them at the operation boundary and hands the message back to the agent as
# ordinary tool output.
# =============================================================================


class ConferenceFeedError(Exception):
    """Base class for every error raised by core/."""


class FetchError(ConferenceFeedError):
    """The event feed could not be retrieved.

    Attributes:
        reason: One of TRANSPORT, UNEXPECTED_STATUS, IO.
        code: The HTTP status code (only for UNEXPECTED_STATUS).
    """

    TRANSPORT = "transport"
    UNEXPECTED_STATUS = "unexpected_status"
    IO = "io"

    def __init__(self, reason: str, detail: str = "", code: int | None = None):
        self.reason = reason
        self.detail = detail
        self.code = code
        super().__init__(self._format())

    def _format(self) -> str:
        if self.reason == self.UNEXPECTED_STATUS:
            return f"unexpected status code: {self.code}"
        if self.reason == self.IO:
            return f"failed to read response body: {self.detail}"
        return f"failed to fetch events: {self.detail}"


class ParseError(ConferenceFeedError):
    """Neither accepted JSON shape could be decoded."""

    MALFORMED_JSON = "malformed_json"

    def __init__(self, detail: str, reason: str = MALFORMED_JSON):
        self.reason = reason
        self.detail = detail
        super().__init__(f"failed to parse event data: {detail}")


class InvalidDateError(ConferenceFeedError):
    """A date-valued filter option is not in YYYY-MM-DD form."""

    def __init__(self, option: str, value: str):
        self.option = option
        self.value = value
        super().__init__(f"{option}: {value!r} is not a YYYY-MM-DD date")
