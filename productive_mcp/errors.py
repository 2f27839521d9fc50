"""Error kinds raised by the timesheet workflow.

Every error carries the HTTP status it is rendered with and a single
descriptive message naming the offending field or value.
"""


class TimesheetError(Exception):
    status_code = 400
    kind = "TimesheetError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedDuration(TimesheetError):
    kind = "MalformedDuration"


class MalformedDate(TimesheetError):
    kind = "MalformedDate"


class NoActorConfigured(TimesheetError):
    kind = "NoActorConfigured"


class MissingRequiredField(TimesheetError):
    kind = "MissingRequiredField"

    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"Missing required field: {field}")
        self.field = field


class InvalidInputShape(TimesheetError):
    status_code = 422
    kind = "InvalidInputShape"


class UpstreamRejected(TimesheetError):
    """The Productive API answered with a failure; detail is passed through."""

    kind = "UpstreamRejected"

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.status_code = upstream_status if upstream_status and upstream_status >= 400 else 502


class NotConfigured(TimesheetError):
    """Credentials for the Productive API are missing from the environment."""

    status_code = 500
    kind = "NotConfigured"
