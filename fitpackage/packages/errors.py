"""Client lifecycle error types.

Error codes:
- INVALID_TRANSITION: Transition not allowed from the client's current status
- NO_OPEN_PAUSE: Client is paused but has no open pause interval to close
- RESUME_BEFORE_PAUSE: Resume date precedes the open pause's start
- INVALID_PACKAGE_DAYS: Renewal requested with a non-positive package length
"""


class LifecycleError(RuntimeError):
    """Raised when a client lifecycle transition cannot be applied.

    Attributes:
        code: Error code (e.g., "INVALID_TRANSITION", "NO_OPEN_PAUSE")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")
