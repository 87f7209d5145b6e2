class RemoteRequestError(Exception):
    """Raised when a backend answers with a non-success status.

    The message mirrors what the backend reported: "<status> <reason>" followed
    by the response body on the next line, if there is one.
    """

    def __init__(self, status_code: int, reason: str = "", body: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        message = f"{status_code} {reason}".strip()
        if body:
            message += f"\n{body}"
        super().__init__(message)
