"""Error types raised by the session, timetable and login services.

Routes let these propagate; handlers registered in ``app.main`` turn
them into JSON responses with the status code carried by each class.
"""


class ClavisionError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ClavisionError):
    """A user, room, class, file or login state does not exist."""

    status_code = 404


class InvalidSessionError(ClavisionError):
    """The access token matches no user's current token hash.

    Raised for unknown tokens and for tokens superseded by a later login,
    since only the most recently issued token of a user is valid.
    """

    status_code = 401

    def __init__(self, detail: str = "Access token is invalid or was revoked by a newer login"):
        super().__init__(detail)


class InvalidStateError(ClavisionError):
    """The login state is unknown, expired, or was already consumed.

    The social login flow must be aborted, not retried.
    """

    status_code = 400


class UpstreamFailureError(ClavisionError):
    """Storage or the identity provider failed while serving the request."""

    status_code = 502
