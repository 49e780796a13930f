"""Error classification — maps failures to error envelopes.

Dispatches on the ``FailureKind`` carried by ``RouteFailure``; anything
else is an internal error.  In production mode internal detail and file
references are kept out of responses and only reach the log.
"""

import logging
import string
from urllib.parse import quote

from htmlroute.errors import FailureKind, RouteFailure
from htmlroute.http.response import Response, ResponseFormatter

logger = logging.getLogger("htmlroute.server")

ERROR_CODE_HEADER = "X-Error-Code"
FILE_PATH_HEADER = "X-File-Path"
ERROR_DETAIL_HEADER = "X-Error-Detail"

MSG_NOT_FOUND = "Page not found"
MSG_FORBIDDEN = "Forbidden"
MSG_INVALID_PATH = "Invalid request path"
MSG_INTERNAL = "Internal server error, please try again later"


def _single_line(text: str) -> str:
    # Header values cannot carry line breaks
    return " ".join(text.split())


# Printable ASCII passes through; "%" is escaped so the value decodes unambiguously
_HEADER_SAFE = string.punctuation.replace("%", "") + " "


def _header_value(text: str) -> str:
    """Single-line, Latin-1-safe header value; other characters are percent-encoded."""
    return quote(_single_line(text), safe=_HEADER_SAFE)


class ErrorClassifier:
    """Turns failures into complete error responses.

    Usage::

        classifier = ErrorClassifier(ResponseFormatter(), production=True)
        response = classifier.classify(exc)
    """

    __slots__ = ("_formatter", "_production")

    def __init__(self, formatter: ResponseFormatter, *, production: bool = False) -> None:
        self._formatter = formatter
        self._production = production

    @property
    def production(self) -> bool:
        return self._production

    def not_found(self) -> Response:
        return self._formatter.error(
            404, MSG_NOT_FOUND, {ERROR_CODE_HEADER: FailureKind.NOT_FOUND.value}
        )

    def forbidden(self) -> Response:
        return self._formatter.error(
            403, MSG_FORBIDDEN, {ERROR_CODE_HEADER: FailureKind.FORBIDDEN.value}
        )

    def invalid_path(self) -> Response:
        return self._formatter.error(
            400, MSG_INVALID_PATH, {ERROR_CODE_HEADER: FailureKind.INVALID_PATH.value}
        )

    def file_not_found(self, file: str) -> Response:
        headers = {ERROR_CODE_HEADER: FailureKind.FILE_NOT_FOUND.value}
        if self._production:
            message = MSG_NOT_FOUND
        else:
            message = f"HTML file not found: {file}"
            headers[FILE_PATH_HEADER] = _header_value(file)
        return self._formatter.error(404, message, headers)

    def internal_error(self, exc: BaseException) -> Response:
        headers = {ERROR_CODE_HEADER: FailureKind.INTERNAL_ERROR.value}
        if self._production:
            message = MSG_INTERNAL
        else:
            message = str(exc) or type(exc).__name__
            headers[ERROR_DETAIL_HEADER] = _header_value(message)
        return self._formatter.error(500, message, headers)

    def classify(self, exc: Exception) -> Response:
        """Map any exception to exactly one error response."""
        if not isinstance(exc, RouteFailure):
            logger.error("Unhandled error: %s", exc, exc_info=exc)
            return self.internal_error(exc)

        logger.debug("%s: %s", exc.kind.value, exc.detail)
        match exc.kind:
            case FailureKind.NOT_FOUND:
                return self.not_found()
            case FailureKind.FILE_NOT_FOUND:
                return self.file_not_found(exc.file or "")
            case FailureKind.INVALID_PATH:
                return self.invalid_path()
            case FailureKind.FORBIDDEN:
                return self.forbidden()
            case FailureKind.INTERNAL_ERROR:
                logger.error("Internal failure: %s", exc.detail, exc_info=exc)
                return self.internal_error(exc)
