from typing import Optional


class APIError(Exception):
    """Unified error for every failed call to the BetSmoke proxy.

    ``code`` is ``NETWORK`` for connection problems and timeouts,
    ``HTTP_<status>`` for non-2xx replies, ``BAD_JSON`` for unparseable
    bodies and ``UNAUTHENTICATED`` when no session token is available.
    """

    def __init__(self, source: str, code: str, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.code = code
        self.message = message
        self.details = details

    @property
    def status_code(self) -> Optional[int]:
        if self.code.startswith("HTTP_"):
            try:
                return int(self.code[5:])
            except ValueError:
                return None
        return None

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "code": self.code,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }
