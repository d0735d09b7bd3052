"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Required request parameter is missing or malformed"""

    pass


class ConfigError(DomainException):
    """Service is missing configuration it needs (e.g. the upstream API key)"""

    pass


class NotFoundError(DomainException):
    """Upstream query succeeded but matched no records"""

    pass


class UpstreamError(DomainException):
    """College Scorecard API returned an error or is unavailable"""

    def __init__(self, status: int, detail: str | None = None):
        super().__init__(f"Upstream error {status}: {detail}" if detail else f"Upstream error {status}")
        self.status = status
        self.detail = detail


class RecordParseError(UpstreamError):
    """Upstream record is malformed and cannot be turned into a SchoolRecord"""

    def __init__(self, detail: str):
        super().__init__(502, detail)


class InternalError(DomainException):
    """Unexpected failure; details stay in the server log"""

    pass
