"""Errors raised by the SauceNAO client."""


class SauceNAOError(Exception):
    pass


class ConstructionError(SauceNAOError):
    """The outgoing request could not be built."""


class TransportError(SauceNAOError):
    """The HTTP exchange itself failed."""


class QuotaError(SauceNAOError):
    """The service answered 429; back off before calling again."""

    def __init__(self, message: str = "rate limited") -> None:
        super().__init__(message)


class UnexpectedStatusError(SauceNAOError):
    def __init__(self, status_code: int, status: str) -> None:
        super().__init__(f"unexpected status {status}")
        self.status_code = status_code
        self.status = status


class DecodeError(SauceNAOError):
    """A response body or result payload did not match its schema."""


__all__ = [
    "SauceNAOError",
    "ConstructionError",
    "TransportError",
    "QuotaError",
    "UnexpectedStatusError",
    "DecodeError",
]
