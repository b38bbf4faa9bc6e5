# -*- coding: utf-8 -*-

from typing import Optional


class IpApiError(Exception):
    pass


class InvalidQuery(IpApiError):
    """Incorrect IP address or non-existent domain (``1.1.1.one``)
    """


class PrivateRange(IpApiError):
    """IP address from a private network (``10.0.0.1``, ``192.168.1.1``)
    """


class ReservedRange(IpApiError):
    """IP address from a reserved range (``127.0.0.1``)
    """


class RateLimited(IpApiError):
    """The service rate limit is reached

    ``retry_after`` is the number of seconds until the limit is reset.
    """

    def __init__(self, *args: object, retry_after: int) -> None:
        super().__init__(*args)
        self.retry_after = retry_after


class UnexpectedError(IpApiError):
    def __init__(self, *args: object, detail: Optional[str] = None) -> None:
        if not args and detail:
            args = (detail,)
        super().__init__(*args)
        self.detail = detail


class HttpError(UnexpectedError):
    def __init__(self, *args: object, status: int, detail: Optional[str] = None) -> None:
        super().__init__(*args, detail=detail)
        self.status = status
