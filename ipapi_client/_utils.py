# -*- coding: utf-8 -*-

from ipaddress import IPv4Address, IPv6Address
from typing import Mapping, List, Optional

import aioitertools

from ipapi_client._exceptions import UnexpectedError


def to_target(target) -> str:
    """Validates a query target (IP address or domain) and returns it as string
    """

    if isinstance(target, (IPv4Address, IPv6Address)):
        return str(target)
    if not isinstance(target, str):
        raise TypeError(f"target must be a string or an IP address, not {type(target)}")
    return target


async def collect_targets(targets) -> List[str]:
    """Collects targets from iterable or async iterable preserving the order
    """

    return [to_target(target) for target in await aioitertools.list(targets)]


def parse_ttl(headers: Mapping[str, str]) -> int:
    """Returns the number of seconds until the rate limit is reset

    The value is taken from ``X-Ttl`` header of a "429 Too Many Requests" response.
    """

    ttl: Optional[str] = headers.get('X-Ttl')
    if ttl is None:
        raise UnexpectedError(detail="Failed to get 'X-Ttl' header from the response")

    try:
        seconds = int(ttl)
    except ValueError as err:
        raise UnexpectedError(detail=f"Failed to parse 'X-Ttl' header from the response: '{ttl}'") from err

    if seconds < 0:
        raise UnexpectedError(detail=f"'X-Ttl' header must not be negative: {seconds}")

    return seconds
