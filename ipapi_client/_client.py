# -*- coding: utf-8 -*-

import asyncio
from collections import abc
from ipaddress import IPv4Address, IPv6Address
from http import HTTPStatus
from typing import Optional, List, Union, Type, Iterable, AsyncIterable, Any
from types import TracebackType

from pydantic import TypeAdapter, ValidationError
import aiohttp
import yarl

from ipapi_client._logging import logger
from ipapi_client._config import config
from ipapi_client._constants import MESSAGE_ERRORS
from ipapi_client._fields import FieldSelector
from ipapi_client._models import (
    IpData,
    ip_data_adapter,
    ip_data_list_adapter,
    message_adapter,
    message_list_adapter,
)
from ipapi_client._utils import to_target, collect_targets, parse_ttl
from ipapi_client._exceptions import UnexpectedError, HttpError, RateLimited


_TargetType = Union[str, IPv4Address, IPv6Address]
_TargetsType = Union[Iterable[_TargetType], AsyncIterable[_TargetType]]
_TimeoutType = Optional[Union[aiohttp.ClientTimeout, int, float]]


def _check_message(message: Optional[str]) -> None:
    if not message:
        return
    error_cls = MESSAGE_ERRORS.get(message)
    if error_cls:
        raise error_cls(message)
    raise UnexpectedError(detail=message)


def _validate_json(adapter: TypeAdapter, text: str) -> Any:
    try:
        return adapter.validate_json(text)
    except ValidationError as err:
        raise UnexpectedError(detail=f"Failed to parse the response: {err}") from err


class IpApiClient:
    """IP-API asynchronous http client to perform geo-location

    Asynchronous http client for https://ip-api.com/ geo-location web-service.
    The set of returned fields and the language are defined by
    :class:`FieldSelector` passed to every request.

    :param session: Existing aiohttp.ClientSession istance

    """

    def __init__(self,
                 *,
                 session: Optional[aiohttp.ClientSession] = None,
                 ) -> None:

        if session and not isinstance(session, aiohttp.ClientSession):
            raise TypeError(f"'session' argument must be an instance of {aiohttp.ClientSession}")

        if session:
            own_session = False
        else:
            session = aiohttp.ClientSession()
            own_session = True

        self._session: Optional[aiohttp.ClientSession] = session
        self._own_session = own_session

        self._base_url = yarl.URL(str(config.base_url))
        self._json_endpoint = config.json_endpoint
        self._batch_endpoint = config.batch_endpoint

    def __enter__(self) -> None:
        raise TypeError("Use 'async with' statement instead")

    def __exit__(self,
                 exc_type: Optional[Type[BaseException]],
                 exc_val: Optional[BaseException],
                 exc_tb: Optional[TracebackType]) -> None:
        pass  # pragma: no cover

    async def __aenter__(self) -> 'IpApiClient':
        return self

    async def __aexit__(self,
                        exc_type: Optional[Type[BaseException]],
                        exc_val: Optional[BaseException],
                        exc_tb: Optional[TracebackType]) -> None:
        await self.close()

    @property
    def closed(self) -> bool:
        """Returns True if the client is closed
        """
        return self._session is None

    async def close(self):
        """Close client and own session
        """

        if self._own_session and not self.closed:
            await self._session.close()
        self._session = None

    async def fetch_one(self,
                        selector: FieldSelector,
                        target: _TargetType = '',
                        *,
                        timeout: _TimeoutType = None,
                        ) -> IpData:
        """Locate IP/domain

        :param selector: The requested fields and the language of the result
        :param target: IP/domain or empty string to locate the client's own address
        :param timeout: The timeout of the whole request to the service
        :return: The result data
        """

        self._check_selector(selector)
        target = to_target(target)

        if target:
            endpoint = f'{self._json_endpoint}/{target}'
        else:
            endpoint = self._json_endpoint

        url = self._make_url(endpoint, selector)
        text = await self._fetch_text('GET', url, timeout=timeout)

        _check_message(_validate_json(message_adapter, text).message)
        return _validate_json(ip_data_adapter, text)

    async def fetch_batch(self,
                          selector: FieldSelector,
                          targets: _TargetsType,
                          *,
                          timeout: _TimeoutType = None,
                          ) -> List[IpData]:
        """Locate a batch of IPs with one request

        The method uses batch API: https://ip-api.com/docs/api:batch

        :param selector: The requested fields and the language of the results
        :param targets: The iterable or async iterable of IPs
        :param timeout: The timeout of the whole request to the service
        :return: The list of results in the same order as the targets
        """

        self._check_selector(selector)

        if isinstance(targets, (str, bytes)) or not isinstance(targets, (abc.Iterable, abc.AsyncIterable)):
            raise TypeError("'targets' argument must be an iterable or async iterable")

        targets = await collect_targets(targets)
        if not targets:
            return []

        url = self._make_url(self._batch_endpoint, selector)
        text = await self._fetch_text('POST', url, json=targets, timeout=timeout)

        for message in _validate_json(message_list_adapter, text):
            _check_message(message.message)

        results = _validate_json(ip_data_list_adapter, text)
        if len(results) != len(targets):
            raise UnexpectedError(
                detail=f"The service returned {len(results)} results for {len(targets)} targets")
        return results

    def _check_selector(self, selector):
        if self.closed:
            raise ValueError('The client session is already closed')
        if not isinstance(selector, FieldSelector):
            raise TypeError(f"'selector' argument must be an instance of {FieldSelector}")

    def _make_url(self, endpoint: str, selector: FieldSelector) -> yarl.URL:
        url = self._base_url / endpoint
        return url.with_query(selector.render())

    @staticmethod
    def _check_rate_limit(resp):
        if 'X-Rl' in resp.headers and 'X-Ttl' in resp.headers:
            logger.debug("API rate limit: rl=%s, ttl=%s", resp.headers['X-Rl'], resp.headers['X-Ttl'])

        if resp.status == HTTPStatus.TOO_MANY_REQUESTS:
            ttl = parse_ttl(resp.headers)
            logger.warning("API rate limit is reached. The limit will be reset in %d seconds", ttl)
            raise RateLimited(f"(HTTP {resp.status}) Too many requests, retry after {ttl} seconds", retry_after=ttl)

    @staticmethod
    def _check_http_status(resp, text):
        status = resp.status

        if status == HTTPStatus.OK:
            return

        try:
            detail = message_adapter.validate_json(text).message
        except ValidationError:
            # the body of an error response is not always JSON
            detail = None

        raise HttpError(f"HTTP {status} error occurred", status=status, detail=detail or resp.reason)

    async def _fetch_text(self, method, url, *, json=None, timeout=None):
        if isinstance(timeout, (int, float)):
            timeout = aiohttp.ClientTimeout(total=timeout)

        kwargs = {}
        if json is not None:
            kwargs['json'] = json
        if timeout is not None:
            kwargs['timeout'] = timeout

        logger.debug("%s %s", method, url)

        try:
            async with self._session.request(method, url, **kwargs) as resp:
                self._check_rate_limit(resp)
                try:
                    text = await resp.text()
                except UnicodeDecodeError as err:
                    raise UnexpectedError(detail=f"Failed to decode the response body: {err}") from err
                self._check_http_status(resp, text)
                return text
        except asyncio.TimeoutError as err:
            raise UnexpectedError(detail="The request to the service timed out") from err
        except aiohttp.ClientError as err:
            raise UnexpectedError(detail=f"Client error: {repr(err)}") from err


async def fetch_one(selector: FieldSelector,
                    target: _TargetType = '',
                    *,
                    session: Optional[aiohttp.ClientSession] = None,
                    timeout: _TimeoutType = None,
                    ) -> IpData:
    """Locate IP/domain

    The shortcut function to get geo-location of IP/domain.

    Parameters:

    :param selector: The requested fields and the language of the result
    :param target: IP/domain or empty string to locate the client's own address
    :param session: Existing aiohttp.ClientSession istance
    :param timeout: The timeout of the whole request to the service
    :return: The result data

    """

    client = IpApiClient(session=session)

    try:
        result = await client.fetch_one(selector, target, timeout=timeout)
    finally:
        await client.close()

    return result


async def fetch_batch(selector: FieldSelector,
                      targets: _TargetsType,
                      *,
                      session: Optional[aiohttp.ClientSession] = None,
                      timeout: _TimeoutType = None,
                      ) -> List[IpData]:
    """Locate a batch of IPs

    The shortcut function to get geo-location of IPs with one batch request.

    Parameters:

    :param selector: The requested fields and the language of the results
    :param targets: The iterable or async iterable of IPs
    :param session: Existing aiohttp.ClientSession istance
    :param timeout: The timeout of the whole request to the service
    :return: The list of results in the same order as the targets

    """

    client = IpApiClient(session=session)

    try:
        result = await client.fetch_batch(selector, targets, timeout=timeout)
    finally:
        await client.close()

    return result
