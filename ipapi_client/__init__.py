# -*- coding: utf-8 -*-

from importlib_metadata import version, PackageNotFoundError

from ipapi_client import _logging  # noqa
from ipapi_client._config import Config, config
from ipapi_client._constants import Field, Language, FIELDS, MINIMAL_FIELDS, LANGS
from ipapi_client._fields import FieldSelector
from ipapi_client._models import IpData
from ipapi_client._client import IpApiClient, fetch_one, fetch_batch
from ipapi_client._exceptions import (
    IpApiError,
    InvalidQuery,
    PrivateRange,
    ReservedRange,
    RateLimited,
    UnexpectedError,
    HttpError,
)


try:
    __version__ = version('ipapi-client')
except PackageNotFoundError:  # pragma: no cover
    __version__ = '0.0.0.dev'

__all__ = [
    '__version__',
    'Config',
    'config',
    'Field',
    'Language',
    'FIELDS',
    'MINIMAL_FIELDS',
    'LANGS',
    'FieldSelector',
    'IpData',
    'IpApiClient',
    'fetch_one',
    'fetch_batch',
    'IpApiError',
    'InvalidQuery',
    'PrivateRange',
    'ReservedRange',
    'RateLimited',
    'UnexpectedError',
    'HttpError',
]
