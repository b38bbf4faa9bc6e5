# -*- coding: utf-8 -*-

import enum

from ipapi_client._exceptions import InvalidQuery, PrivateRange, ReservedRange


class Field(enum.IntEnum):
    """Optional fields of the service response

    The value of every member is the bit weight the service expects in the
    ``fields`` query parameter. The weights are defined by ip-api.com:
    https://ip-api.com/docs/api:json
    """

    def __new__(cls, weight: int, key: str) -> 'Field':
        obj = int.__new__(cls, weight)
        obj._value_ = weight
        obj.key = key
        return obj

    COUNTRY = 1 << 0, 'country'
    COUNTRY_CODE = 1 << 1, 'countryCode'
    REGION = 1 << 2, 'region'
    REGION_NAME = 1 << 3, 'regionName'
    CITY = 1 << 4, 'city'
    ZIP = 1 << 5, 'zip'
    LAT = 1 << 6, 'lat'
    LON = 1 << 7, 'lon'
    TIMEZONE = 1 << 8, 'timezone'
    ISP = 1 << 9, 'isp'
    ORG = 1 << 10, 'org'
    AS = 1 << 11, 'as'
    REVERSE = 1 << 12, 'reverse'
    QUERY = 1 << 13, 'query'
    MOBILE = 1 << 16, 'mobile'
    PROXY = 1 << 17, 'proxy'
    DISTRICT = 1 << 19, 'district'
    CONTINENT = 1 << 20, 'continent'
    CONTINENT_CODE = 1 << 21, 'continentCode'
    ASNAME = 1 << 22, 'asname'
    CURRENCY = 1 << 23, 'currency'
    HOSTING = 1 << 24, 'hosting'
    OFFSET = 1 << 25, 'offset'

    @classmethod
    def from_key(cls, key: str) -> 'Field':
        """Returns the field by its key in the service response
        """
        for field in cls:
            if field.key == key:
                return field
        raise ValueError(f"'{key}' is not a supported field")


# 'status' (1 << 14) is never requested, the client relies on 'message' only
MESSAGE_FIELD = 1 << 15

FIELDS = frozenset(Field)

MINIMAL_FIELDS = frozenset({
    Field.COUNTRY_CODE,
    Field.CITY,
    Field.TIMEZONE,
    Field.OFFSET,
    Field.CURRENCY,
    Field.ISP,
})


class Language(str, enum.Enum):
    DE = 'de'
    EN = 'en'
    ES = 'es'
    FR = 'fr'
    JA = 'ja'
    PT_BR = 'pt-BR'
    RU = 'ru'
    ZH_CN = 'zh-CN'


DEFAULT_LANGUAGE = Language.EN

LANGS = frozenset(lang.value for lang in Language)

MESSAGE_ERRORS = {
    'invalid query': InvalidQuery,
    'private range': PrivateRange,
    'reserved range': ReservedRange,
}
