# -*- coding: utf-8 -*-

from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class IpData(BaseModel):
    """Geo-location data of an IP address or a domain

    Every attribute is ``None`` unless the corresponding field was requested
    and the service has data for it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    continent: Optional[str] = None
    continent_code: Optional[str] = Field(default=None, alias='continentCode')
    country: Optional[str] = None
    country_code: Optional[str] = Field(default=None, alias='countryCode')
    region: Optional[str] = None
    region_name: Optional[str] = Field(default=None, alias='regionName')
    city: Optional[str] = None
    district: Optional[str] = None
    zip: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    timezone: Optional[str] = None
    offset: Optional[int] = None
    currency: Optional[str] = None
    isp: Optional[str] = None
    org: Optional[str] = None
    # 'as' is a keyword
    as_: Optional[str] = Field(default=None, alias='as')
    asname: Optional[str] = None
    reverse: Optional[str] = None
    mobile: Optional[bool] = None
    proxy: Optional[bool] = None
    hosting: Optional[bool] = None
    query: Optional[str] = None


class _Message(BaseModel):
    """Permissive model to find in-band errors in the service response
    """

    model_config = ConfigDict(extra='ignore')

    message: Optional[str] = None


ip_data_adapter = TypeAdapter(IpData)
ip_data_list_adapter = TypeAdapter(List[IpData])

message_adapter = TypeAdapter(_Message)
message_list_adapter = TypeAdapter(List[_Message])
