# -*- coding: utf-8 -*-

from pydantic import BaseModel, ConfigDict, HttpUrl, constr


class Config(BaseModel):
    """The configuration of the ip-api.com service

    The endpoints are defined by the service and rarely change, but they can
    be changed by a user if necessary (for example, to point the client to a
    local mock server).
    """

    model_config = ConfigDict(validate_assignment=True)

    base_url: HttpUrl = 'http://ip-api.com/'
    json_endpoint: constr(strict=True, min_length=1) = 'json'
    batch_endpoint: constr(strict=True, min_length=1) = 'batch'


config = Config()
