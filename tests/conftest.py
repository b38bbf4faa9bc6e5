# -*- coding: utf-8 -*-

import asyncio
import ipaddress

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestServer
from aiohttp import web

from ipapi_client import config as ipapi_config


# Field weights as documented by ip-api.com: https://ip-api.com/docs/api:json
FIELD_WEIGHTS = {
    'country': 1 << 0,
    'countryCode': 1 << 1,
    'region': 1 << 2,
    'regionName': 1 << 3,
    'city': 1 << 4,
    'zip': 1 << 5,
    'lat': 1 << 6,
    'lon': 1 << 7,
    'timezone': 1 << 8,
    'isp': 1 << 9,
    'org': 1 << 10,
    'as': 1 << 11,
    'reverse': 1 << 12,
    'query': 1 << 13,
    'status': 1 << 14,
    'message': 1 << 15,
    'mobile': 1 << 16,
    'proxy': 1 << 17,
    'district': 1 << 19,
    'continent': 1 << 20,
    'continentCode': 1 << 21,
    'asname': 1 << 22,
    'currency': 1 << 23,
    'hosting': 1 << 24,
    'offset': 1 << 25,
}

OWN_ADDRESS = '93.184.216.34'

DOMAINS = {
    'one.one.one.one': '1.1.1.1',
    'dns.google': '8.8.8.8',
}

LOCATIONS = {
    '1.1.1.1': {
        'continent': 'Oceania',
        'continentCode': 'OC',
        'country': 'Australia',
        'countryCode': 'AU',
        'region': 'QLD',
        'regionName': 'Queensland',
        'city': 'South Brisbane',
        'district': '',
        'zip': '4101',
        'lat': -27.4766,
        'lon': 153.0166,
        'timezone': 'Australia/Brisbane',
        'offset': 36000,
        'currency': 'AUD',
        'isp': 'Cloudflare, Inc',
        'org': 'APNIC and Cloudflare DNS Resolver project',
        'as': 'AS13335 Cloudflare, Inc.',
        'asname': 'CLOUDFLARENET',
        'reverse': 'one.one.one.one',
        'mobile': False,
        'proxy': False,
        'hosting': True,
    },
    '8.8.8.8': {
        'continent': 'North America',
        'continentCode': 'NA',
        'country': 'United States',
        'countryCode': 'US',
        'region': 'VA',
        'regionName': 'Virginia',
        'city': 'Ashburn',
        'district': '',
        'zip': '20149',
        'lat': 39.03,
        'lon': -77.5,
        'timezone': 'America/New_York',
        'offset': -14400,
        'currency': 'USD',
        'isp': 'Google LLC',
        'org': 'Google Public DNS',
        'as': 'AS15169 Google LLC',
        'asname': 'GOOGLE',
        'reverse': 'dns.google',
        'mobile': False,
        'proxy': False,
        'hosting': True,
    },
}

DEFAULT_LOCATION = {
    'continent': 'Europe',
    'continentCode': 'EU',
    'country': 'Netherlands',
    'countryCode': 'NL',
    'region': 'NH',
    'regionName': 'North Holland',
    'city': 'Amsterdam',
    'district': '',
    'zip': '1012',
    'lat': 52.3676,
    'lon': 4.9041,
    'timezone': 'Europe/Amsterdam',
    'offset': 7200,
    'currency': 'EUR',
    'isp': 'Example ISP',
    'org': 'Example Org',
    'as': 'AS64496 Example',
    'asname': 'EXAMPLE',
    'reverse': '',
    'mobile': False,
    'proxy': False,
    'hosting': False,
}

TRANSLATIONS = {
    'de': {'Australia': 'Australien', 'United States': 'Vereinigte Staaten', 'Oceania': 'Ozeanien'},
    'ru': {'Australia': 'Австралия', 'United States': 'США', 'Oceania': 'Океания'},
}

RATE_LIMITED = 'rate.limited'
RATE_LIMITED_NO_TTL = 'rate.limited.nottl'
RATE_LIMITED_BAD_TTL = 'rate.limited.badttl'
RATE_LIMITED_NEGATIVE_TTL = 'rate.limited.negativettl'
SERVER_ERROR = 'server.error'
SERVER_ERROR_MESSAGE = 'server.error.message'
SLOW_RESPONSE = 'slow.response'
SHORT_BATCH = 'short.batch'
NOT_JSON = 'not.json'
UNKNOWN_MESSAGE = 'unknown.message'

RATE_LIMIT_HEADERS = {'X-Rl': '44', 'X-Ttl': '60'}


def locate(query, fields, lang):
    """Emulates the service response for one query
    """

    if query == UNKNOWN_MESSAGE:
        data = {'status': 'fail', 'message': 'something went wrong'}
    else:
        ip = DOMAINS.get(query, query)
        try:
            address = ipaddress.ip_address(ip)
        except ValueError:
            data = {'status': 'fail', 'message': 'invalid query'}
        else:
            if (address.is_loopback or address.is_reserved or address.is_link_local
                    or address.is_multicast or address.is_unspecified):
                data = {'status': 'fail', 'message': 'reserved range'}
            elif address.is_private:
                data = {'status': 'fail', 'message': 'private range'}
            else:
                data = dict(LOCATIONS.get(ip, DEFAULT_LOCATION), status='success')
                translations = TRANSLATIONS.get(lang, {})
                for key in ('country', 'continent'):
                    data[key] = translations.get(data[key], data[key])

    data['query'] = query
    return {key: value for key, value in data.items() if fields & FIELD_WEIGHTS[key]}


def get_fields(request_query):
    return int(request_query.get('fields', str(0b1111111111111111111111111)))


async def get_json(request):
    data = locate(OWN_ADDRESS, get_fields(request.query), request.query.get('lang'))
    return web.json_response(data=data, headers=RATE_LIMIT_HEADERS)


async def get_json_query(request):
    query = request.match_info['query']

    if query == RATE_LIMITED:
        return web.json_response(data={}, status=429, headers={'X-Rl': '0', 'X-Ttl': '7'})
    if query == RATE_LIMITED_NO_TTL:
        return web.json_response(data={}, status=429)
    if query == RATE_LIMITED_BAD_TTL:
        return web.json_response(data={}, status=429, headers={'X-Rl': '0', 'X-Ttl': 'soon'})
    if query == RATE_LIMITED_NEGATIVE_TTL:
        return web.json_response(data={}, status=429, headers={'X-Rl': '0', 'X-Ttl': '-3'})
    if query == SERVER_ERROR:
        return web.Response(status=503, text='Service Unavailable')
    if query == SERVER_ERROR_MESSAGE:
        return web.json_response(data={'status': 'fail', 'message': 'internal failure'}, status=500)
    if query == SLOW_RESPONSE:
        await asyncio.sleep(1)
    if query == NOT_JSON:
        return web.Response(status=200, text='<html>not json</html>', content_type='text/html')

    data = locate(query, get_fields(request.query), request.query.get('lang'))
    return web.json_response(data=data, headers=RATE_LIMIT_HEADERS)


async def post_batch(request):
    assert request.content_type == 'application/json'

    fields = get_fields(request.query)
    lang = request.query.get('lang')
    json_data = await request.json()

    if not isinstance(json_data, list):
        return web.json_response(data={'message': 'invalid json'}, status=400)
    if RATE_LIMITED in json_data:
        return web.json_response(data={}, status=429, headers={'X-Rl': '0', 'X-Ttl': '7'})

    # the service never skips targets, the marker emulates a truncated response
    data = [locate(item, fields, lang) for item in json_data if item != SHORT_BATCH]
    return web.json_response(data=data, headers=RATE_LIMIT_HEADERS)


@pytest_asyncio.fixture
async def ipapi_server():
    app = web.Application()

    app.router.add_get('/json', get_json)
    app.router.add_get('/json/{query}', get_json_query)
    app.router.add_post('/batch', post_batch)

    server = TestServer(app)

    await server.start_server()
    yield server
    await server.close()


@pytest_asyncio.fixture
async def config_local(ipapi_server):
    base_url = ipapi_config.base_url
    ipapi_config.base_url = str(ipapi_server.make_url('/'))
    yield ipapi_config
    ipapi_config.base_url = base_url


def pytest_addoption(parser):
    parser.addoption(
        "--run-real-tests", action="store_true", default=False,
        help="run tests with requests to ip-api.com service"
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "real_service: mark test as real")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-real-tests"):
        return
    skip_real_tests = pytest.mark.skip(reason="need --run-real-tests option to run")
    for item in items:
        if "real_service" in item.keywords:
            item.add_marker(skip_real_tests)
