"""
Zabbix JSON-RPC Client

This package provides a small client for the Zabbix JSON-RPC API: it builds
the requests, keeps the session token and request id, logs in and out, and
turns every answer into a result or a typed error.

Example - Basic usage:
    from zabbix_rpc import ZabbixClient

    client = ZabbixClient('https://zabbix.example.com/api_jsonrpc.php', 'Admin', 'zabbix')
    client.authenticate()

    hosts = client.host.get(output=['hostid', 'name'])
    for host in hosts:
        print(f"{host['hostid']}: {host['name']}")

    client.deauthenticate()

Example - Configured client:
    from zabbix_rpc import set_config, zabbix_request

    set_config({
        'zabbix_url': 'https://zabbix.example.com',
        'zabbix_user': 'Admin',
        'zabbix_password': 'zabbix'
    })
    problems = zabbix_request('problem.get', {'recent': True})

Example - Error handling:
    from zabbix_rpc import ZabbixClient, ZabbixRPCError

    with ZabbixClient(url, 'Admin', 'zabbix') as client:
        try:
            client.call('host.create', {'host': 'server-01'})
        except ZabbixRPCError as e:
            print(f'{e.code}: {e.message} ({e.data})')
"""

from .client import ZabbixClient, MethodNamespace

from .errors import (
    ZabbixError,
    ZabbixRPCError,
    InvalidParametersError,
    MethodMissingError,
    UnknownServerError,
    ConfigurationError,
)

# Configuration
from .config import get_config, set_config, reset_config, get_client

from .log import setup_logging

from .utils import zabbix_request

from .apiinfo import apiinfo_version

__all__ = [
    # Client
    'ZabbixClient',
    'MethodNamespace',

    # Errors
    'ZabbixError',
    'ZabbixRPCError',
    'InvalidParametersError',
    'MethodMissingError',
    'UnknownServerError',
    'ConfigurationError',

    # Configuration
    'get_config',
    'set_config',
    'reset_config',
    'get_client',
    'setup_logging',

    # Module-level helpers
    'zabbix_request',
    'apiinfo_version',
]
