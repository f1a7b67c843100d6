"""
API Information for Zabbix

Example:
    from zabbix_rpc.apiinfo import apiinfo_version

    # Get Zabbix API version
    version = apiinfo_version()
"""

from .client import ZabbixClient


def apiinfo_version() -> str:
    """
    Get Zabbix API version of the configured server

    apiinfo.version needs no session, so this does not log in.

    Returns:
        Version string, e.g. '6.0.21'
    """
    return ZabbixClient.from_config().discover_api_version()
