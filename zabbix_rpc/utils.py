"""
Module-level access to the Zabbix API through the shared client
"""

from typing import Any

from .config import get_client
from .log import get_logger

logger = get_logger(__name__)


def zabbix_request(method: str, params: Any = None) -> Any:
    """
    Make a request to the Zabbix API with the shared client

    Args:
        method: Zabbix API method (e.g., 'host.get', 'item.create')
        params: Parameters to pass to the method

    Returns:
        Decoded result of the call

    Raises:
        ConfigurationError: If the shared client cannot be built
        ZabbixError: If the API answers with an error

    Example:
        hosts = zabbix_request('host.get', {'output': 'extend'})
    """
    result = get_client().call(method, params)
    logger.debug('%s completed successfully', method)
    return result
