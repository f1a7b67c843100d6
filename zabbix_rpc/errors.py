"""
Errors raised by the Zabbix JSON-RPC client

Transport failures are not wrapped: whatever ``requests`` raises
(``ConnectionError``, ``Timeout``, ...) reaches the caller unchanged.
Everything decided by this package derives from ZabbixError.

Example:
    from zabbix_rpc import ZabbixClient
    from zabbix_rpc.errors import ZabbixRPCError

    try:
        client.call('host.get', {'output': 'extend'})
    except ZabbixRPCError as e:
        print(e.code, e.message, e.data)
"""

from typing import Any, Optional, Union

from .types import RpcErrorObject


class ZabbixError(Exception):
    """Base class for Zabbix client errors"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ZabbixRPCError(ZabbixError):
    """The server answered with a JSON-RPC error object"""

    def __init__(self, error: Union[RpcErrorObject, Any]):
        if isinstance(error, dict):
            self.code = error.get('code')
            self.data = error.get('data')
            message = error.get('message', 'Unknown error')
        else:
            # Not an error object (e.g. a bare string from a proxy)
            self.code = None
            self.data = None
            message = str(error)
        super().__init__(message, status_code=200)

    def __str__(self) -> str:
        text = f'Zabbix API error {self.code}: {self.message}'
        if self.data:
            text += f' ({self.data})'
        return text


class InvalidParametersError(ZabbixError):
    """HTTP 412 from the API endpoint"""

    def __init__(self, message: str = 'Invalid parameters.', status_code: Optional[int] = 412):
        super().__init__(message, status_code=status_code)


class MethodMissingError(ZabbixError):
    """Empty non-200 answer from a 1.2 API, which is how it reports unknown methods"""

    def __init__(self, message: str = 'That method does most likely not exist.',
                 status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)


class UnknownServerError(ZabbixError):
    """Any other answer the client cannot classify"""

    def __init__(self, message: str = 'Something else went wrong', status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code)


class ConfigurationError(ZabbixError, ValueError):
    """Missing or unusable client configuration"""
