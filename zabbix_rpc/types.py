"""
Type definitions for the Zabbix JSON-RPC client
Based on the JSON-RPC 2.0 objects exchanged with api_jsonrpc.php
"""

from typing import TypedDict, Union, List, Dict, Any, Optional, Callable


class ZabbixConfig(TypedDict, total=False):
    """Zabbix client configuration"""
    zabbix_url: str
    zabbix_token: Optional[str]
    zabbix_user: Optional[str]
    zabbix_password: Optional[str]
    timeout: int
    debug: bool
    verify_ssl: bool


# Params can be an object or a positional list (user.logout takes [])
Params = Union[Dict[str, Any], List[Any]]


class RpcRequest(TypedDict):
    """Outgoing request body, keys in wire order"""
    jsonrpc: str
    id: int
    auth: Optional[str]
    method: str
    params: Params


class RpcErrorObject(TypedDict, total=False):
    """Error member of a response"""
    code: int
    message: str
    data: Any


# callback(error, result): error is None on success
ResultCallback = Callable[[Optional[BaseException], Any], None]
