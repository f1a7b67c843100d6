"""
Zabbix JSON-RPC client

One ZabbixClient per Zabbix frontend. It owns the request id counter and the
session token, and maps every HTTP exchange to a result or an error.

Example:
    from zabbix_rpc import ZabbixClient

    client = ZabbixClient('https://zabbix.example.com/api_jsonrpc.php', 'Admin', 'zabbix')
    client.discover_api_version()
    client.authenticate()

    hosts = client.call('host.get', {'output': ['hostid', 'name']})
    # same request through a method namespace
    hosts = client.host.get(output=['hostid', 'name'])

    client.deauthenticate()

Example - callback style:
    def on_login(err, token):
        if err:
            print(f'login failed: {err}')

    client.authenticate(callback=on_login)

The client does not check the id of a response against the id of the request
that produced it; every call is its own HTTP exchange and the response of that
exchange is taken as the answer.
"""

import threading
from typing import Any, Optional, Tuple

import requests

from . import errors
from .errors import (
    InvalidParametersError,
    MethodMissingError,
    UnknownServerError,
    ZabbixRPCError,
)
from .log import get_logger
from .types import Params, ResultCallback, RpcRequest

CONTENT_TYPE = 'application/json-rpc'

# Sent as the result alongside MethodMissingError
METHOD_MISSING = 'Method missing!'

# Outcome of one call: (error, result)
Outcome = Tuple[Optional[BaseException], Any]

_logger = get_logger(__name__)


def _redact(params: Any) -> Any:
    """Mask password values for the request trace"""
    if isinstance(params, dict) and 'password' in params:
        return {**params, 'password': '********'}
    return params


def _decode_body(response: Any) -> Tuple[bool, Any]:
    """Return (defined, body); an empty or non-JSON body is undefined"""
    try:
        return True, response.json()
    except ValueError:
        return False, None


def _partial_body(exc: requests.RequestException) -> Any:
    response = getattr(exc, 'response', None)
    if response is None:
        return None
    defined, body = _decode_body(response)
    if defined:
        return body
    return getattr(response, 'text', None)


def _deliver(outcome: Outcome, callback: Optional[ResultCallback]) -> Any:
    err, result = outcome
    if callback is not None:
        callback(err, result)
        return None
    if err is not None:
        raise err
    return result


class ZabbixClient:
    """Client for one Zabbix API endpoint"""

    errors = errors

    def __init__(self, url: str, username: str = '', password: str = '',
                 logger: Any = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = 30, verify_ssl: bool = True):
        """
        Initialize the client.

        Args:
            url: Full URL of api_jsonrpc.php
            username: Login name used by authenticate()
            password: Password used by authenticate()
            logger: logging.Logger-compatible object (defaults to this module's logger)
            session: requests.Session used for every POST (a new one if omitted)
            timeout: Seconds passed to requests for each call
            verify_ssl: TLS certificate verification, passed to requests
        """
        self.url = url
        self.username = username
        self.password = password
        self.logger = logger or _logger
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify_ssl = verify_ssl

        self.session_token: Optional[str] = None
        self.api_version: Optional[str] = None
        self._request_id = 0
        self._id_lock = threading.Lock()

    @classmethod
    def from_config(cls, **kwargs: Any) -> 'ZabbixClient':
        """
        Build an unauthenticated client from the package configuration.

        Keyword arguments override the configured values.
        """
        from .config import get_config, get_timeout, get_verify_ssl, get_zabbix_api_url

        config = get_config()
        options = {
            'url': get_zabbix_api_url(),
            'username': config['zabbix_user'] or '',
            'password': config['zabbix_password'] or '',
            'timeout': get_timeout(),
            'verify_ssl': get_verify_ssl(),
        }
        options.update(kwargs)
        return cls(**options)

    @property
    def request_id(self) -> int:
        """Id of the last request sent (0 before the first call)"""
        return self._request_id

    @property
    def authenticated(self) -> bool:
        return self.session_token is not None

    def _next_id(self) -> int:
        with self._id_lock:
            self._request_id += 1
            return self._request_id

    def _reset_id(self) -> None:
        with self._id_lock:
            self._request_id = 0

    def _build_request(self, method: str, params: Params) -> RpcRequest:
        return {
            'jsonrpc': '2.0',
            'id': self._next_id(),
            'auth': self.session_token,
            'method': method,
            'params': params,
        }

    def _call(self, method: str, params: Optional[Params]) -> Outcome:
        if params is None:
            params = {}

        self.logger.debug('zabbix call method=%s params=%s', method, _redact(params))
        body = self._build_request(method, params)

        try:
            response = self.session.post(
                self.url,
                json=body,
                headers={'content-type': CONTENT_TYPE},
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.RequestException as exc:
            self.logger.error('zabbix request error: %s', exc)
            return exc, _partial_body(exc)

        status = response.status_code
        defined, data = _decode_body(response)
        self.logger.debug('zabbix response response_code=%s data=%s', status, data)

        if status == 200 and defined:
            if isinstance(data, dict) and data.get('error'):
                return ZabbixRPCError(data['error']), None
            return None, data.get('result') if isinstance(data, dict) else None
        if status == 412:
            return InvalidParametersError(status_code=status), None
        # 1.2 answers an unknown method with an empty body instead of an error object
        if self.api_version == '1.2':
            return MethodMissingError(status_code=status), METHOD_MISSING
        return UnknownServerError(status_code=status), None

    def call(self, method: str, params: Optional[Params] = None,
             callback: Optional[ResultCallback] = None) -> Any:
        """
        Send one JSON-RPC request.

        Args:
            method: Zabbix API method (e.g., 'host.get', 'item.create')
            params: Method parameters, {} when omitted
            callback: Optional callback(error, result); when given, errors are
                passed to it instead of being raised and None is returned

        Returns:
            The result member of the response

        Raises:
            requests.RequestException: Transport failure, unwrapped
            ZabbixRPCError: The server returned an error object
            InvalidParametersError: HTTP 412
            MethodMissingError: Empty answer from a 1.2 API
            UnknownServerError: Any other unexpected answer
        """
        return _deliver(self._call(method, params), callback)

    def discover_api_version(self, callback: Optional[ResultCallback] = None) -> Any:
        """
        Ask the server for its API version and remember it.

        Returns:
            Version string, e.g. '6.0.21'
        """
        err, result = self._call('apiinfo.version', {})
        if err is None:
            self.api_version = result
            self.logger.debug('discovered zabbix api version=%s', self.api_version)
        return _deliver((err, result), callback)

    def authenticate(self, callback: Optional[ResultCallback] = None) -> Any:
        """
        Log in with the configured user/password and keep the session token.

        Returns:
            Session token
        """
        err, result = self._call('user.login', {
            'user': self.username,
            'password': self.password,
        })
        if err is None:
            self.session_token = result
        return _deliver((err, result), callback)

    def deauthenticate(self, callback: Optional[ResultCallback] = None) -> Any:
        """Log out, dropping the session token and restarting request ids at 1"""
        err, result = self._call('user.logout', [])
        if err is None:
            self.session_token = None
            self._reset_id()
        return _deliver((err, result), callback)

    def __getattr__(self, name: str) -> 'MethodNamespace':
        if name.startswith('_'):
            raise AttributeError(name)
        return MethodNamespace(self, name)

    def __enter__(self) -> 'ZabbixClient':
        try:
            self.authenticate()
        except Exception:
            self.session.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self.session_token is None:
                return
            if exc_type is None:
                self.deauthenticate()
            else:
                # The body's exception wins; a failed logout is only logged
                self.deauthenticate(callback=self._log_logout_error)
        finally:
            self.session.close()

    def _log_logout_error(self, err: Optional[BaseException], result: Any) -> None:
        if err is not None:
            self.logger.error('zabbix logout error: %s', err)

    def __repr__(self) -> str:
        return (f'<ZabbixClient url={self.url!r} user={self.username!r} '
                f'authenticated={self.authenticated}>')


class MethodNamespace:
    """API object namespace, e.g. client.host for host.get/host.create"""

    def __init__(self, client: ZabbixClient, name: str):
        self._client = client
        self._name = name

    def __getattr__(self, method: str):
        if method.startswith('_'):
            raise AttributeError(method)
        full_name = f'{self._name}.{method}'

        def api_method(*args: Any, callback: Optional[ResultCallback] = None, **kwargs: Any) -> Any:
            if args and kwargs:
                raise TypeError(f'{full_name}() takes positional or keyword params, not both')
            if len(args) > 1:
                raise TypeError(f'{full_name}() takes at most one positional params value')
            params = args[0] if args else kwargs
            return self._client.call(full_name, params, callback=callback)

        api_method.__name__ = method
        return api_method

    def __repr__(self) -> str:
        return f'<MethodNamespace {self._name}>'
