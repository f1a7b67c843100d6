"""
Zabbix Client Configuration

This module manages configuration for the shared Zabbix client.
Configuration can be set via:
1. Environment variables (config.env file)
2. Direct configuration via set_config()

Example using environment variables:
    # Create config.env next to this file
    ZABBIX_URL=https://zabbix.example.com
    ZABBIX_USER=Admin
    ZABBIX_PASSWORD=zabbix

Example direct configuration:
    from zabbix_rpc.config import set_config

    set_config({
        'zabbix_url': 'https://zabbix.example.com',
        'zabbix_token': 'your-api-token'
    })
"""

import logging
import os
from typing import Optional, Dict, Any
from pathlib import Path

from .errors import ConfigurationError
from .log import get_logger, setup_logging, teardown_logging
from .types import ZabbixConfig as ConfigDict

logger = get_logger(__name__)

CONFIG_FILE = Path(__file__).parent / "config.env"

# Changing any of these invalidates the shared client
_CONNECTION_KEYS = ('zabbix_url', 'zabbix_user', 'zabbix_password', 'zabbix_token',
                    'timeout', 'verify_ssl')


def _load_config_env(config_file: Path = CONFIG_FILE) -> None:
    """Load environment variables from config.env file if it exists."""
    if not config_file.exists():
        return

    with config_file.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            # Only set if not already in environment (don't override existing vars)
            os.environ.setdefault(key.strip(), value.strip())


# Auto-load config.env when module is imported
_load_config_env()


class ZabbixConfig:
    """Zabbix API configuration"""

    def __init__(self):
        self.zabbix_url: str = os.getenv('ZABBIX_URL', '')
        self.zabbix_token: Optional[str] = os.getenv('ZABBIX_TOKEN')
        self.zabbix_user: Optional[str] = os.getenv('ZABBIX_USER')
        self.zabbix_password: Optional[str] = os.getenv('ZABBIX_PASSWORD')
        self.timeout: int = int(os.getenv('REQUEST_TIMEOUT', '30'))
        self.debug: bool = os.getenv('DEBUG', '').lower() == 'true'
        self.verify_ssl: bool = os.getenv('VERIFY_SSL', 'true').lower() == 'true'


# Global configuration instance
_config = ZabbixConfig()

# Shared client, built on first use by get_client()
_client = None

# True while debug logging was switched on by the DEBUG flag
_debug_logging = False


def _apply_debug() -> None:
    global _debug_logging

    if _config.debug:
        setup_logging(logging.DEBUG)
        _debug_logging = True
    elif _debug_logging:
        teardown_logging()
        _debug_logging = False


_apply_debug()


def get_config() -> ConfigDict:
    """
    Get current configuration

    Returns:
        Dictionary containing current configuration
    """
    return {
        'zabbix_url': _config.zabbix_url,
        'zabbix_token': _config.zabbix_token,
        'zabbix_user': _config.zabbix_user,
        'zabbix_password': _config.zabbix_password,
        'timeout': _config.timeout,
        'debug': _config.debug,
        'verify_ssl': _config.verify_ssl
    }


def set_config(new_config: Dict[str, Any]) -> None:
    """
    Set configuration (merges with existing config)

    Args:
        new_config: Dictionary with configuration values to update

    Example:
        set_config({
            'zabbix_url': 'https://zabbix.example.com',
            'zabbix_token': 'your-api-token'
        })
    """
    global _client

    for key, value in new_config.items():
        if not hasattr(_config, key):
            raise ConfigurationError(f'Unknown configuration key: {key}')
        if key == 'timeout':
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f'Invalid timeout: {value!r}')
        setattr(_config, key, value)

    # Drop the shared client when the connection settings change
    if any(k in new_config for k in _CONNECTION_KEYS):
        _client = None

    _apply_debug()

    logger.debug('Configuration updated: zabbix_url=%s, has_token=%s, has_user=%s, timeout=%s',
                 _config.zabbix_url, bool(_config.zabbix_token),
                 bool(_config.zabbix_user), _config.timeout)


def reset_config() -> None:
    """Reset configuration to defaults (from environment variables)"""
    global _config, _client
    _config = ZabbixConfig()
    _client = None
    _apply_debug()


def get_zabbix_api_url() -> str:
    """
    Get Zabbix API URL

    Returns:
        Full URL to Zabbix API endpoint

    Raises:
        ConfigurationError: If Zabbix URL is not configured
    """
    if not _config.zabbix_url:
        raise ConfigurationError(
            'Zabbix URL not configured. Set ZABBIX_URL environment variable '
            'or call set_config()'
        )

    # Ensure URL ends with /api_jsonrpc.php
    base_url = _config.zabbix_url.rstrip('/')
    if base_url.endswith('/api_jsonrpc.php'):
        return base_url
    return f'{base_url}/api_jsonrpc.php'


def get_client():
    """
    Get the shared client, logging it in on first use

    An API token is used as the session token as-is; otherwise the client
    logs in with username/password.

    Returns:
        Ready to use ZabbixClient

    Raises:
        ConfigurationError: If no authentication method is configured
    """
    global _client

    if _client is not None:
        return _client

    from .client import ZabbixClient

    client = ZabbixClient.from_config()
    if _config.zabbix_token:
        client.session_token = _config.zabbix_token
    elif _config.zabbix_user and _config.zabbix_password:
        logger.debug('Authenticating user: %s', _config.zabbix_user)
        client.authenticate()
    else:
        raise ConfigurationError(
            'No authentication method configured. '
            'Set ZABBIX_TOKEN or ZABBIX_USER/ZABBIX_PASSWORD'
        )

    _client = client
    return _client


def get_timeout() -> int:
    """Get configured timeout in seconds"""
    return _config.timeout


def get_verify_ssl() -> bool:
    """Get SSL verification setting"""
    return _config.verify_ssl
