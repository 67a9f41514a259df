from shardshortener.utils.config import app_env, app_name, app_prefix, load_config, load_config_file
from shardshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from shardshortener.utils.base62 import encode, decode
from shardshortener.utils.routing import route, ShardRouter
from shardshortener.utils.logging import initialize_logging


__all__ = [
    'encode',
    'decode',
    'route',
    'ShardRouter',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'load_config_file',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
