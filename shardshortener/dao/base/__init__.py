from shardshortener.dao.base.counter_base_dao import CounterBaseDAO
from shardshortener.dao.base.short_url_base_dao import ShortURLBaseDAO


__all__ = [
    'CounterBaseDAO',
    'ShortURLBaseDAO',
]
