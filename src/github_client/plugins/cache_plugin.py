# src/github_client/plugins/cache_plugin.py

import hashlib
import json
import logging
import re
import threading
import time
from typing import Any, Dict, Optional, Set

import requests

from .plugin import Plugin, NextCall
from ..core.context import RequestContext
from ..core.exceptions import InvalidArgumentError
from ..utils.serialization import serialize_response, deserialize_response

logger = logging.getLogger(__name__)

# Заголовки, которые по умолчанию влияют на кэш ключ
DEFAULT_CACHE_HEADERS = {
    'Accept',
    'Accept-Encoding',
    'Authorization',
}

# 30 дней: сколько хранить запись для ревалидации после истечения свежести
DEFAULT_CACHE_LIFETIME = 30 * 24 * 3600

_MAX_AGE_RE = re.compile(r'max-age=(\d+)', re.IGNORECASE)


class MemoryCachePool:
    """
    In-memory хранилище для CachePlugin.

    Интерфейс совместим с diskcache.Cache (get / set(expire=) / delete),
    поэтому CachePlugin принимает любой из них.
    """

    def __init__(self, max_size: int = 1000):
        """
        Args:
            max_size: Максимальное количество записей (по умолчанию 1000)
        """
        if max_size <= 0:
            raise InvalidArgumentError("max_size must be positive")
        self.max_size = max_size
        self._data: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return default
            if entry['expire_at'] is not None and entry['expire_at'] <= time.time():
                del self._data[key]
                return default
            return entry['value']

    def set(self, key: str, value: Any, expire: Optional[float] = None) -> bool:
        with self._lock:
            self._evict_if_needed()
            self._data[key] = {
                'value': value,
                'stored_at': time.time(),
                'expire_at': time.time() + expire if expire is not None else None,
            }
        return True

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._data)
            self._data.clear()
        return count

    def _evict_if_needed(self):
        """
        Удаляет старые записи если хранилище заполнено.

        Должен вызываться внутри lock!
        """
        if len(self._data) < self.max_size:
            return

        # Удаляем 10% самых старых записей для амортизации
        entries_to_remove = max(1, len(self._data) // 10)
        sorted_keys = sorted(self._data, key=lambda k: self._data[k]['stored_at'])
        for key in sorted_keys[:entries_to_remove]:
            del self._data[key]

        logger.debug(f"Cache eviction: removed {entries_to_remove} entries, size now {len(self._data)}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class CachePlugin(Plugin):
    """
    Плагин для кэширования HTTP ответов GitHub.

    - Кэшируются только успешные (200) ответы на GET/HEAD
    - Свежесть: Cache-Control max-age, иначе default_ttl
    - Cache-Control: no-store -> не сохраняется
    - Устаревшая запись с ETag/Last-Modified ревалидируется условным
      запросом; ответ 304 возвращает закэшированное тело (условные запросы
      GitHub не расходуют лимит)
    - В ответ добавляется X-Cache: HIT / MISS / REVALIDATED

    Example:
        >>> plugin = CachePlugin(MemoryCachePool())
        >>> plugin = CachePlugin(diskcache.Cache("/tmp/github-cache"), default_ttl=60)
    """

    def __init__(
            self,
            pool: Any = None,
            default_ttl: int = 0,
            respect_cache_headers: bool = True,
            cache_lifetime: int = DEFAULT_CACHE_LIFETIME,
            cacheable_methods: Optional[Set[str]] = None,
            cache_headers: Optional[Set[str]] = None,
    ):
        """
        Args:
            pool: Хранилище с методами get/set(expire=)/delete
                  (MemoryCachePool по умолчанию, или diskcache.Cache)
            default_ttl: Свежесть записи в секундах, если ответ не задает max-age
            respect_cache_headers: Учитывать Cache-Control ответа
            cache_lifetime: Сколько хранить запись для ревалидации (сек)
            cacheable_methods: HTTP методы для кэширования (по умолчанию GET, HEAD)
            cache_headers: Заголовки, входящие в ключ кэша (case-insensitive).
                          По умолчанию: Accept, Accept-Encoding, Authorization
        """
        if default_ttl < 0:
            raise InvalidArgumentError("default_ttl must be non-negative")
        if cache_lifetime < 0:
            raise InvalidArgumentError("cache_lifetime must be non-negative")

        self.pool = pool if pool is not None else MemoryCachePool()
        self.default_ttl = default_ttl
        self.respect_cache_headers = respect_cache_headers
        self.cache_lifetime = cache_lifetime
        self.cacheable_methods = {m.upper() for m in (cacheable_methods or {'GET', 'HEAD'})}

        headers = cache_headers if cache_headers is not None else DEFAULT_CACHE_HEADERS
        # Приводим все заголовки к lowercase для case-insensitive сравнения
        self.cache_headers = {h.lower() for h in headers}

        self.stats = {'hits': 0, 'misses': 0, 'revalidated': 0}

    def _generate_cache_key(self, ctx: RequestContext) -> str:
        """
        Генерирует ключ кэша на основе метода, URL, query параметров
        и значимых заголовков.
        """
        significant_headers = {
            name.lower(): value
            for name, value in ctx.headers.items()
            if name.lower() in self.cache_headers
        }

        cache_data = {
            "method": ctx.method,
            "url": ctx.url,
            "params": {k: str(v) for k, v in ctx.params.items()},
            "headers": significant_headers,
        }

        cache_string = json.dumps(cache_data, sort_keys=True)
        return hashlib.sha256(cache_string.encode()).hexdigest()

    def _freshness(self, response: requests.Response) -> Optional[int]:
        """
        Время свежести ответа в секундах или None, если ответ нельзя хранить.
        """
        if not self.respect_cache_headers:
            return self.default_ttl

        cache_control = response.headers.get('Cache-Control', '').lower()
        if 'no-store' in cache_control:
            return None
        if 'no-cache' in cache_control:
            return 0

        match = _MAX_AGE_RE.search(cache_control)
        if match:
            return int(match.group(1))
        return self.default_ttl

    def handle_request(self, ctx: RequestContext, next_call: NextCall) -> requests.Response:
        if ctx.method not in self.cacheable_methods:
            return next_call(ctx)

        cache_key = self._generate_cache_key(ctx)
        entry = self.pool.get(cache_key)

        if entry and entry['fresh_until'] > time.time():
            self.stats['hits'] += 1
            logger.debug(f"Cache HIT for {ctx.url}")
            response = deserialize_response(entry['response'])
            response.headers['X-Cache'] = 'HIT'
            return response

        if entry:
            if entry.get('etag'):
                ctx.headers['If-None-Match'] = entry['etag']
            if entry.get('last_modified'):
                ctx.headers['If-Modified-Since'] = entry['last_modified']

        response = next_call(ctx)

        if response.status_code == 304 and entry:
            self.stats['revalidated'] += 1
            logger.debug(f"Cache REVALIDATED for {ctx.url}")
            freshness = self._freshness(response)
            if freshness is not None:
                entry['fresh_until'] = time.time() + freshness
                self.pool.set(cache_key, entry, expire=self.cache_lifetime + freshness)
            cached = deserialize_response(entry['response'])
            cached.headers['X-Cache'] = 'REVALIDATED'
            return cached

        self.stats['misses'] += 1
        logger.debug(f"Cache MISS for {ctx.url}")

        if response.status_code == 200:
            self._store(cache_key, response)
        response.headers['X-Cache'] = 'MISS'
        return response

    def _store(self, cache_key: str, response: requests.Response) -> None:
        """Сохраняет ответ в кэш"""
        freshness = self._freshness(response)
        if freshness is None:
            return

        etag = response.headers.get('ETag')
        last_modified = response.headers.get('Last-Modified')
        if freshness == 0 and not etag and not last_modified:
            # Ни свежести, ни валидаторов - запись бесполезна
            return

        entry = {
            'response': serialize_response(response),
            'fresh_until': time.time() + freshness,
            'etag': etag,
            'last_modified': last_modified,
        }
        self.pool.set(cache_key, entry, expire=self.cache_lifetime + freshness)

    @property
    def hits(self) -> int:
        return self.stats['hits']

    @property
    def misses(self) -> int:
        return self.stats['misses']

    def __repr__(self) -> str:
        return f"CachePlugin(pool={type(self.pool).__name__}, default_ttl={self.default_ttl})"
