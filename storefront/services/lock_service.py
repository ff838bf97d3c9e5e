# storefront/services/lock_service.py
from contextlib import contextmanager

import redis
from redis.exceptions import RedisError

from storefront.domain.errors import Conflict
from storefront.utils.retry import redis_retry, until_true
from storefront.utils.settings import (
    REDIS_URL,
    PRODUCT_LOCK_TTL_SECONDS,
    PRODUCT_LOCK_WAIT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# compare-and-delete in one Lua call: GET, compare and DEL cannot interleave
# with another client, so a lock is only ever released by its owner
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    Per-product locks in redis, used by the strict stock policy to
    serialize orders touching the same product.

    - acquire: SET key owner NX EX ttl
    - release: only the owner may delete the key
    - expiry: a crashed holder frees the product after ttl
    """

    def __init__(self, url: str | None = None, client=None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def _key(product_id: str) -> str:
        return f"product:{product_id}:lock"

    @redis_retry()
    def acquire_product_lock(self, product_id: str, owner: str, ttl: int) -> bool:
        key = self._key(product_id)
        logger.info(f"Acquire lock {key} for {owner}")
        return bool(
            self.redis.set(
                name=key,
                value=owner,
                nx=True,
                ex=ttl,
            )
        )

    @redis_retry()
    def release_product_lock(self, product_id: str, owner: str) -> bool:
        key = self._key(product_id)
        logger.info(f"Release lock {key} for {owner}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, owner)
        return bool(res)

    def wait_for_product_lock(self, product_id: str, owner: str, ttl: int, max_wait: float) -> bool:
        @until_true(max_wait)
        def _attempt():
            return self.acquire_product_lock(product_id, owner, ttl)

        return _attempt()

    @contextmanager
    def hold_product_locks(
        self,
        product_ids,
        owner: str,
        ttl: int = PRODUCT_LOCK_TTL_SECONDS,
        max_wait: float = PRODUCT_LOCK_WAIT_SECONDS,
    ):
        """
        Locks every product for the duration of the block.
        Keys are taken in sorted order so two orders over the same
        products cannot deadlock each other.
        """
        acquired = []
        try:
            for product_id in sorted(set(product_ids)):
                if not self.wait_for_product_lock(product_id, owner, ttl, max_wait):
                    raise Conflict(f"Product {product_id} is reserved by another order")
                acquired.append(product_id)
            yield acquired
        finally:
            for product_id in reversed(acquired):
                try:
                    self.release_product_lock(product_id, owner)
                except RedisError as e:
                    # the key still expires after ttl
                    logger.warning(f"Failed to release lock for product {product_id}: {e}")
