# storefront/utils/retry.py
from tenacity import (
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_fixed,
)
import redis


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def until_true(max_wait: float, interval: float = 0.05):
    """
    Retries the wrapped call until it returns True or max_wait elapses.
    Gives up with False instead of raising RetryError.
    """
    return retry(
        stop=stop_after_delay(max_wait),
        wait=wait_fixed(interval),
        retry=retry_if_result(lambda ok: not ok),
        retry_error_callback=lambda state: False,
    )
