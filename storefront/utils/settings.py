# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CELERY_TASK_ALWAYS_EAGER = _flag("CELERY_TASK_ALWAYS_EAGER")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "changeme")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

API_PREFIX = os.getenv("API_PREFIX", "/api")
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:5174").split(",")
    if o.strip()
]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# best_effort: independent stock writes, order saved regardless
# strict: conditional decrement + single transaction
STOCK_POLICY = os.getenv("STOCK_POLICY", "best_effort")
PRODUCT_LOCKS_ENABLED = _flag("PRODUCT_LOCKS_ENABLED")
PRODUCT_LOCK_TTL_SECONDS = int(os.getenv("PRODUCT_LOCK_TTL_SECONDS", "10"))
PRODUCT_LOCK_WAIT_SECONDS = float(os.getenv("PRODUCT_LOCK_WAIT_SECONDS", "2"))

RESTORE_STOCK_ON_CANCEL = _flag("RESTORE_STOCK_ON_CANCEL")
STRICT_STATUS_TRANSITIONS = _flag("STRICT_STATUS_TRANSITIONS")

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
