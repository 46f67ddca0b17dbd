import redis
import json
import logging
from typing import List, Optional
from pydantic import TypeAdapter
from fxjournal.core.entities.trade import TradeRecord
from fxjournal.core.interfaces.datasource import AccountId

logger = logging.getLogger(__name__)

_TRADES = TypeAdapter(List[TradeRecord])

class RedisService:
    """
    Read-through cache for journal entries, keyed by account.
    Without a URL (or injected client) every call is a miss / no-op,
    and Redis errors are logged and treated the same way.
    """

    def __init__(self, url: Optional[str] = None, client=None, ttl_seconds: int = 60):
        self.redis_url = url
        self.ttl_seconds = ttl_seconds
        self.client = client
        if self.client is None and self.redis_url:
            try:
                self.client = redis.from_url(self.redis_url, decode_responses=True)
                # Test connection
                self.client.ping()
                logger.info("Connected to Redis for caching.")
            except redis.RedisError as e:
                logger.warning(f"Failed to connect to Redis: {e}. Caching disabled.")
                self.client = None
        elif self.client is None:
            logger.info("REDIS_URL not set. Caching disabled.")

    @property
    def enabled(self) -> bool:
        return self.client is not None

    @staticmethod
    def trades_key(account_id: AccountId) -> str:
        return f"fxjournal:trades:{account_id}"

    def get_trades(self, account_id: AccountId) -> Optional[List[TradeRecord]]:
        if not self.client:
            return None
        try:
            data = self.client.get(self.trades_key(account_id))
            if data:
                return _TRADES.validate_json(data)
            return None
        except redis.RedisError as e:
            logger.warning(f"Redis get error: {e}")
            return None
        except ValueError as e:
            # Stale or foreign payload under our key
            logger.warning(f"Discarding unreadable cache entry for account {account_id}: {e}")
            self.invalidate(account_id)
            return None

    def set_trades(self, account_id: AccountId, trades: List[TradeRecord]):
        if not self.client:
            return
        try:
            serialized = json.dumps([t.model_dump(mode="json") for t in trades])
            self.client.setex(self.trades_key(account_id), self.ttl_seconds, serialized)
        except redis.RedisError as e:
            logger.warning(f"Redis set error: {e}")

    def invalidate(self, account_id: AccountId):
        if not self.client:
            return
        try:
            self.client.delete(self.trades_key(account_id))
        except redis.RedisError as e:
            logger.warning(f"Redis delete error: {e}")
