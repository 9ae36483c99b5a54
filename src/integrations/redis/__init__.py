from src.integrations.redis.client import RedisClient

__all__ = [
    'RedisClient',
]
