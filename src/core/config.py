import os

from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {'1', 'true', 'yes', 'on'}


def _get_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(',') if item.strip()]


class EnvConfig:
    """Settings read from the environment (and .env)."""

    def __init__(self):
        self.APP_NAME: str = os.getenv('APP_NAME', 'PromoShare API')
        self.APP_HOST: str = os.getenv('APP_HOST', '0.0.0.0')
        self.APP_PORT: int = int(os.getenv('APP_PORT', '8000'))
        self.DEBUG: bool = _get_bool('DEBUG')
        self.LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO').upper()

        self.REDIS_URL: str = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

        self.PROMORANG_API_URL: str = os.getenv('PROMORANG_API_URL', 'https://promorang-api.vercel.app')
        self.PROMORANG_RATE_LIMIT: float = float(os.getenv('PROMORANG_RATE_LIMIT', '0'))
        self.HTTP_TIMEOUT: float = float(os.getenv('HTTP_TIMEOUT', '30'))


class AppConfig:
    """Application-level tunables."""

    def __init__(self):
        self.CORS_ORIGINS: list[str] = _get_list('CORS_ORIGINS', ['*'])
        self.DASHBOARD_CACHE_TTL: int = int(os.getenv('DASHBOARD_CACHE_TTL', '60'))
        self.HISTORY_CACHE_TTL: int = int(os.getenv('HISTORY_CACHE_TTL', '600'))
        self.COUNTDOWN_TICK_SECONDS: float = float(os.getenv('COUNTDOWN_TICK_SECONDS', '1.0'))


env_config = EnvConfig()
app_config = AppConfig()
