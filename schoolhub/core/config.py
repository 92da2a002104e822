"""
SchoolHub settings, read from the environment or a local ``.env`` file.

DATABASE_URL and JWT_SECRET_KEY have no defaults; the service refuses to
start without them.
"""
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    database_url: str
    jwt_secret_key: str

    # Tokens issued at staff and student login
    jwt_algorithm: str = 'HS256'
    access_token_expire_minutes: int = 60 * 24

    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    # Origins of the portal frontends
    allowed_origins: List[str] = ['*']

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

settings = Settings()
