from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    JWT_SECRET: str = "restaurant-pos-secret-key"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 24
    BCRYPT_ROUNDS: int = 10

    TAX_RATE: Decimal = Decimal("0.085")
    TIP_PRESETS: List[int] = [0, 15, 20]
    KITCHEN_POLL_INTERVAL_SECONDS: int = 15

    SEED_SAMPLE_DATA: bool = False
    CREATE_TABLES_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"

settings = Settings()
