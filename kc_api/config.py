import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    database_url: str
    secret_key: str
    algorithm: str
    storage_dir: str
    log_level: str


@lru_cache
def get_settings() -> Settings:
    # A single static secret signs every token; there is no expiry and no rotation.
    return Settings(
        database_url=os.getenv("DATABASE", "sqlite:///./kc_api.db"),
        secret_key=os.getenv("SECRET_KEY", "kc-secret"),
        algorithm=os.getenv("ALGORITHM", "HS256"),
        storage_dir=os.getenv("STORAGE_DIR", "./uploads"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
