# pkikeys/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Decoding
    default_key_format: str = "pkcs8"
    max_input_bytes: int = Field(default=65536, gt=0)

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    model_config = SettingsConfigDict(
        env_prefix="PKIKEYS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
