# inventory/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices


class Settings(BaseSettings):
    # читаем .env, не падаем на лишние ключи
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Сервер
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "INVENTORY_LOG_LEVEL"),
    )

    # Стартовые данные (Lapicera / Cuaderno)
    SEED_DEMO_ITEMS: bool = True

    # Глубина канала каждого подписчика SSE
    SUBSCRIBER_QUEUE_SIZE: int = Field(default=1, ge=1)

    # CORS
    ALLOWED_ORIGINS: str = "*"

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()] or ["*"]


settings = Settings()
