import logging
from functools import lru_cache

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

SECURE_SCHEME = "https://"


class AvatarSection(BaseModel):
    """Секция [avatar]: шаблон URL аватара и шаблон ссылки на смену аватара."""

    url: str | None = None
    change_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("change_url", "changeUrl"),
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        env_nested_delimiter="__",
    )

    app_name: str = "External Avatars"
    environment: str = "dev"
    debug: bool = False

    # Канонический URL сервера ревью, по схеме определяется secure_transport
    canonical_web_url: str | None = None

    # Avatar
    avatar: AvatarSection = Field(default_factory=AvatarSection)

    @field_validator("canonical_web_url")
    @classmethod
    def validate_canonical_web_url(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    @property
    def secure_transport(self) -> bool:
        return self.canonical_web_url is not None and self.canonical_web_url.startswith(SECURE_SCHEME)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    # Дополнительная проверка при старте
    if settings.avatar.url is None:
        logger.warning(
            "avatar.url не задан, аватары показываться не будут. "
            "Установите переменную окружения AVATAR__URL."
        )
    return settings
