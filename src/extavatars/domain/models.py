from pydantic import BaseModel, ConfigDict


class AvatarConfig(BaseModel):
    """Неизменяемая конфигурация резолвера аватаров."""

    model_config = ConfigDict(frozen=True)

    avatar_url_template: str | None = None
    change_avatar_url_template: str | None = None
    secure_transport: bool = False


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str | None = None
