from pydantic import BaseModel


class AvatarChangeUrlResponse(BaseModel):
    url: str


class HealthResponse(BaseModel):
    status: str
    avatars_enabled: bool
    secure_transport: bool
