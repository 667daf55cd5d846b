from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse

from extavatars.domain.models import Account
from extavatars.domain.providers import AvatarProvider
from extavatars.presentation.api.dependencies.avatars import get_avatar_provider
from extavatars.presentation.api.schemas import AvatarChangeUrlResponse

router = APIRouter(prefix="/api/v1", tags=["v1"])


@router.get("/accounts/{username}/avatar", tags=["avatars"])
async def get_avatar(
    username: str,
    s: int | None = Query(default=None, ge=1, description="Размер аватара в пикселях"),
    provider: AvatarProvider = Depends(get_avatar_provider),
):
    """Перенаправляет (302 Found) на внешний URL аватара пользователя."""
    url = provider.get_url(Account(username=username), image_size=s)
    if url is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Аватар недоступен")
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/accounts/{username}/avatar.change.url", response_model=AvatarChangeUrlResponse, tags=["avatars"])
async def get_avatar_change_url(
    username: str,
    provider: AvatarProvider = Depends(get_avatar_provider),
):
    url = provider.get_change_avatar_url(Account(username=username))
    if url is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ссылка на смену аватара не настроена")
    return AvatarChangeUrlResponse(url=url)
