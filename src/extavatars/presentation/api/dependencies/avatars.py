from functools import lru_cache

from fastapi import Depends

from extavatars.application.avatars import AvatarUrlResolver, ExternalUrlAvatarProvider, build_resolver
from extavatars.config.settings import get_settings


@lru_cache
def get_resolver() -> AvatarUrlResolver:
    """Один резолвер на процесс: конфигурация читается один раз при первом запросе."""
    return build_resolver(get_settings())


def get_avatar_provider(resolver: AvatarUrlResolver = Depends(get_resolver)) -> ExternalUrlAvatarProvider:
    return ExternalUrlAvatarProvider(resolver)
