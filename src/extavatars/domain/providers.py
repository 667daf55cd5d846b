from abc import ABC, abstractmethod

from extavatars.domain.models import Account


class AvatarProvider(ABC):
    """Контракт, через который сервер ревью запрашивает аватары."""

    @abstractmethod
    def get_url(self, account: Account, image_size: int | None = None) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_change_avatar_url(self, account: Account) -> str | None:
        raise NotImplementedError
