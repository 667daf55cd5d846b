import logging
from urllib.parse import quote_plus

from extavatars.config.settings import Settings
from extavatars.domain.errors import AvatarUrlError, EncodingFailure, MalformedTemplate, NotConfigured
from extavatars.domain.models import Account, AvatarConfig
from extavatars.domain.providers import AvatarProvider

logger = logging.getLogger(__name__)

REPLACE_MARKER = "%s"
USERNAME_ENCODING = "utf-8"
INSECURE_SCHEME = "http://"
SECURE_SCHEME = "https://"


def upgrade_scheme(template: str | None, secure_transport: bool) -> str | None:
    """
    Переводит шаблон с http:// на https://, если сервер сам работает по https.

    Сервер отвечает на запрос аватара редиректом (302 Found), картинку загружает
    браузер, поэтому схема URL аватара должна совпадать со схемой сервера,
    иначе браузер покажет предупреждение о смешанном содержимом.
    """
    if template is None or not secure_transport or not template.startswith(INSECURE_SCHEME):
        return template
    return SECURE_SCHEME + template[len(INSECURE_SCHEME):]


def encode_username(username: str) -> str:
    """URL-кодирует имя пользователя (UTF-8, пробел -> '+', '/' кодируется)."""
    try:
        return quote_plus(username, safe="", encoding=USERNAME_ENCODING, errors="strict")
    except UnicodeEncodeError as err:
        raise EncodingFailure(username, USERNAME_ENCODING) from err


def replace_in_url(url: str, username: str) -> str:
    """Подставляет закодированное имя пользователя вместо первого маркера %s."""
    return url.replace(REPLACE_MARKER, encode_username(username), 1)


class AvatarUrlResolver:
    """
    Строит URL аватара и URL страницы смены аватара по шаблонам из конфигурации.

    Экземпляр не меняет своё состояние после создания и может разделяться
    между параллельными запросами.
    """

    def __init__(self, config: AvatarConfig):
        self.config = config
        self._avatar_url_template = upgrade_scheme(config.avatar_url_template, config.secure_transport)

    @property
    def avatar_url_template(self) -> str | None:
        return self._avatar_url_template

    @property
    def enabled(self) -> bool:
        return self._avatar_url_template is not None and REPLACE_MARKER in self._avatar_url_template

    def resolve_avatar_url(self, username: str | None) -> str | None:
        """Возвращает URL аватара пользователя или None, если аватар показать нельзя."""
        try:
            template = self._display_template()
            if username is None:
                logger.debug("У пользователя нет имени, URL аватара не строится")
                return None
            return replace_in_url(template, username)
        except AvatarUrlError as exc:
            _report(exc)
            return None

    def resolve_change_avatar_url(self, username: str | None) -> str | None:
        """
        Возвращает URL страницы смены аватара.

        Если шаблон не задан, не содержит маркера или имя пользователя неизвестно,
        шаблон возвращается как есть (в том числе None). Отсутствие ссылки на смену
        аватара считается обычной настройкой, поэтому предупреждений нет.
        """
        template = self.config.change_avatar_url_template
        if username is None or template is None or REPLACE_MARKER not in template:
            return template
        try:
            return replace_in_url(template, username)
        except EncodingFailure as exc:
            _report(exc)
            return None

    def _display_template(self) -> str:
        template = self._avatar_url_template
        if template is None:
            raise NotConfigured()
        # Один и тот же аватар у всех пользователей вряд ли задуман, поэтому без маркера не работаем
        if REPLACE_MARKER not in template:
            raise MalformedTemplate(template, REPLACE_MARKER)
        return template


def _report(exc: AvatarUrlError) -> None:
    logger.log(exc.log_level, str(exc), extra={"reason": exc.reason})


class ExternalUrlAvatarProvider(AvatarProvider):
    """Провайдер аватаров для сервера ревью поверх AvatarUrlResolver."""

    def __init__(self, resolver: AvatarUrlResolver):
        self.resolver = resolver

    def get_url(self, account: Account, image_size: int | None = None) -> str | None:
        # Размер в шаблон не подставляется
        return self.resolver.resolve_avatar_url(account.username)

    def get_change_avatar_url(self, account: Account) -> str | None:
        return self.resolver.resolve_change_avatar_url(account.username)


def build_config(settings: Settings) -> AvatarConfig:
    return AvatarConfig(
        avatar_url_template=settings.avatar.url,
        change_avatar_url_template=settings.avatar.change_url,
        secure_transport=settings.secure_transport,
    )


def build_resolver(settings: Settings) -> AvatarUrlResolver:
    return AvatarUrlResolver(build_config(settings))
