import logging


class AvatarUrlError(Exception):
    """Базовая ошибка построения URL аватара. Наружу из резолвера не выходит."""

    reason = "avatar_url_error"
    log_level = logging.WARNING


class NotConfigured(AvatarUrlError):
    reason = "not_configured"

    def __init__(self):
        super().__init__(
            "URL аватара не настроен, аватары показываться не будут. "
            "Задайте avatar.url (переменная окружения AVATAR__URL)"
        )


class MalformedTemplate(AvatarUrlError):
    reason = "malformed_template"

    def __init__(self, template: str, marker: str):
        self.template = template
        super().__init__(
            f"URL аватара '{template}' не содержит {marker}, подставить имя пользователя невозможно"
        )


class EncodingFailure(AvatarUrlError):
    reason = "encoding_failure"
    log_level = logging.ERROR

    def __init__(self, username: str, encoding: str):
        self.username = username
        super().__init__(f"Не удалось закодировать имя пользователя {username!r} в {encoding}")
