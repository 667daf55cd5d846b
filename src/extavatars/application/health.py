from extavatars.application.avatars import AvatarUrlResolver


def check_health(resolver: AvatarUrlResolver):
    return {
        "status": "ok",
        "avatars_enabled": resolver.enabled,
        "secure_transport": resolver.config.secure_transport,
    }
