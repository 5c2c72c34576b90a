from dataclasses import dataclass

from app.config.settings import Settings


@dataclass(frozen=True)
class Principal:
    """The identity on whose behalf a pipeline stage runs."""

    id: str
    email: str
    name: str = ""


def principal_from_settings(settings: Settings) -> Principal:
    """Build the configured single-user principal."""
    return Principal(
        id=settings.demo_user_id,
        email=settings.demo_user_email,
        name=settings.demo_user_name,
    )
