"""Text rendering of stored users."""

from collections.abc import Iterable

from usergen.entities.user import User

RULE = "=" * 41
SEPARATOR = "-" * 41
EMPTY_MESSAGE = "База данных пуста"


def format_user(user: User) -> list[str]:
    """Lines describing one stored user."""
    return [
        f"👤 {user.first_name} {user.last_name}",
        f"   📧 {user.email}",
        f"   📅 {user.birth_date:%d.%m.%Y}",
        f"   📅 Возраст: {user.age} лет",
        f"   📞 {user.phone or ''}",
        f"   🆔 ID: {user.id}",
        SEPARATOR,
    ]


def render_users(users: Iterable[User]) -> list[str]:
    """Header, rule and one block per user, or the empty-table message."""
    lines = ["📋 Все пользователи в базе:", RULE]
    blocks = [format_user(user) for user in users]
    if not blocks:
        lines.append(EMPTY_MESSAGE)
        return lines

    for block in blocks:
        lines.extend(block)
    return lines
