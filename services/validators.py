"""Валидаторы и нормализаторы данных форм.

Ошибки проверки поднимаются как ``ValidationError`` с кодом, который
интерфейс переводит через ``ui.i18n``. Такие ошибки не логируются.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from dateutil.parser import isoparse


class ValidationError(ValueError):
    """Ошибка проверки формы до отправки запроса."""

    def __init__(self, code: str, field: str | None = None):
        super().__init__(code)
        self.code = code
        self.field = field


def require(value: Any, field: str) -> str:
    """Возвращает обрезанную строку или поднимает ``required``."""
    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError("required", field)
    return text


def optional_text(value: Any) -> str | None:
    text = "" if value is None else str(value).strip()
    return text or None


def normalize_email(email: str | None) -> str | None:
    text = (email or "").strip().lower()
    return text or None


def normalize_number(value: str | int | float | Decimal | None) -> str | None:
    """Нормализует строку с числом: ``"R$ 1.234,50"`` → ``"1234.50"``.

    Запятая считается десятичным разделителем; если в строке есть и точка,
    и запятая, то точки трактуются как разделители тысяч.
    """

    if value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        return str(value)

    text = re.sub(r"\s+", "", str(value)).replace(" ", "")
    text = re.sub(r"[^\d,.\-]", "", text)
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    else:
        text = text.replace(",", ".")
    return text.rstrip(".")


def parse_decimal(value: Any, field: str, *, required: bool = True) -> Decimal | None:
    text = normalize_number(value)
    if not text:
        if required:
            raise ValidationError("required", field)
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise ValidationError("invalid_number", field) from None
    if not number.is_finite():
        raise ValidationError("invalid_number", field)
    return number


def parse_int(value: Any, field: str, *, required: bool = False) -> int | None:
    text = "" if value is None else str(value).strip()
    if not text:
        if required:
            raise ValidationError("required", field)
        return None
    try:
        return int(text)
    except ValueError:
        raise ValidationError("invalid_integer", field) from None


def parse_tags(text: str | None) -> list[str]:
    """``"a, b,,a"`` → ``["a", "b"]``."""
    tags: list[str] = []
    for part in (text or "").split(","):
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def check_passwords(password: str, confirmation: str) -> str:
    if not password:
        raise ValidationError("required", "password")
    if password != confirmation:
        raise ValidationError("password_mismatch", "confirm_password")
    return password


# ───────────── даты ─────────────


def local_to_iso_utc(value: datetime | None) -> str | None:
    """Локальное время → ISO-8601 в UTC с суффиксом ``Z``.

    Наивное значение считается временем в локальном поясе машины.
    """

    if value is None:
        return None
    aware = value.astimezone() if value.tzinfo is None else value
    utc = aware.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def iso_to_local(value: str | datetime | None) -> datetime | None:
    """ISO-8601 → наивное локальное время для полей ввода."""

    if value in (None, ""):
        return None
    parsed = value if isinstance(value, datetime) else isoparse(str(value))
    if parsed.tzinfo is None:
        return parsed
    return parsed.astimezone().replace(tzinfo=None)


def validate_period(
    start: datetime | None,
    end: datetime | None,
    *,
    start_field: str = "start",
    end_field: str = "end",
) -> tuple[datetime, datetime]:
    if start is None:
        raise ValidationError("required", start_field)
    if end is None:
        raise ValidationError("required", end_field)
    if end <= start:
        raise ValidationError("end_before_start", end_field)
    return start, end


def validate_appointment(
    appointment_type: str,
    meeting_link: str | None,
    start: datetime | None,
    end: datetime | None,
) -> str | None:
    """Проверяет запись на приём; возвращает нормализованную ссылку."""

    link = optional_text(meeting_link)
    if appointment_type == "ONLINE" and not link:
        raise ValidationError("meeting_link_required", "meeting_link")
    validate_period(start, end)
    return link
