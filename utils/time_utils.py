from datetime import date, datetime

DATE_FORMAT = "%d/%m/%Y"
TIME_FORMAT = "%d/%m/%Y %H:%M"


def format_datetime(value: datetime | None) -> str:
    """Локальное время в формате ``dd/mm/YYYY HH:MM``; ``-`` для пустых."""
    if value is None:
        return "-"
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime(TIME_FORMAT)


def format_date(value: date | datetime | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime(DATE_FORMAT)
