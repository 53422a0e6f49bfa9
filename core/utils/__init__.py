from core.utils.helpers import (
    slugify,
    week_start_for,
    format_short_date,
    format_long_date,
    format_week_date_range,
    format_day_date,
)

__all__ = [
    "slugify",
    "week_start_for",
    "format_short_date",
    "format_long_date",
    "format_week_date_range",
    "format_day_date",
]
