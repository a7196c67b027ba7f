from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from rental_calendar.domain.calendar import CalendarDay, CalendarMonth, next_month, previous_month
from rental_calendar.utils.dates import month_title

WEEK_DAYS = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]

PREFIX = "cal"
IGNORE = "ignore"


def day_label(day: CalendarDay) -> str:
    if not day.is_current_month:
        return " "
    if day.is_selection_start or day.is_selection_end:
        return f"[{day.date.day}]"
    if day.is_selected or day.is_hovering:
        return f"·{day.date.day}·"
    if day.is_past or day.is_unavailable:
        return "✖"
    if day.is_today:
        return f"🔹 {day.date.day}"
    return str(day.date.day)


def day_callback(day: CalendarDay) -> str:
    if not day.is_clickable:
        return IGNORE
    return f"{PREFIX}:day:{day.date.isoformat()}"


def month_callback(year: int, month: int) -> str:
    return f"{PREFIX}:month:{year:04d}-{month:02d}"


def build_month_keyboard(
    grid: CalendarMonth,
    show_reset: bool = False,
) -> InlineKeyboardMarkup:
    keyboard: list[list[InlineKeyboardButton]] = []

    # 1. Title
    keyboard.append(
        [
            InlineKeyboardButton(
                text=month_title(grid.year, grid.month),
                callback_data=IGNORE,
            )
        ]
    )

    # 2. Week days, Sunday first
    keyboard.append(
        [InlineKeyboardButton(text=day, callback_data=IGNORE) for day in WEEK_DAYS]
    )

    # 3. Days
    for week in grid.weeks:
        keyboard.append(
            [
                InlineKeyboardButton(text=day_label(day), callback_data=day_callback(day))
                for day in week
            ]
        )

    # 4. Navigation
    prev_month = previous_month(grid.first_day)
    following = next_month(grid.first_day)

    keyboard.append(
        [
            InlineKeyboardButton(
                text="⬅️",
                callback_data=month_callback(prev_month.year, prev_month.month),
            ),
            InlineKeyboardButton(
                text="➡️",
                callback_data=month_callback(following.year, following.month),
            ),
        ]
    )

    # 5. Reset
    if show_reset:
        keyboard.append(
            [InlineKeyboardButton(text="✖ Reset", callback_data=f"{PREFIX}:reset")]
        )

    return InlineKeyboardMarkup(inline_keyboard=keyboard)
