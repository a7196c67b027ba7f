import datetime
import logging

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from rental_calendar.core.config import settings
from rental_calendar.core.messages import messages
from rental_calendar.services.calendar_session import CalendarSession
from rental_calendar.telegram.state.calendar import calendar_sessions
from rental_calendar.telegram.ui.calendar import IGNORE, PREFIX, build_month_keyboard
from rental_calendar.utils.dates import parse_month

router = Router()
logger = logging.getLogger(__name__)


def render_text(session: CalendarSession) -> str:
    state = session.state
    if state.committed_range is not None:
        text = messages.stay_summary(
            state.start_date, state.end_date, state.committed_range.nights
        )
    elif state.is_selecting_end and state.start_date is not None:
        text = messages.pick_end(state.start_date)
    else:
        text = messages.PICK_START

    if session.error:
        text = f"⚠️ {session.error}\n\n{text}"
    return text


def render_keyboard(session: CalendarSession):
    # Telegram keyboards are narrow: one month at a time
    grid = session.months()[0]
    show_reset = session.state.start_date is not None
    return build_month_keyboard(grid, show_reset=show_reset)


@router.message(Command("availability"))
async def availability_command(message: Message, command: CommandObject):
    """/availability [property_id] opens the booking calendar"""
    if message.from_user is None:
        return

    property_id = (command.args or "").strip() or settings.default_property_id
    if not property_id:
        await message.answer(messages.NO_PROPERTY)
        return

    session = CalendarSession(property_id, months_count=1)
    await session.load()
    calendar_sessions[message.from_user.id] = session

    await message.answer(render_text(session), reply_markup=render_keyboard(session))


@router.callback_query(F.data == IGNORE)
async def ignore_callback(callback: CallbackQuery):
    """Inert buttons: titles, week days, unavailable cells"""
    await callback.answer()


@router.callback_query(F.data.startswith(f"{PREFIX}:day:"))
async def select_day(callback: CallbackQuery):
    if callback.from_user is None or callback.message is None or callback.data is None:
        return

    session = calendar_sessions.get(callback.from_user.id)
    if session is None:
        await callback.answer(messages.SESSION_EXPIRED, show_alert=True)
        return

    selected_date = datetime.date.fromisoformat(callback.data.rsplit(":", 1)[1])
    result = session.click(selected_date)

    text = render_text(session)
    if result.committed is not None:
        quote = await session.service.get_quote(session.property_id, result.committed)
        if quote is not None and quote.available:
            text = messages.stay_summary(
                result.committed.start_date,
                result.committed.end_date,
                quote.nights or result.committed.nights,
                total_price=str(quote.total_price),
            )

    await callback.message.edit_text(text, reply_markup=render_keyboard(session))

    if result.rejection is not None:
        await callback.answer(
            messages.range_rejected(result.rejection.conflict_date), show_alert=True
        )
    else:
        await callback.answer()


@router.callback_query(F.data.startswith(f"{PREFIX}:month:"))
async def change_month(callback: CallbackQuery):
    if callback.from_user is None or callback.message is None or callback.data is None:
        return

    session = calendar_sessions.get(callback.from_user.id)
    if session is None:
        await callback.answer(messages.SESSION_EXPIRED, show_alert=True)
        return

    session.show_month(parse_month(callback.data.rsplit(":", 1)[1]))

    await callback.message.edit_text(
        render_text(session), reply_markup=render_keyboard(session)
    )
    await callback.answer()


@router.callback_query(F.data == f"{PREFIX}:reset")
async def reset_selection(callback: CallbackQuery):
    if callback.from_user is None or callback.message is None:
        return

    session = calendar_sessions.get(callback.from_user.id)
    if session is None:
        await callback.answer(messages.SESSION_EXPIRED, show_alert=True)
        return

    session.reset()
    session.go_to_today()

    await callback.message.edit_text(
        render_text(session), reply_markup=render_keyboard(session)
    )
    await callback.answer()
