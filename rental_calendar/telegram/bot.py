from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from rental_calendar.core.config import settings


def create_bot() -> Bot:
    """Bot for the configured token; only called when TELEGRAM_BOT_TOKEN is set"""
    return Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
