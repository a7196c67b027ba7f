import asyncio
import logging

from fastapi import FastAPI
from aiogram import Bot, Dispatcher

from rental_calendar.core.config import settings
from rental_calendar.core.logging import setup_logging
from rental_calendar.middleware.request_logger import RequestLoggerMiddleware

from rental_calendar.api.health import router as health_router
from rental_calendar.web.routers import calendar_api
from rental_calendar.telegram.bot import create_bot
from rental_calendar.telegram.handlers import availability


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)

logger.info("Starting application")


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title="Rental Calendar",
    description="Availability calendar and date range selection for the booking flow",
    version="0.1.0",
)

app.add_middleware(RequestLoggerMiddleware)

app.include_router(health_router)
app.include_router(calendar_api.router)


# -------------------------------------------------
# Telegram (aiogram)
# -------------------------------------------------

dp = Dispatcher()
dp.include_router(availability.router)

bot: Bot | None = None


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    global bot
    logger.info("FastAPI startup")

    if not settings.telegram_bot_token:
        logger.info("TELEGRAM_BOT_TOKEN not set, Telegram calendar disabled")
        return

    bot = create_bot()
    logger.info("Starting Telegram polling")
    asyncio.create_task(dp.start_polling(bot, handle_signals=False))


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("FastAPI shutdown")

    if bot is not None:
        await bot.session.close()
