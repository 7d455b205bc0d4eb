import logging
import os
import socket
from typing import Optional
from urllib.parse import urlparse

from fastapi import FastAPI, Request, HTTPException, Response
from fastapi.responses import JSONResponse, RedirectResponse
from telegram import Update
from telegram.ext import Application
from telegram.error import TelegramError

import jeopardy_game
from jeopardy_game.web import router as board_router

from shared.logging_utils import configure_logging


TOKEN = os.environ.get("TELEGRAM_BOT_TOKEN")
PUBLIC_URL = os.environ.get("PUBLIC_URL")
WEBHOOK_SECRET = os.environ.get("WEBHOOK_SECRET", "")
WEBHOOK_PATH = os.environ.get("WEBHOOK_PATH", "/webhook")
ALLOWED_UPDATES = ["message", "callback_query"]

configure_logging(extra_values=[TOKEN, WEBHOOK_SECRET])
logger = logging.getLogger(__name__)

app = FastAPI()
app.include_router(board_router)

APPLICATION: Optional[Application] = None


def _can_resolve_webhook_host(webhook_url: str) -> bool:
    parsed = urlparse(webhook_url)
    host = parsed.hostname
    if not host:
        logger.error("Webhook URL %s does not contain a hostname", webhook_url)
        return False
    try:
        socket.getaddrinfo(host, None)
    except socket.gaierror as exc:
        logger.warning(
            "Skipping webhook registration for %s: failed to resolve host %s (%s)",
            webhook_url,
            host,
            exc,
        )
        return False
    return True


def _require_application() -> Application:
    if APPLICATION is None:
        raise HTTPException(status_code=503, detail="Telegram bot is not configured")
    return APPLICATION


@app.on_event("startup")
async def on_startup() -> None:
    global APPLICATION
    if not TOKEN:
        logger.warning("TELEGRAM_BOT_TOKEN is not set; only the browser board is served")
        return
    APPLICATION = Application.builder().token(TOKEN).build()
    jeopardy_game.register_handlers(APPLICATION)
    await APPLICATION.initialize()
    await APPLICATION.start()
    if PUBLIC_URL:
        webhook_url = f"{PUBLIC_URL.rstrip('/')}{WEBHOOK_PATH}"
        if _can_resolve_webhook_host(webhook_url):
            try:
                info = await APPLICATION.bot.get_webhook_info()
                webhook_is_different = info.url != webhook_url
            except TelegramError as exc:
                logger.warning("Failed to fetch current webhook info: %s", exc)
                webhook_is_different = True
            if webhook_is_different:
                try:
                    await APPLICATION.bot.set_webhook(
                        url=webhook_url,
                        secret_token=WEBHOOK_SECRET,
                        allowed_updates=ALLOWED_UPDATES,
                    )
                except TelegramError as exc:
                    logger.error("Failed to set webhook to %s: %s", webhook_url, exc)
        else:
            logger.warning("Telegram webhook will not be configured without a resolvable host")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    if APPLICATION is None:
        return
    await APPLICATION.stop()
    await APPLICATION.shutdown()


@app.post(WEBHOOK_PATH)
async def telegram_webhook(request: Request) -> JSONResponse:
    if request.headers.get("X-Telegram-Bot-Api-Secret-Token") != WEBHOOK_SECRET:
        raise HTTPException(status_code=403, detail="Invalid secret")
    application = _require_application()
    update = Update.de_json(await request.json(), application.bot)
    await application.process_update(update)
    return JSONResponse({"ok": True})


@app.get("/set_webhook")
async def set_webhook() -> JSONResponse:
    if not PUBLIC_URL:
        raise HTTPException(status_code=400, detail="PUBLIC_URL is not configured")
    application = _require_application()
    webhook_url = f"{PUBLIC_URL.rstrip('/')}{WEBHOOK_PATH}"
    if not _can_resolve_webhook_host(webhook_url):
        raise HTTPException(status_code=503, detail="Webhook host cannot be resolved")
    try:
        await application.bot.set_webhook(
            url=webhook_url,
            secret_token=WEBHOOK_SECRET,
            allowed_updates=ALLOWED_UPDATES,
        )
    except TelegramError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to set webhook: {exc}") from exc
    return JSONResponse({"url": webhook_url})


@app.get("/")
async def root() -> Response:
    return RedirectResponse(board_router.prefix)


@app.get("/healthz")
async def healthz_get():
    return {"status": "ok"}


@app.head("/healthz", include_in_schema=False)
async def healthz_head():
    return Response(status_code=200)
