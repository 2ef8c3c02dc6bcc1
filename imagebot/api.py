"""
HTTP status surface: liveness, statistics, recent generations and a bot
health probe. Read-only; all state comes from the injected store and bot.
"""
import datetime
import os
import time
from typing import List

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from . import schemas
from .config import RATE_LIMIT_API_PER_MINUTE, RECENT_GENERATIONS_LIMIT, STATIC_DIR, TEAM_NAME
from .logger import logger
from .storage import GenerationStore

FALLBACK_PAGE = f"""<!DOCTYPE html>
<html>
  <head>
    <title>AI Image Generator Bot</title>
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
  </head>
  <body>
    <div style="display: flex; justify-content: center; align-items: center; height: 100vh; font-family: Arial, sans-serif;">
      <div style="text-align: center;">
        <h1>🎨 AI Image Generator Bot</h1>
        <p>The bot is running successfully!</p>
        <p><strong>Developed by {TEAM_NAME}</strong></p>
        <p>Use the bot on Telegram to generate AI images.</p>
      </div>
    </div>
  </body>
</html>
"""


def _timestamp() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def create_app(storage: GenerationStore, bot_service, launch_bot: bool = True, static_dir: str = STATIC_DIR) -> FastAPI:
    """
    Build the FastAPI application around an explicitly constructed store and
    bot service. The bot is launched on startup and stopped on shutdown when
    `launch_bot` is set.
    """
    limiter = Limiter(key_func=get_remote_address)
    app = FastAPI(title="AI Image Generator Bot")
    app.state.limiter = limiter
    app.state.storage = storage
    app.state.bot_service = bot_service
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    api_limit = f"{RATE_LIMIT_API_PER_MINUTE}/minute"

    @app.on_event("startup")
    async def startup_event():
        if launch_bot:
            try:
                await bot_service.launch()
            except Exception as e:
                # The status surface stays up; /api/bot-health reports the outage
                logger.error(f"Failed to launch Telegram bot: {e}")

    @app.on_event("shutdown")
    async def shutdown_event():
        if launch_bot:
            await bot_service.stop()

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            duration_ms = (time.monotonic() - start) * 1000
            logger.info(f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms")
        return response

    @app.get("/", response_model=schemas.ServiceStatusResponse)
    def service_status():
        """Liveness payload"""
        return {
            "status": "healthy",
            "message": "AI Image Generator Bot is running",
            "timestamp": _timestamp(),
            "team": TEAM_NAME,
        }

    @app.get("/api/bot-stats", response_model=schemas.BotStats)
    @limiter.limit(api_limit)
    async def bot_stats(request: Request):
        try:
            return await storage.compute_stats()
        except Exception as e:
            logger.error(f"Error fetching bot stats: {e}")
            return JSONResponse(status_code=500, content={"error": "Failed to fetch bot statistics"})

    @app.get("/api/recent-generations", response_model=List[schemas.GenerationRecord])
    @limiter.limit(api_limit)
    async def recent_generations(request: Request):
        try:
            return await storage.list_recent(RECENT_GENERATIONS_LIMIT)
        except Exception as e:
            logger.error(f"Error fetching recent generations: {e}")
            return JSONResponse(status_code=500, content={"error": "Failed to fetch recent generations"})

    @app.get("/api/bot-health", response_model=schemas.BotHealthResponse)
    @limiter.limit(api_limit)
    async def bot_health(request: Request):
        """Actively query Telegram for the bot identity"""
        try:
            bot_info = await bot_service.get_me()
            return {
                "status": "healthy",
                "botInfo": {
                    "id": bot_info.id,
                    "username": bot_info.username,
                    "first_name": bot_info.first_name,
                },
                "timestamp": _timestamp(),
            }
        except Exception as e:
            logger.error(f"Bot health check failed: {e}")
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "error": str(e) or type(e).__name__, "timestamp": _timestamp()},
            )

    @app.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "DELETE"], include_in_schema=False)
    async def unknown_api_route(path: str):
        return JSONResponse(status_code=404, content={"error": "Not found"})

    if os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning(f"Build directory not found: {static_dir}; serving fallback page")

        @app.get("/{path:path}", response_class=HTMLResponse, include_in_schema=False)
        def fallback_page(path: str):
            return FALLBACK_PAGE

    return app
