from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import router as api_router
from api.error_handlers import register_error_handlers
from config import settings
from core.observability import setup_logging
from startup import create_tables

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    create_tables()
    logger.info("Agora API started")
    yield
    logger.info("Agora API shutting down")


app = FastAPI(
    title="Agora API",
    description="Social network and marketplace backend",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware with origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(api_router, prefix="/api")


@app.get("/health", operation_id="healthcheck", tags=["Health"])
def health_check():
    return JSONResponse(
        status_code=200,
        content={"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
    )


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.SERVER_HOST, port=settings.SERVER_PORT)
