from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from config import settings
from core.log import configure_logging, get_logger
from api.v1.router import api_router
from services.auth import token_service
from services.db import init_models


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.env_name, settings.log_level)
    # bad key material must stop the boot, not the first login
    tokens = token_service()
    await init_models()
    get_logger("api.startup").info(
        "service ready", env=settings.env_name, token_ttl_ms=tokens.expires_in
    )
    yield


app = FastAPI(title="Session Auth API", version="1.0.0", lifespan=lifespan)

# CORS (public demo only – lock down in prod)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")

@app.get("/health", tags=["meta"])
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.env_name}
