from contextlib import asynccontextmanager

from fastapi import FastAPI

from goaltracker.config import settings
from goaltracker.goals.router import get_store, router as goals_router
from goaltracker.logging_config import setup_logging


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(settings.log_level)
    # Initial load; failures are reported by the store and do not block start-up
    store = get_store()
    await store.load()
    yield
    await store.gateway.aclose()


app = FastAPI(title="GoalTracker", version="0.1.0", lifespan=lifespan)
app.include_router(goals_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "goals": {
            "list": "/goals",
            "search": "/goals/search",
            "refresh": "/goals/refresh",
            "highlighted": "/goals/highlighted",
            "edit": "/goals/{goal_id}",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
