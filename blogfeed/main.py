from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from . import config
from .routers import pages
from .services import markdown_loader


@asynccontextmanager
async def lifespan(app: FastAPI):
    markdown_loader.refresh_cache()
    yield


app = FastAPI(title="blogfeed", lifespan=lifespan)

app.mount("/static", StaticFiles(directory=str(config.STATIC_DIR)), name="static")


@app.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


# Registered last: the page route matches any single path segment.
app.include_router(pages.router)
