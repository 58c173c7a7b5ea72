#!/usr/bin/env python3

from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from lendtrack.core.db import Store
from lendtrack.routes import api, views
from lendtrack.configs import OPTIONS, DB_URI, DEBUG
from lendtrack import __version__ as VERSION

TEMPLATES_DIR = Path(__file__).parent / "templates"


def create_app(store: Store = None) -> FastAPI:
    """Builds the application around `store`, or a Store on DB_URI.

    The store is initialized on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store.init()
        try:
            yield
        finally:
            app.state.store.close()

    app = FastAPI(
        title="lendtrack",
        description="lendtrack: a book lending tracker for small libraries",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.store = store or Store(DB_URI, echo=DEBUG)
    app.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.include_router(views.router)
    app.include_router(api.router, prefix="/v1/api")
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("lendtrack.app:app", **OPTIONS)
