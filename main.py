from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from contextlib import asynccontextmanager
from typing import Optional
import logging

import db_sqlalchemy
from config import Settings
from store import PasteStore
from handlers import (
    create_paste_handler, get_paste_handler, get_raw_paste_handler,
    delete_paste_handler, health_handler
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    if settings is None:
        # load env
        load_dotenv()
        settings = Settings.from_env()

    database = db_sqlalchemy.create_database(settings.db_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup
        await db_sqlalchemy.init_db(settings.db_url, settings.db_path)
        await database.connect()
        logger.info(f"strings ready, database at {settings.db_url}")
        yield
        # shutdown
        await database.disconnect()
        logger.info("strings shutting down")

    app = FastAPI(title="strings", description="minimal pastebin", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = PasteStore(database)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.post("/api/paste")(create_paste_handler)
    app.get("/api/paste/{paste_id}")(get_paste_handler)
    app.get("/health")(health_handler)
    app.get("/{paste_id}/raw")(get_raw_paste_handler)
    app.delete("/{paste_id}")(delete_paste_handler)
    return app


if __name__ == "__main__":
    import uvicorn
    load_dotenv()
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
