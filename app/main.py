import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.config import settings
from app.db import init_database
from app.exceptions import ShareItError
from app.routers import auth, bookings, items, requests, users


logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database"
    init_database()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="ShareIt",
    description="Item sharing service based on FastAPI: list items, book them, approve bookings and leave comments.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


@app.exception_handler(ShareItError)
async def shareit_error_handler(request: Request, exc: ShareItError):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(items.router)
app.include_router(bookings.router)
app.include_router(requests.router)
