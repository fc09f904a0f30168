import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.api.routes_upload import router as upload_router
from app.api.routes_result import router as result_router
from app.api.routes_download import router as download_router
from app.core import config
from app.core.db import FirmwareDatabaseError, init_db
from app.middleware.limits import BodySizeLimitMiddleware

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

app = FastAPI(title="LVFS firmware upload", lifespan=lifespan)

app.add_middleware(BodySizeLimitMiddleware)

@app.exception_handler(FirmwareDatabaseError)
async def database_error(request: Request, exc: FirmwareDatabaseError):
    return JSONResponse(status_code=500, content={"detail": "Database error"})

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(upload_router)
app.include_router(result_router)
app.include_router(download_router)
