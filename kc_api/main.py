import logging

from fastapi import FastAPI, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from kc_api.config import get_settings
from kc_api.database import Base, db
from kc_api.dependencies import RoleGuard, PUBLIC
from kc_api.exceptions import StorageFailure
from kc_api.models import user_model, file_model, sharing_model
from kc_api.routers import auth, user, file, sharing, admin

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=db)

app = FastAPI(title="KC API")

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(user.router, prefix="/users", tags=["Users"])
app.include_router(file.router, prefix="/files", tags=["Files"])
app.include_router(sharing.router, prefix="/sharing", tags=["Sharing"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    # Full detail goes to the server log only.
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    failure = StorageFailure()
    return JSONResponse(status_code=failure.status_code, content={"detail": failure.detail})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"detail": "Internal server error"})


@app.get("/ping")
def ping(_: None = Depends(RoleGuard(PUBLIC))):
    return {"status": "ok", "service": "backend"}
