import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from app.config.bootstrap import bootstrap
from app.config.logging_setup import setup_logging
from app.config.settings import settings
from app.features.auth.router import router as auth_router
from app.features.content.router import router as content_router
from app.features.sections.router import router as sections_router
from app.features.systems.router import router as systems_router
from app.features.backgrounds.router import router as backgrounds_router
from app.utils.exceptions import PortalError, ValidationError
from app.utils.middleware import RequestSizeLimitMiddleware

setup_logging()
logger = logging.getLogger("portal")

# Create tables, asset directories and the default admin
bootstrap()

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    RequestSizeLimitMiddleware,
    paths=[f"{settings.API_PREFIX}/backgrounds/upload", f"{settings.API_PREFIX}/systems/upload-image"],
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = ValidationError("Invalid input", details={"errors": jsonable_encoder(exc.errors())})
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error", "code": "INTERNAL_ERROR"})

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(content_router, prefix=settings.API_PREFIX)
app.include_router(sections_router, prefix=settings.API_PREFIX)
app.include_router(systems_router, prefix=settings.API_PREFIX)
app.include_router(backgrounds_router, prefix=settings.API_PREFIX)

# Uploaded assets, read-only
app.mount("/backgrounds", StaticFiles(directory=settings.backgrounds_dir), name="backgrounds")
app.mount("/system-images", StaticFiles(directory=settings.system_images_dir), name="system-images")

@app.get("/")
def read_root():
    return {"message": f"{settings.PROJECT_NAME} is running"}
