## Main application entry point
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pathwise.chat.routes import router as chat_router
from pathwise.errors import FormatError, NotFound, PathwiseError, TransportError, ValidationError
from pathwise.generation.routes import router as generation_router
from pathwise.profile.routes import router as profile_router
from pathwise.roadmaps.routes import router as roadmaps_router
from pathwise.routes import router as app_router
from pathwise.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(asctime)s] [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: 400,
    NotFound: 404,
    FormatError: 422,
    TransportError: 502,
}

app = FastAPI(title="Pathwise")

@app.exception_handler(PathwiseError)
async def pathwise_error_handler(request: Request, exc: PathwiseError):
    status_code = ERROR_STATUS.get(type(exc), 500)
    if status_code >= 500:
        log.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=status_code)

app.include_router(app_router)
app.include_router(roadmaps_router)
app.include_router(generation_router)
app.include_router(chat_router)
app.include_router(profile_router)
