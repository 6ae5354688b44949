import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.security.utils import get_authorization_scheme_param
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api.endpoints import auth
from app.api.endpoints import ai_chat
from app.api.endpoints import permissions


from fastapi.middleware.cors import CORSMiddleware
from app.core.config import Settings
from app.core.security import decode_access_token

settings = Settings()
logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Hirenup API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


# body validation runs before auth dependencies; these routes still answer 401 first
AUTHENTICATED_PREFIXES = ("/ai/", "/permissions/")


def has_bearer_token(request: Request) -> bool:
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    return scheme.lower() == "bearer" and decode_access_token(token) is not None


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    if request.url.path.startswith(AUTHENTICATED_PREFIXES) and not has_bearer_token(request):
        return JSONResponse({"error": "Unauthorized"}, status_code=401, headers={"WWW-Authenticate": "Bearer"})
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    if request.url.path == "/ai/chat":
        return JSONResponse({"error": ai_chat.MISSING_FIELDS}, status_code=400)
    return JSONResponse({"error": "Invalid request"}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(ai_chat.router, prefix="/ai", tags=["ai"])
app.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
