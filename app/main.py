import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as api_router
from app.core.config import settings

logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(message)s",
    level=settings.LOG_LEVEL,
)
log = logging.getLogger(__name__)

app = FastAPI(
    title="Shortreel API",
    description="Short-form video sharing: accounts, uploads and a personal video library.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed input is an invalid argument: 400 with the first reason as detail."""
    errors = []
    for err in exc.errors():
        location_parts = [str(part) for part in err.get("loc", []) if part != "body"]
        message = err.get("msg", "")
        # pydantic prefixes messages raised from custom validators
        message = message.removeprefix("Value error, ")
        errors.append(
            {
                "field": "body" if not location_parts else ".".join(location_parts),
                "message": message,
            }
        )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": errors[0]["message"] if errors else "Invalid request payload",
            "errors": errors,
        },
    )


app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Shortreel API", "docs": "/docs"}
