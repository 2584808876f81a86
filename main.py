import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from routers.health import router as health_router
from routers.problems import router as problems_router

logger = logging.getLogger("mathbuddy")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Math Buddy API")

# Next.js dev server plus any deployed front-ends listed in ALLOWED_ORIGINS
_extra_origins = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        *_extra_origins,
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_as_400(request: Request, exc: RequestValidationError):
    # Malformed bodies are client errors, same as missing fields
    logger.info("request_validation_failed path=%s", request.url.path)
    return JSONResponse(status_code=400, content={"detail": "Invalid request body."})


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(problems_router)  # /api/math-problem, /api/math-problem/submit
app.include_router(health_router)  # /health/...
