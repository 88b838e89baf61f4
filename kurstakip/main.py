import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kurstakip.config import settings, validate_settings
from kurstakip.database import Base, engine
from kurstakip import models  # noqa: F401  registers the tables on Base
from kurstakip.errors import KursTakipError
from kurstakip.logging_config import configure_logging
from kurstakip.routers import (
    admin as admin_router,
    attendance as attendance_router,
    auth as auth_router,
    courses as courses_router,
    enrollments as enrollments_router,
    inbox as inbox_router,
    messaging as messaging_router,
    payments as payments_router,
    stats as stats_router,
    students as students_router,
    teachers as teachers_router,
)
from kurstakip.utils.rate_limit import RateLimitExceeded

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Kurs Takip")
Base.metadata.create_all(bind=engine)
validate_settings()


@app.exception_handler(KursTakipError)
async def domain_error_handler(request: Request, exc: KursTakipError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": str(exc), "code": "RATE_LIMITED"},
        headers={"Retry-After": str(exc.retry_after), "X-RateLimit-Reset": str(int(exc.reset_at))},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Validation failed",
            "code": "VALIDATION_ERROR",
            "details": [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ],
        },
    )


app.include_router(auth_router.router)
app.include_router(students_router.router)
app.include_router(courses_router.router)
app.include_router(enrollments_router.router)
app.include_router(attendance_router.router)
app.include_router(payments_router.router)
app.include_router(teachers_router.router)
app.include_router(inbox_router.router)
app.include_router(messaging_router.router)
app.include_router(stats_router.router)
app.include_router(admin_router.router)


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("kurstakip.main:app", host="127.0.0.1", port=8000, reload=True)
