import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .routers.analyze import router as analyze_router
from .services.errors import PipelineError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="SEO Title & Description Generator")

app.include_router(analyze_router)


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    logger.warning("%s %s failed with %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Critical error in %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "不明なサーバーエラーです。"})


@app.get("/")
def root():
    return {"message": "API is running!"}


@app.get("/health")
def health():
    return {"status": "ok", "model": settings.hf_model}
