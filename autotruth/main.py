import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autotruth.config import CORS_ORIGINS, LOG_LEVEL
from autotruth.routes.analysis import router as analysis_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="AutoTruth Contract Analyzer")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Error occurred on path %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred. Please try again later."})


app.include_router(analysis_router, prefix="/contracts", tags=["analysis"])


@app.get("/")
async def root():
    return {"message": "AutoTruth Contract Analyzer is running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
