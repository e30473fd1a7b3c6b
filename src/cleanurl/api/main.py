"""FastAPI main application."""

from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from ..cleaning.analyzer import analyze_url, badge_text, tracking_param_count
from ..cleaning.url_cleaner import clean_url, clean_urls
from ..config import API_HOST, API_PORT
from ..logging import setup_logging, get_logger
from .models import BatchCleanRequest, CleanRequest, CountResponse, HealthResponse

# Setup logging
setup_logging()
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Clean URL",
    description="Strips tracking parameters from URLs while keeping application state",
    version="0.1.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(status="ok")


@app.post("/clean")
async def clean(request: CleanRequest) -> Dict[str, Any]:
    """
    Clean a single URL.

    Invalid URLs come back as a result with success=false, not as an HTTP error.
    """
    try:
        result = clean_url(request.url)
        logger.info(f"Clean request: url='{request.url[:100]}', removed={result.removed_count}")
        return result.to_dict()
    except Exception as e:
        logger.error(f"Error in clean endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/clean/batch")
async def clean_batch(request: BatchCleanRequest) -> List[Dict[str, Any]]:
    """Clean a list of URLs; one failing URL does not fail the batch."""
    try:
        results = clean_urls(request.urls)
        logger.info(f"Batch clean request: {len(results)} URLs")
        return [result.to_dict() for result in results]
    except Exception as e:
        logger.error(f"Error in batch clean endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/analyze")
async def analyze(request: CleanRequest) -> Dict[str, Any]:
    """Clean a URL and report removed parameters per category."""
    try:
        return analyze_url(request.url).to_dict()
    except Exception as e:
        logger.error(f"Error in analyze endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@app.post("/count", response_model=CountResponse)
async def count(request: CleanRequest):
    """Tracking parameter count and badge label for a URL."""
    try:
        total = tracking_param_count(request.url)
        return CountResponse(count=total, badge=badge_text(total))
    except Exception as e:
        logger.error(f"Error in count endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
