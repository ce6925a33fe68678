"""
HTTP API exposing the analysis: ``GET /health`` and ``POST /analyze``.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from seo_headings import __version__
from seo_headings.analyzer import utc_now_iso
from seo_headings.config import AnalysisConfig, ConfigError
from seo_headings.core import AnalysisError, run_analysis

logger = logging.getLogger(__name__)

app = FastAPI(title="SEO Headings Analyzer", version=__version__)


class AnalyzeRequest(BaseModel):
    """Request body; field names follow the actor input (camelCase)."""

    model_config = ConfigDict(populate_by_name=True)

    start_url: Optional[str] = Field(default=None, alias="startUrl")
    crawl_urls: Optional[bool] = Field(default=None, alias="crawlUrls")
    max_pages: Optional[int] = Field(default=None, alias="maxPages")
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    timeout_ms: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("timeout", "timeoutMs", "timeout_ms")
    )
    max_redirects: Optional[int] = Field(default=None, alias="maxRedirects")
    include_heading_text: Optional[bool] = Field(default=None, alias="includeHeadingText")
    include_heading_structure: Optional[bool] = Field(default=None, alias="includeHeadingStructure")
    include_heading_score: Optional[bool] = Field(default=None, alias="includeHeadingScore")


@app.get("/health")
def health() -> dict:
    return {
        "status": "OK",
        "message": "SEO Headings API is running",
        "timestamp": utc_now_iso(),
    }


@app.post("/analyze")
def analyze(payload: AnalyzeRequest) -> JSONResponse:
    if not payload.start_url:
        return JSONResponse(
            status_code=400,
            content={
                "error": "startUrl is required",
                "message": "Please provide a valid startUrl in the request body",
            },
        )

    try:
        config = AnalysisConfig.from_mapping(payload.model_dump(), base=AnalysisConfig.from_env())
        logger.info("[api.analyze] start start_url=%s max_pages=%s", config.start_url, config.page_budget)
        report = run_analysis(config)
    except ConfigError as e:
        return JSONResponse(status_code=400, content={"error": "Invalid input", "message": str(e)})
    except AnalysisError as e:
        logger.exception("[api.analyze] failed start_url=%s", payload.start_url)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e)},
        )

    logger.info(
        "[api.analyze] done start_url=%s pages=%d",
        payload.start_url,
        report.analysis.total_pages_processed,
    )
    return JSONResponse(content=report.to_dict())


def main() -> None:
    import uvicorn

    from seo_headings.logging_config import setup_logging

    setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))
    uvicorn.run(app, host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "3002")))


if __name__ == "__main__":
    main()
