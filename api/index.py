"""
FastAPI wrapper for the SEO Text Analyzer - Vercel Serverless Function.

This module exposes analysis and keyword insertion as a REST API. Analyses
are kept in process memory for the lifetime of the process.
"""

import os
import threading
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from seo_text_analyzer import __version__
from seo_text_analyzer.analyzer import AnalysisNotFoundError, AnalysisValidationError, SEOAnalyzer
from seo_text_analyzer.config import AnalyzerConfig
from seo_text_analyzer.docx_writer import analysis_report_bytes
from seo_text_analyzer.keyword_export import keywords_to_csv
from seo_text_analyzer.llm_client import ProviderConfigurationError, ProviderUnavailableError
from seo_text_analyzer.models import ContentType

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

app = FastAPI(
    title="SEO Text Analyzer API",
    description="Analyzes text for SEO quality and inserts recommended keywords",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalyzeRequest(BaseModel):
    """Request model for text analysis."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., min_length=10, description="Text to analyze (at least 10 characters)")
    content_type: ContentType = Field(
        ContentType.BLOG_POST,
        alias="contentType",
        description="blog_post, social_media, newsletter or product_description",
    )


class InsertKeywordRequest(BaseModel):
    """Request model for keyword insertion."""
    model_config = ConfigDict(populate_by_name=True)

    analysis_id: int = Field(..., alias="analysisId")
    keyword: str = Field(..., description="Keyword phrase to insert")
    text: str = Field(..., description="Current text to insert the keyword into")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    provider: str
    provider_configured: bool
    detail: Optional[str] = None


_analyzer: Optional[SEOAnalyzer] = None
_analyzer_lock = threading.Lock()


def get_analyzer() -> SEOAnalyzer:
    """Process-wide analyzer (and its in-memory store)."""
    global _analyzer
    if _analyzer is None:
        # Sync dependencies run in the threadpool; only one store may exist
        with _analyzer_lock:
            if _analyzer is None:
                _analyzer = SEOAnalyzer(config=AnalyzerConfig.from_env())
    return _analyzer


def _load_analysis(analyzer: SEOAnalyzer, analysis_id: int):
    try:
        return analyzer.get_analysis(analysis_id)
    except AnalysisNotFoundError:
        raise HTTPException(status_code=404, detail="Analysis not found")


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    try:
        config = AnalyzerConfig.from_env()
    except ValueError as e:
        return HealthResponse(
            status="misconfigured",
            version=__version__,
            provider=os.environ.get("SEO_ANALYZER_PROVIDER", ""),
            provider_configured=False,
            detail=str(e),
        )

    return HealthResponse(
        status="healthy",
        version=__version__,
        provider=config.provider,
        provider_configured=bool(os.environ.get(config.api_key_env_var)),
    )


@app.post("/api/analyze")
def analyze(request: AnalyzeRequest, analyzer: SEOAnalyzer = Depends(get_analyzer)):
    """
    Analyze text for SEO quality.

    Extracts keywords through the configured provider, scores the text,
    generates recommendations and stores the analysis.
    """
    try:
        analysis = analyzer.analyze(request.text, request.content_type)
    except AnalysisValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProviderConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProviderUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return analysis.to_dict()


@app.post("/api/insert-keyword")
def insert_keyword(request: InsertKeywordRequest, analyzer: SEOAnalyzer = Depends(get_analyzer)):
    """Insert a keyword into the submitted text and store it as the optimized text."""
    try:
        result = analyzer.insert_keyword(request.analysis_id, request.keyword, request.text)
    except AnalysisNotFoundError:
        raise HTTPException(status_code=404, detail="Analysis not found")

    return {
        "optimizedText": result.optimized_text,
        "analysis": result.analysis.to_dict(),
    }


@app.get("/api/analysis/{analysis_id}")
def get_analysis(analysis_id: int, analyzer: SEOAnalyzer = Depends(get_analyzer)):
    """Get a stored analysis by id."""
    return _load_analysis(analyzer, analysis_id).to_dict()


@app.post("/api/analysis/{analysis_id}/reset")
def reset_analysis(analysis_id: int, analyzer: SEOAnalyzer = Depends(get_analyzer)):
    """Restore the optimized text to the original text."""
    try:
        analysis = analyzer.reset_optimized_text(analysis_id)
    except AnalysisNotFoundError:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return analysis.to_dict()


@app.get("/api/analysis/{analysis_id}/progress")
def analysis_progress(analysis_id: int, analyzer: SEOAnalyzer = Depends(get_analyzer)):
    """Projected improvement from the keywords inserted so far."""
    try:
        progress = analyzer.progress(analysis_id)
    except AnalysisNotFoundError:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return progress.to_dict()


@app.get("/api/analysis/{analysis_id}/keywords.csv")
def export_keywords(analysis_id: int, analyzer: SEOAnalyzer = Depends(get_analyzer)):
    """Download the recommended keywords as CSV."""
    analysis = _load_analysis(analyzer, analysis_id)
    return Response(
        content=keywords_to_csv(analysis.keywords),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="keywords-{analysis_id}.csv"'},
    )


@app.get("/api/analysis/{analysis_id}/report.docx")
def export_report(analysis_id: int, analyzer: SEOAnalyzer = Depends(get_analyzer)):
    """Download a Word report of the analysis."""
    analysis = _load_analysis(analyzer, analysis_id)
    return Response(
        content=analysis_report_bytes(analysis),
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="seo-analysis-{analysis_id}.docx"'},
    )


@app.get("/api/info")
async def api_info():
    """Get API information and usage instructions."""
    return {
        "name": "SEO Text Analyzer API",
        "version": __version__,
        "description": "Analyzes text for SEO quality and inserts recommended keywords",
        "endpoints": {
            "GET /api/health": "Health check",
            "POST /api/analyze": "Analyze text ({text, contentType})",
            "POST /api/insert-keyword": "Insert a keyword ({analysisId, keyword, text})",
            "GET /api/analysis/{id}": "Get a stored analysis",
            "POST /api/analysis/{id}/reset": "Restore the original text",
            "GET /api/analysis/{id}/progress": "Projected improvement from inserted keywords",
            "GET /api/analysis/{id}/keywords.csv": "Export keywords as CSV",
            "GET /api/analysis/{id}/report.docx": "Export a Word report",
            "GET /api/info": "This endpoint",
        },
        "documentation": "/docs",
        "openapi": "/openapi.json",
    }
