# -*- coding: utf-8 -*-
"""
FastAPI API for the rich content service.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse

from . import __version__
from .aggregator import extract_record_assets
from .assets import extract_assets
from .config import settings
from .jinja_env import render_page
from .logging_config import setup_logging
from .middleware import RequestIDMiddleware
from .models import (
    AssetsResponse,
    ContentRequest,
    FieldsRequest,
    HealthResponse,
    NormalizeResponse,
    PreviewRequest,
    ProcessRequest,
    ProcessResponse,
    RenderBatchRequest,
    RenderResponse,
)
from .normalizer import normalize
from .pipeline import content_pipeline
from .renderer import render_to_html

setup_logging()
logger = logging.getLogger(__name__)


# noinspection PyUnusedLocal
@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifecycle management."""
    logger.info("Starting rich content service", extra={"version": __version__})
    yield
    logger.info("Shutting down rich content service")


app = FastAPI(
    title="Rich Content Service",
    description="Normalization, asset extraction and HTML rendering of rich-text documents",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DOCS_ENABLED else None,
    redoc_url="/redoc" if settings.DOCS_ENABLED else None,
    openapi_url="/openapi.json" if settings.DOCS_ENABLED else None,
)

# Middleware stack (order matters: last added = first executed)
app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)


def _render_response(html: str) -> RenderResponse:
    return RenderResponse(html=html, empty=not html)


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service health endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/normalize", response_model=NormalizeResponse)
async def normalize_content(request: ContentRequest) -> NormalizeResponse:
    """Return the canonical document for a stored value."""
    return NormalizeResponse(document=normalize(request.content))


@app.post("/assets", response_model=AssetsResponse)
async def content_assets(request: ContentRequest) -> AssetsResponse:
    """
    Extract unique images from one stored value.

    - **content**: node array, JSON string, doc wrapper or null
    """
    assets = extract_assets(normalize(request.content).content)
    return AssetsResponse(assets=assets, count=len(assets))


@app.post("/assets/fields", response_model=AssetsResponse)
async def fields_assets(request: FieldsRequest) -> AssetsResponse:
    """
    Extract unique images across several fields of one record.

    Fields are read in the order given; the first occurrence of an image wins.
    """
    assets = extract_record_assets(request.fields)
    logger.info(
        "Field assets extracted",
        extra={"field_count": len(request.fields), "asset_count": len(assets)},
    )
    return AssetsResponse(assets=assets, count=len(assets))


@app.post("/render", response_model=RenderResponse)
async def render_content(request: ContentRequest) -> RenderResponse:
    """Render one stored value to HTML."""
    return _render_response(render_to_html(request.content))


@app.post("/render/batch", response_model=list[RenderResponse])
async def render_batch(request: RenderBatchRequest) -> list[RenderResponse]:
    """
    Render several stored values.

    Returns one RenderResponse per item, in request order.
    """
    if len(request.items) > settings.MAX_BATCH_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"Batch too large ({len(request.items)} > {settings.MAX_BATCH_SIZE})",
        )

    logger.info("Batch render request", extra={"item_count": len(request.items)})
    return [_render_response(render_to_html(item)) for item in request.items]


@app.post("/render/preview", response_class=HTMLResponse)
async def render_preview(request: PreviewRequest) -> HTMLResponse:
    """Render stored content inside a standalone HTML page."""
    page = render_page(
        "preview.html.j2",
        title=request.title,
        content_html=render_to_html(request.content),
    )
    return HTMLResponse(content=page)


@app.post("/process", response_model=ProcessResponse)
async def process_content(request: ProcessRequest) -> ProcessResponse:
    """Run the full pipeline: normalize, extract assets, render HTML."""
    result = content_pipeline.process(
        request.content,
        extract=request.extract_assets,
        render=request.render_html,
    )
    return ProcessResponse(
        document=result.document,
        assets=result.assets,
        html=result.html,
        steps_applied=result.steps_applied,
        metadata=result.metadata,
    )
