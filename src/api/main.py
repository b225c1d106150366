"""
WorkSpec - FastAPI Backend API

This API exposes the work specification engine: work type catalogs,
dispatch-order descriptions, equipment recommendations, quick-entry
calculators and work-order finalization. Every endpoint is stateless; the
caller sends the full input and gets the computed result back.
"""

import os
import sys
import logging
from typing import Any, Dict, List, Optional
from datetime import datetime

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from workspec import (
    CATALOGS,
    WORK_CATEGORIES,
    NotAListField,
    QuickEntryKind,
    UnknownField,
    UnknownWorkType,
    ValidationError,
    WorkOrder,
    compose_description,
    filter_work_items,
    format_work_summary,
    get_field_specs,
    new_batch,
    recommend,
)

load_dotenv()

LOG_LEVEL = os.getenv("WORKSPEC_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("WORKSPEC_CORS_ORIGINS", "*").split(",") if origin.strip()]
HOST = os.getenv("WORKSPEC_HOST", "0.0.0.0")
PORT = int(os.getenv("WORKSPEC_PORT", "8000"))

VERSION = "1.0.0"

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="WorkSpec API",
    description="Structured work specification and quantity aggregation for concrete cutting",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Pydantic Models
# ============================================================================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str


class FieldSpecResponse(BaseModel):
    name: str
    label: str
    input_kind: str
    options: List[str] = []
    condition_field: Optional[str] = None
    condition_value: Optional[str] = None
    list_kind: Optional[str] = None
    placeholder: Optional[str] = None


class WorkTypesResponse(BaseModel):
    catalog: str
    work_types: List[str]


class WorkItemsResponse(BaseModel):
    category: str
    categories: List[str]
    items: List[str]


class DescribeRequest(BaseModel):
    selected_work_types: List[str]
    details: Dict[str, Dict[str, Any]] = {}


class DescribeResponse(BaseModel):
    description: str


class RecommendResponse(BaseModel):
    equipment: List[str]


class QuickEntryRequest(BaseModel):
    entries: List[Dict[str, Any]]
    removal_method: Optional[str] = Field(None, description="Break & remove: hand_removal or rigged")
    removal_equipment: Optional[str] = Field(None, description="Break & remove: lull, forklift or skidsteer")
    equipment: Optional[str] = Field(None, description="Jack hammering: hilti_1000, hilti_3000 or other")
    equipment_other: Optional[str] = None


class WorkItemInput(BaseModel):
    name: str
    quantity: float = 1
    notes: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class WorkOrderRequest(BaseModel):
    items: List[WorkItemInput]


class WorkOrderResponse(BaseModel):
    items: List[Dict[str, Any]]
    summary: str


# ============================================================================
# Error mapping
# ============================================================================

def to_http_error(e: Exception) -> HTTPException:
    """Map an engine error to the HTTP status the client should see."""
    if isinstance(e, UnknownWorkType):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=422, detail=e.reason)
    if isinstance(e, (UnknownField, NotAListField, TypeError, ValueError)):
        return HTTPException(status_code=400, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


def _catalog(name: str):
    if name not in CATALOGS:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown catalog '{name}'. Allowed: {', '.join(CATALOGS)}"
        )
    return CATALOGS[name]


# ============================================================================
# API Endpoints
# ============================================================================

@app.get("/", response_model=HealthResponse)
async def root():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        version=VERSION
    )


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        version=VERSION
    )


@app.get("/api/v1/catalogs/{catalog}/work-types", response_model=WorkTypesResponse)
async def list_work_types(catalog: str):
    """Work type ids registered in a catalog, in catalog order."""
    registry = _catalog(catalog)
    return WorkTypesResponse(catalog=registry.name, work_types=[work_type.value for work_type in registry])


@app.get("/api/v1/catalogs/{catalog}/work-types/{work_type}/fields", response_model=List[FieldSpecResponse])
async def list_fields(catalog: str, work_type: str):
    """Ordered input fields a work type collects in the given catalog."""
    registry = _catalog(catalog)
    try:
        return [FieldSpecResponse(**spec.to_dict()) for spec in get_field_specs(work_type, registry)]
    except UnknownWorkType as e:
        raise to_http_error(e)


@app.get("/api/v1/work-performed/items", response_model=WorkItemsResponse)
async def list_work_items(
    category: str = Query("All", description="All, Popular or a category name"),
    search: str = Query("", description="Case-insensitive substring of the item name"),
):
    """Work-performed items for a category tab, narrowed by search."""
    if category not in ("All", "Popular") and category not in WORK_CATEGORIES:
        raise HTTPException(status_code=404, detail=f"Unknown category '{category}'")
    items = filter_work_items(category, search)
    return WorkItemsResponse(
        category=category,
        categories=["All", "Popular", *WORK_CATEGORIES],
        items=[item.value for item in items],
    )


@app.post("/api/v1/describe", response_model=DescribeResponse)
async def describe(request: DescribeRequest):
    """
    Compose the scope-of-work description for a dispatch order.

    Accepts: Selected dispatch work types in selection order, plus the field
    values entered for each
    Returns: The description text
    """
    try:
        description = compose_description(request.selected_work_types, request.details)
    except (UnknownWorkType, UnknownField, NotAListField, ValidationError, TypeError) as e:
        raise to_http_error(e)
    return DescribeResponse(description=description)


@app.post("/api/v1/recommend", response_model=RecommendResponse)
async def recommend_equipment(request: DescribeRequest):
    """Suggested equipment for the selected work types and their details."""
    try:
        equipment = recommend(request.selected_work_types, request.details)
    except (UnknownWorkType, UnknownField, NotAListField, ValidationError, TypeError) as e:
        raise to_http_error(e)
    return RecommendResponse(equipment=equipment)


@app.post("/api/v1/quick-entry/{kind}", response_model=Dict[str, Any])
async def quick_entry(kind: str, request: QuickEntryRequest):
    """
    Fold a quick-entry batch into its canonical total.

    Linear batches (multi-cut, chainsaw) return linear feet and the deepest
    cut; area batches (break-and-remove, jackhammer, brokk) return square feet
    with the removal or equipment text as notes.
    """
    try:
        kind = QuickEntryKind(kind)
    except ValueError:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown quick entry '{kind}'. Allowed: {', '.join(k.value for k in QuickEntryKind)}"
        )

    options = request.model_dump(exclude={"entries"}, exclude_none=True)
    try:
        batch = new_batch(kind, **options)
        for entry in request.entries:
            batch.add(entry)
        total = batch.fold()
    except (ValidationError, TypeError) as e:
        raise to_http_error(e)

    return total.to_dict()


@app.post("/api/v1/work-order", response_model=WorkOrderResponse)
async def finalize_work_order(request: WorkOrderRequest):
    """
    Replay work item commits into a work order.

    Items are committed in order. A work type committed twice keeps only the
    second commit's quantity and details. Quantities for core drilling and
    sawing are recomputed from the details.
    """
    order = WorkOrder()
    try:
        for item in request.items:
            order.commit(item.name, details=item.details, quantity=item.quantity, notes=item.notes)
    except (UnknownWorkType, NotAListField, ValidationError, TypeError) as e:
        raise to_http_error(e)

    logger.info("Finalized work order with %d items", len(order))
    return WorkOrderResponse(items=order.to_dict()["items"], summary=format_work_summary(order))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
