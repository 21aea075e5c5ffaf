"""
Label scanner FastAPI application.

Endpoints:
    GET  /                        Health check (readiness + reference data version)
    POST /classify                Ingredient text -> classified ingredients + safety summary
    POST /summary                 Classified ingredient tree -> safety summary
    POST /ocr/classify            Raw OCR text -> ingredient section -> classification
    GET  /product/{upc}           UPC lookup -> classification
    POST /reference-data/reload   Rebuild reference data from disk and swap it in
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Dict, List
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load env vars
load_dotenv(Path(__file__).parent / ".env")

# Initialize App
app = FastAPI(title="Label Scanner Ingredient Safety API")

from label_core.config import log_config
log_config()

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from label_core.evaluation.aggregator import summarize_ingredients
from label_core.external_apis.upc import validate_upc
from label_core.models.ingredient import ProductIngredient
from label_core.models.status import SourceProvenance
from label_core.ocr_text import extract_ingredients_section
from label_core.pipeline import IngredientPipeline, coerce_provenance
from label_core.product_service import process_product_by_upc
from label_core.reference.errors import ReferenceDataError, ReferenceDataNotLoadedError

pipeline = IngredientPipeline()


# --- Startup ---
@app.on_event("startup")
async def _load_reference_data():
    """Reference data must be loaded before any classification; failures leave the API in 503 mode."""
    try:
        pipeline.load()
    except ReferenceDataError as exc:
        logger.error("STARTUP reference data load failed: %s", exc)


# --- Request/Response Models ---
class ClassifyRequest(BaseModel):
    ingredients_text: str
    source_provenance: str = "manual"


class OcrClassifyRequest(BaseModel):
    ocr_text: str


class SummaryRequest(BaseModel):
    ingredients: List[Dict]


def _provenance_or_400(value: str) -> SourceProvenance:
    try:
        return coerce_provenance(value)
    except ValueError:
        allowed = ", ".join(p.value for p in SourceProvenance)
        raise HTTPException(status_code=400, detail=f"Invalid source_provenance '{value}'; expected one of: {allowed}")


def _analysis_response(text: str, provenance: SourceProvenance) -> Dict:
    try:
        ingredients, summary = pipeline.analyze(text, provenance)
    except ReferenceDataNotLoadedError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return {
        "ingredients": [i.to_dict() for i in ingredients],
        "summary": summary.to_dict(),
    }


# --- Endpoints ---
@app.get("/")
def health():
    ready = pipeline.is_ready
    return {
        "status": "ok" if ready else "not_ready",
        "reference_data_version": pipeline.reference_data.version if ready else None,
    }


@app.post("/classify")
def classify(request: ClassifyRequest):
    provenance = _provenance_or_400(request.source_provenance)
    return _analysis_response(request.ingredients_text, provenance)


@app.post("/ocr/classify")
def classify_ocr(request: OcrClassifyRequest):
    section = extract_ingredients_section(request.ocr_text)
    response = _analysis_response(section, SourceProvenance.OCR)
    response["ingredients_text"] = section
    return response


@app.post("/summary")
def summary(request: SummaryRequest):
    try:
        ingredients = [ProductIngredient.from_dict(d) for d in request.ingredients]
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Invalid ingredient payload: {exc}")
    return summarize_ingredients(ingredients).to_dict()


@app.get("/product/{upc}")
def product(upc: str, demo: bool = False):
    valid, message = validate_upc(upc)
    if not valid:
        raise HTTPException(status_code=400, detail=message)
    try:
        result = process_product_by_upc(pipeline, upc, use_demo_on_fail=demo)
    except ReferenceDataNotLoadedError as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    if result.not_found:
        raise HTTPException(status_code=404, detail=result.error)
    return result.to_dict()


@app.post("/reference-data/reload")
def reload_reference_data():
    try:
        data = pipeline.reload()
    except ReferenceDataError as exc:
        logger.error("RELOAD reference data failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return {
        "version": data.version,
        "ingredients": len(data.ingredients),
        "masking_terms": len(data.masking_terms),
        "rules": len(data.rules),
        "profiles": data.profiles,
        "warnings": list(data.load_warnings),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True)
