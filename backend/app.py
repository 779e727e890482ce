"""
VeganLens FastAPI application.

Endpoints:
    GET  /               Health check
    POST /analyze        Ingredient list (+ optional per-ingredient hints) -> product verdict
    POST /analyze/text   Raw label text -> split -> product verdict
"""
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional
import logging
from dotenv import load_dotenv
from pathlib import Path

# Load env vars
load_dotenv(Path(__file__).parent / ".env")

from veganlens.config import LOG_LEVEL, log_config
from veganlens.evaluation.verdict_engine import VerdictEngine
from veganlens.reference import ReferenceDataError, get_reference_data

# Logger
logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

# Initialize App
app = FastAPI(title="VeganLens Ingredient Verdict API")
log_config()

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Reference data is mandatory: a missing or malformed file stops the service at startup.
try:
    engine = VerdictEngine(get_reference_data())
except ReferenceDataError as e:
    logger.critical("REFERENCE_DATA startup failed: %s", e)
    raise


# --- Request/Response Models ---
class AnalyzeRequest(BaseModel):
    ingredients: List[str]
    hints: Optional[Dict[str, Any]] = None
    language: Optional[Literal["en", "sv"]] = None


class AnalyzeTextRequest(BaseModel):
    text: str = Field(..., max_length=20000)
    hints: Optional[Dict[str, Any]] = None
    language: Optional[Literal["en", "sv"]] = None


class IngredientResult(BaseModel):
    name: str
    status: str
    is_vegan: Optional[bool]
    is_uncertain: bool
    confidence: float
    match_reason: str
    matched_token: Optional[str] = None
    similarity: float
    source: str


class VerdictResult(BaseModel):
    status: str
    is_vegan: Optional[bool]
    is_uncertain: bool
    confidence: float
    non_vegan_ingredients: List[str]
    uncertain_ingredients: List[str]
    reasoning: str
    ingredients: List[IngredientResult]
    flags: List[str]


# --- Endpoints ---

@app.get("/")
def health_check():
    return {
        "status": "ok",
        "service": "VeganLens",
        "reference_version": engine.reference.version,
    }


@app.post("/analyze", response_model=VerdictResult)
def analyze(request: AnalyzeRequest):
    """Ingredient list -> classify -> dedupe -> aggregate."""
    logger.info("Analyze request count=%d hints=%d", len(request.ingredients), len(request.hints or {}))
    try:
        verdict = engine.analyze(request.ingredients, hints=request.hints, language=request.language)
        return verdict.to_dict()
    except Exception as e:
        logger.error("Analyze failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/analyze/text", response_model=VerdictResult)
def analyze_text(request: AnalyzeTextRequest):
    """Label text -> split into ingredients -> same pipeline as /analyze."""
    logger.info("Analyze text request chars=%d", len(request.text))
    try:
        verdict = engine.analyze_text(request.text, hints=request.hints, language=request.language)
        return verdict.to_dict()
    except Exception as e:
        logger.error("Analyze text failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
