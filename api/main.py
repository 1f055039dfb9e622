"""Stock Pulse Chat: FastAPI REST API."""
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, HTTPException, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from analysis.analyzer import StockAnalyzer
from analysis.query import extract_symbol
from common.errors import SymbolRequired
from common.logger import get_logger, new_request_id
from common.models import AnalysisResult

logger = get_logger("api")


class AnalyzeRequest(BaseModel):
    symbol: Optional[str] = None
    query: str = ""
    context: Optional[AnalysisResult] = None


analyzer = StockAnalyzer()

app = FastAPI(title="Stock Pulse Chat API", version="0.1.0")

app.add_middleware(CORSMiddleware,
    allow_origins=["*"], allow_methods=["GET", "POST", "OPTIONS"], allow_headers=["*"])

# ── API routes (on a shared router, mounted at both "/" and "/api") ───────────

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

@router.post("/analyze", response_model=AnalysisResult)
async def analyze(req: AnalyzeRequest):
    new_request_id()
    symbol = req.symbol or extract_symbol(req.query)
    if not symbol and req.context is not None:
        symbol = req.context.symbol
    try:
        return await analyzer.analyze(symbol or "", req.query, req.context)
    except SymbolRequired as e:
        raise HTTPException(400, e.message)
    except Exception as e:
        logger.error(f"Analysis failed for {symbol}: {e}")
        raise HTTPException(500, "Analysis failed")

app.include_router(router)
app.include_router(router, prefix="/api")
