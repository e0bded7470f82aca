from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from prosecheck.services.analyze import analyze_text
from prosecheck.services.export import export_analysis_report

router = APIRouter(tags=["analyze"])


class AnalyzeRequest(BaseModel):
    text: str


@router.post("/analyze")
def analyze(req: AnalyzeRequest):
    result = analyze_text(req.text)
    return result.model_dump(by_alias=True)


@router.post("/export", response_class=PlainTextResponse)
def export(req: AnalyzeRequest):
    result = analyze_text(req.text)
    report = export_analysis_report(result, req.text)
    return PlainTextResponse(report, media_type="text/markdown")
