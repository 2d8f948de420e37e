"""
리포트 라우터
- type: summary | enrollment | performance → 고정 레이아웃 리포트
- type 없음 또는 custom → question을 통계 컨텍스트와 함께 텍스트 생성 서버로 전달
- 그 외 type → "Invalid query type" (에러 아님)
"""

import logging

from fastapi import APIRouter, Depends

from dependencies.providers import get_inference_bridge, get_store
from middlewares.error_handler import error_response
from schemas.reports import ChartData, ChartDataset, SummaryCharts, SummaryRequest, SummaryResponse
from services.aggregation import aggregate
from services.llm.inference import InferenceBridge
from services.report_formatter import INVALID_TYPE_RESPONSE, REPORT_TYPES, format_report
from services.storage import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summary", tags=["리포트"])

CUSTOM_TYPE = "custom"

ENROLLMENT_COLOR = ("rgb(59, 130, 246)", "rgba(59, 130, 246, 0.5)")
PERFORMANCE_COLOR = ("rgb(16, 185, 129)", "rgba(16, 185, 129, 0.5)")


async def _aggregate(store: RecordStore, report_type):
    snapshot = await store.snapshot()
    return aggregate(snapshot.students, snapshot.grades, snapshot.subjects, report_type)


# ==========================================================
# [리포트 생성 / 자유 질문]
# ==========================================================
@router.post("", response_model=SummaryResponse)
async def create_summary(
    req: SummaryRequest,
    store: RecordStore = Depends(get_store),
    bridge: InferenceBridge = Depends(get_inference_bridge),
):
    report_type = req.type or CUSTOM_TYPE

    if report_type in REPORT_TYPES:
        result = await _aggregate(store, report_type)
        return {"response": format_report(report_type, result)}

    if report_type != CUSTOM_TYPE:
        logger.info("Unknown report type requested: %r", report_type)
        return {"response": INVALID_TYPE_RESPONSE}

    if not req.question or not req.question.strip():
        return error_response(422, "A question is required for custom reports")

    result = await _aggregate(store, CUSTOM_TYPE)
    answer = await bridge.ask_custom_question(req.question, result)
    return {"response": answer}


# ✅ [AI 인사이트] 입학 추세/GPA 분포/인기 전공 분석
@router.get("", response_model=SummaryResponse)
async def get_insights(
    store: RecordStore = Depends(get_store),
    bridge: InferenceBridge = Depends(get_inference_bridge),
):
    result = await _aggregate(store, CUSTOM_TYPE)
    return {"response": await bridge.generate_insights(result)}


# ✅ [차트] 연도별 입학생 수, 전공별 평균 GPA
@router.get("/charts", response_model=SummaryCharts)
async def get_charts(store: RecordStore = Depends(get_store)):
    result = await _aggregate(store, "enrollment")
    enrollment = ChartData(
        labels=[str(year) for year in result.enrollment_by_year],
        datasets=[ChartDataset(
            label="Students Enrolled",
            data=[bucket.total for bucket in result.enrollment_by_year.values()],
            borderColor=ENROLLMENT_COLOR[0],
            backgroundColor=ENROLLMENT_COLOR[1],
        )],
    )
    performance = ChartData(
        labels=list(result.major_stats),
        datasets=[ChartDataset(
            label="Average GPA",
            data=[st.average_gpa for st in result.major_stats.values()],
            borderColor=PERFORMANCE_COLOR[0],
            backgroundColor=PERFORMANCE_COLOR[1],
        )],
    )
    return SummaryCharts(enrollment=enrollment, performance=performance)
