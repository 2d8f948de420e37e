from pydantic import BaseModel, Field
from typing import List, Optional

# ==========================================================
# [입력용 스키마]
# ==========================================================
class SummaryRequest(BaseModel):
    # type은 자유 문자열: 알 수 없는 값은 422가 아니라 "Invalid query type" 응답으로 처리
    question: Optional[str] = Field(None, description="자유 질문 (custom 리포트에서 사용)")
    type: Optional[str] = Field(None, description="summary | enrollment | performance | custom")


# ==========================================================
# [출력용 스키마]
# ==========================================================
class SummaryResponse(BaseModel):
    response: str                       # 마크다운 형식 리포트 또는 정제된 AI 답변


class ChartDataset(BaseModel):
    label: str
    data: List[float]
    borderColor: str
    backgroundColor: str


class ChartData(BaseModel):
    labels: List[str]
    datasets: List[ChartDataset]


class SummaryCharts(BaseModel):
    enrollment: ChartData               # 연도별 입학생 수
    performance: ChartData              # 전공별 평균 GPA
