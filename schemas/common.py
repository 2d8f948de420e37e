"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) 에러 응답 표준: ErrorResponse
  2) 목록/쓰기 응답 래퍼: DataEnvelope[T], SuccessResponse
  3) 부분 수정 검증: reject_null
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) 에러 응답 표준
# =========================================================

class ErrorResponse(BaseModel):
    """
    전역 에러 핸들러에서 내려주는 표준 에러 응답
    - middlewares/error_handler.py에서 이 스키마로 직렬화
    """
    error: str = Field(..., description="사람이 읽을 수 있는 에러 메시지")
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시각 (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) 성공 응답 래퍼
# =========================================================

T = TypeVar("T")

class DataEnvelope(BaseModel, Generic[T]):
    """조회 응답: {"data": [...]}"""
    data: List[T]


class SuccessResponse(BaseModel):
    """쓰기 응답: {"success": true}"""
    success: bool = True


# =========================================================
# 3) 부분 수정용 검증
# =========================================================

def reject_null(value):
    """
    PUT 본문에서 필드를 생략하는 것은 허용하지만 명시적 null은 거부
    - NOT NULL 컬럼에 None이 기록되어 500이 나는 것을 422로 막음
    """
    if value is None:
        raise ValueError("field may be omitted but not null")
    return value
