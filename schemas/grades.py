from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from schemas.common import reject_null

# ✅ 입력용: created_at은 서버에서 기록
class GradeCreate(BaseModel):
    student_id: int                                  # 학생 ID
    subject_id: int                                  # 과목 ID
    grade: float = Field(..., ge=0, le=100)          # 점수 (0~100, 숫자만 허용)
    semester: str                                    # 학기

class GradeUpdate(BaseModel):
    id: int
    student_id: Optional[int] = None
    subject_id: Optional[int] = None
    grade: Optional[float] = Field(default=None, ge=0, le=100)
    semester: Optional[str] = None

    @field_validator("student_id", "subject_id", "grade", "semester", mode="before")
    @classmethod
    def _reject_null(cls, v):
        return reject_null(v)

# ✅ 삭제는 (학생, 과목) 복합 키 기준
class GradeDelete(BaseModel):
    student_id: int
    subject_id: int

class Grade(BaseModel):
    id: int                                  # 성적 고유 ID
    student_id: int                          # 학생 ID
    subject_id: int                          # 과목 ID
    grade: float                             # 점수
    semester: str                            # 학기
    created_at: str                          # 생성 시각
    subject_name: Optional[str] = None       # 과목 이름 (조회 시 조인)
    subject_code: Optional[str] = None       # 과목 코드 (조회 시 조인)

    model_config = ConfigDict(from_attributes=True)
