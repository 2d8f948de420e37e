from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from schemas.common import reject_null

# ✅ 입력용 (POST)
class StudentCreate(BaseModel):
    first_name: str                          # 이름
    last_name: str                           # 성
    email: str                               # 이메일
    major: str                               # 전공
    enrollment_date: str                     # 입학 시기 (예: "2023 Fall")
    gender: str                              # 성별 (Male / Female)
    age: int = Field(..., ge=0)              # 나이

# ✅ 부분 수정용 (PUT): id 외에는 보낸 필드만 반영
class StudentUpdate(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    major: Optional[str] = None
    enrollment_date: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)

    @field_validator(
        "first_name", "last_name", "email", "major", "enrollment_date", "gender", "age",
        mode="before",
    )
    @classmethod
    def _reject_null(cls, v):
        return reject_null(v)

# ✅ 삭제용 (DELETE)
class StudentDelete(BaseModel):
    id: int

# ✅ 전체 출력용 (GET)
class Student(StudentCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
