from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional

from schemas.common import reject_null

# ✅ 입력용: POST 요청에서 사용할 스키마
class SubjectCreate(BaseModel):
    name: str                                # 과목 이름
    code: str                                # 과목 코드
    description: Optional[str] = None        # 과목 설명

# ✅ 부분 수정용: PUT 요청
class SubjectUpdate(BaseModel):
    id: int
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None       # 설명만 null 허용

    @field_validator("name", "code", mode="before")
    @classmethod
    def _reject_null(cls, v):
        return reject_null(v)

class SubjectDelete(BaseModel):
    id: int

# ✅ 출력용: GET 응답에서 사용할 스키마
class Subject(SubjectCreate):
    id: int                                  # 고유 과목 ID

    model_config = ConfigDict(from_attributes=True)
