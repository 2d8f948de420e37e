from typing import Optional

from fastapi import APIRouter, Depends

from dependencies.providers import get_store
from schemas.common import DataEnvelope, SuccessResponse
from schemas.grades import Grade, GradeCreate, GradeDelete, GradeUpdate
from services.storage import RecordStore

router = APIRouter(prefix="/grades", tags=["grades"])


# ✅ [READ] 성적 조회 (student_id가 있으면 해당 학생만), 과목 이름/코드 포함
@router.get("", response_model=DataEnvelope[Grade])
def read_grades(student_id: Optional[int] = None, store: RecordStore = Depends(get_store)):
    return {"data": store.list_grades(student_id=student_id)}


# ✅ [CREATE] 성적 추가 (created_at은 서버에서 기록)
@router.post("", response_model=SuccessResponse)
def create_grade(grade: GradeCreate, store: RecordStore = Depends(get_store)):
    store.create_grade(grade.model_dump())
    return {"success": True}


# ✅ [UPDATE] 성적 부분 수정
@router.put("", response_model=SuccessResponse)
def update_grade(updated: GradeUpdate, store: RecordStore = Depends(get_store)):
    store.update_grade(updated.id, updated.model_dump(exclude_unset=True, exclude={"id"}))
    return {"success": True}


# ✅ [DELETE] (학생, 과목) 조합의 성적 삭제
@router.delete("", response_model=SuccessResponse)
def delete_grade(payload: GradeDelete, store: RecordStore = Depends(get_store)):
    store.delete_grades(payload.student_id, payload.subject_id)
    return {"success": True}
