from fastapi import APIRouter, Depends

from dependencies.providers import get_store
from schemas.common import DataEnvelope, SuccessResponse
from schemas.students import Student, StudentCreate, StudentDelete, StudentUpdate
from services.storage import RecordStore

router = APIRouter(prefix="/students", tags=["학생 정보"])


# ==========================================================
# CRUD 기본 라우터
# ==========================================================

# ✅ [READ] 전체 학생 조회
@router.get("", response_model=DataEnvelope[Student])
def read_students(store: RecordStore = Depends(get_store)):
    return {"data": store.list_students()}


# ✅ [CREATE] 학생 정보 추가
@router.post("", response_model=SuccessResponse)
def create_student(student: StudentCreate, store: RecordStore = Depends(get_store)):
    store.create_student(student.model_dump())
    return {"success": True}


# ✅ [UPDATE] 학생 정보 부분 수정 (보낸 필드만 반영)
@router.put("", response_model=SuccessResponse)
def update_student(updated: StudentUpdate, store: RecordStore = Depends(get_store)):
    changes = updated.model_dump(exclude_unset=True, exclude={"id"})
    store.update_student(updated.id, changes)
    return {"success": True}


# ✅ [DELETE] 학생 삭제 (해당 학생의 성적도 함께 삭제됨)
@router.delete("", response_model=SuccessResponse)
def delete_student(payload: StudentDelete, store: RecordStore = Depends(get_store)):
    store.delete_student(payload.id)
    return {"success": True}
