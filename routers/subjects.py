from fastapi import APIRouter, Depends

from dependencies.providers import get_store
from schemas.common import DataEnvelope, SuccessResponse
from schemas.subjects import Subject, SubjectCreate, SubjectDelete, SubjectUpdate
from services.storage import RecordStore

router = APIRouter(prefix="/subjects", tags=["과목 정보"])


# ✅ [READ] 전체 과목 조회
@router.get("", response_model=DataEnvelope[Subject])
def read_subjects(store: RecordStore = Depends(get_store)):
    return {"data": store.list_subjects()}


# ✅ [CREATE] 과목 정보 추가
@router.post("", response_model=SuccessResponse)
def create_subject(subject: SubjectCreate, store: RecordStore = Depends(get_store)):
    store.create_subject(subject.model_dump())
    return {"success": True}


# ✅ [UPDATE] 과목 정보 부분 수정
@router.put("", response_model=SuccessResponse)
def update_subject(updated: SubjectUpdate, store: RecordStore = Depends(get_store)):
    store.update_subject(updated.id, updated.model_dump(exclude_unset=True, exclude={"id"}))
    return {"success": True}


# ✅ [DELETE] 과목 삭제
@router.delete("", response_model=SuccessResponse)
def delete_subject(payload: SubjectDelete, store: RecordStore = Depends(get_store)):
    store.delete_subject(payload.id)
    return {"success": True}
