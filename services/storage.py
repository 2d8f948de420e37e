"""
services/storage.py

학생/과목/성적 세 컬렉션에 대한 타입 있는 읽기/쓰기 게이트웨이.
- 세션 팩토리를 생성자에서 주입받음 (전역 세션 사용 금지)
- 조회 결과는 세션과 분리된 pydantic 모델로 반환
- SQLAlchemy 예외는 롤백 후 StorageError로 변환
"""

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from models.grades import Grade as GradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from schemas.grades import Grade as GradeSchema
from schemas.students import Student as StudentSchema
from schemas.subjects import Subject as SubjectSchema
from services.errors import RecordNotFoundError, StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """리포트 1회 계산에 쓰이는 세 컬렉션의 시점 조회 결과"""
    students: List[StudentSchema]
    subjects: List[SubjectSchema]
    grades: List[GradeSchema]


class RecordStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self, failure_message: str):
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception(failure_message)
            raise StorageError(failure_message)
        finally:
            session.close()

    # ===============================================================
    # 공통 CRUD 헬퍼
    # ===============================================================

    def _create(self, model, data: Dict[str, Any], label: str) -> int:
        with self._session(f"Failed to create {label}") as db:
            record = model(**data)
            db.add(record)
            db.flush()
            return record.id

    def _update(self, model, record_id: int, changes: Dict[str, Any], label: str) -> None:
        with self._session(f"Failed to update {label}") as db:
            record = db.get(model, record_id)
            if record is None:
                raise RecordNotFoundError(f"{label.capitalize()} {record_id} not found")
            for key, value in changes.items():
                setattr(record, key, value)

    def _delete(self, model, record_id: int, label: str) -> None:
        with self._session(f"Failed to delete {label}") as db:
            record = db.get(model, record_id)
            if record is None:
                raise RecordNotFoundError(f"{label.capitalize()} {record_id} not found")
            db.delete(record)

    # ===============================================================
    # 학생
    # ===============================================================

    def list_students(self) -> List[StudentSchema]:
        with self._session("Failed to fetch students") as db:
            records = db.query(StudentModel).order_by(StudentModel.id).all()
            return [StudentSchema.model_validate(r) for r in records]

    def create_student(self, data: Dict[str, Any]) -> int:
        return self._create(StudentModel, data, "student")

    def update_student(self, student_id: int, changes: Dict[str, Any]) -> None:
        self._update(StudentModel, student_id, changes, "student")

    def delete_student(self, student_id: int) -> None:
        self._delete(StudentModel, student_id, "student")

    # ===============================================================
    # 과목
    # ===============================================================

    def list_subjects(self) -> List[SubjectSchema]:
        with self._session("Failed to fetch subjects") as db:
            records = db.query(SubjectModel).order_by(SubjectModel.id).all()
            return [SubjectSchema.model_validate(r) for r in records]

    def create_subject(self, data: Dict[str, Any]) -> int:
        return self._create(SubjectModel, data, "subject")

    def update_subject(self, subject_id: int, changes: Dict[str, Any]) -> None:
        self._update(SubjectModel, subject_id, changes, "subject")

    def delete_subject(self, subject_id: int) -> None:
        self._delete(SubjectModel, subject_id, "subject")

    # ===============================================================
    # 성적
    # ===============================================================

    def list_grades(self, student_id: Optional[int] = None) -> List[GradeSchema]:
        with self._session("Failed to fetch grades") as db:
            query = (
                db.query(
                    GradeModel.id,
                    GradeModel.student_id,
                    GradeModel.subject_id,
                    GradeModel.grade,
                    GradeModel.semester,
                    GradeModel.created_at,
                    SubjectModel.name.label("subject_name"),
                    SubjectModel.code.label("subject_code"),
                )
                .outerjoin(SubjectModel, SubjectModel.id == GradeModel.subject_id)
                .order_by(GradeModel.id)
            )
            if student_id is not None:
                query = query.filter(GradeModel.student_id == student_id)
            return [GradeSchema.model_validate(r) for r in query.all()]

    def create_grade(self, data: Dict[str, Any]) -> int:
        data = {**data, "created_at": datetime.now(timezone.utc).isoformat()}
        return self._create(GradeModel, data, "grade")

    def update_grade(self, grade_id: int, changes: Dict[str, Any]) -> None:
        self._update(GradeModel, grade_id, changes, "grade")

    def delete_grades(self, student_id: int, subject_id: int) -> int:
        """(학생, 과목) 조합의 성적 행 전체 삭제, 삭제된 행 수 반환"""
        with self._session("Failed to delete grade") as db:
            deleted = (
                db.query(GradeModel)
                .filter(GradeModel.student_id == student_id, GradeModel.subject_id == subject_id)
                .delete(synchronize_session=False)
            )
        if deleted == 0:
            raise RecordNotFoundError(
                f"No grades found for student {student_id} in subject {subject_id}"
            )
        return deleted

    # ===============================================================
    # 리포트용 스냅샷
    # ===============================================================

    async def snapshot(self) -> Snapshot:
        """세 컬렉션을 각각의 세션에서 동시에 조회 (서로 간 트랜잭션 일관성은 보장하지 않음)"""
        students, subjects, grades = await asyncio.gather(
            run_in_threadpool(self.list_students),
            run_in_threadpool(self.list_subjects),
            run_in_threadpool(self.list_grades),
        )
        return Snapshot(students=students, subjects=subjects, grades=grades)
