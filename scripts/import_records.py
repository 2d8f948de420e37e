"""
CSV → DB 초기 데이터 적재 스크립트

사용법: python -m scripts.import_records [data_dir]
- data_dir/students.csv, subjects.csv, grades.csv 순서로 적재 (외래키 순서)
- 각 행은 API와 같은 pydantic 스키마로 검증 후 RecordStore를 통해 저장
"""

import csv
import logging
import sys
from pathlib import Path

from database.db import SessionLocal, init_db
from schemas.grades import GradeCreate
from schemas.students import StudentCreate
from schemas.subjects import SubjectCreate
from services.storage import RecordStore

logger = logging.getLogger(__name__)

# (파일명, 검증 스키마, 저장 메서드 이름): 외래키 때문에 순서 유지
IMPORT_PLAN = (
    ("students.csv", StudentCreate, "create_student"),
    ("subjects.csv", SubjectCreate, "create_subject"),
    ("grades.csv", GradeCreate, "create_grade"),
)


def import_csv(store: RecordStore, csv_path: Path, schema, method_name: str) -> int:
    create = getattr(store, method_name)
    count = 0
    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        for row in csv.DictReader(csvfile):
            # 빈 칸은 미입력(None)으로 처리
            record = schema.model_validate({k: (v if v != "" else None) for k, v in row.items()})
            create(record.model_dump())
            count += 1
    return count


def import_all(store: RecordStore, data_dir: Path) -> dict:
    counts = {}
    for filename, schema, method_name in IMPORT_PLAN:
        path = data_dir / filename
        if not path.exists():
            logger.warning("CSV 파일 없음, 건너뜀: %s", path)
            continue
        counts[filename] = import_csv(store, path, schema, method_name)
        logger.info("%s: %d rows imported", filename, counts[filename])
    return counts


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("data")
    counts = import_all(RecordStore(SessionLocal), data_dir)
    print(f"✅ CSV → DB 적재 완료: {counts}")
