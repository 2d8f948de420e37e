from sqlalchemy import create_engine, event        # SQLAlchemy 엔진 생성 도구
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker            # 세션 팩토리 함수

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기


def make_engine(url: str) -> Engine:
    """SQLite 엔진 생성 (스레드풀에서 세션을 열 수 있도록 same-thread 검사 해제)"""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


# ✅ SQLite는 연결마다 외래키 검사를 켜야 참조 무결성이 보장됨
@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = make_engine(settings.DATABASE_URL)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


def init_db(bind: Engine = engine) -> None:
    """모델 테이블 생성 (이미 있으면 건너뜀)"""
    # 모델 모듈을 import 해야 Base.metadata에 테이블이 등록됨
    from models import students, subjects, grades  # noqa: F401

    Base.metadata.create_all(bind=bind)
