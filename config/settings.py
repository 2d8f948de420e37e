"""
config/settings.py

- .env에 정의한 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- DB URL은 DB_PATH(SQLite 파일 경로)로부터 동적으로 구성하며,
  레거시 호환을 위해 DATABASE_URL, DB_URL 두 이름 모두 제공(@computed_field).
- 모든 값에 기본값이 있어 .env 없이도 서버가 기동됩니다.
"""

from typing import List, Literal
from pydantic import field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "Student Records API"
    APP_DESCRIPTION: str = "학생/과목/성적 관리 및 학업 성과 리포트 백엔드 API"
    APP_VERSION: str = "1.0.0"

    # =========================
    # CORS
    # =========================
    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            # "a,b , c" → ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Database (SQLite)
    # =========================
    DB_PATH: str = "students.db"

    @computed_field  # type: ignore[misc]
    @property
    def DATABASE_URL(self) -> str:
        """
        레거시 호환용 속성명. 내부적으로 DB_URL과 동일한 값을 반환.
        예: sqlite:///./students.db
        """
        return f"sqlite:///{self.DB_PATH}"

    @computed_field  # type: ignore[misc]
    @property
    def DB_URL(self) -> str:
        """
        권장 속성명. DATABASE_URL과 동일값.
        """
        return self.DATABASE_URL

    # =========================
    # LLM (Ollama 호환 텍스트 생성 서버)
    # =========================
    LLM_API_BASE_URL: str = "http://localhost:11434"
    LLM_MODEL: str = "deepseek-r1:1.5b"
    LLM_TIMEOUT: float = 60.0          # 응답 대기 상한(초), 무한 대기 방지
    LLM_TEMPERATURE: float = 0.6
    LLM_TOP_K: int = 40
    LLM_TOP_P: float = 0.9
    LLM_REPEAT_PENALTY: float = 1.1
    LLM_MAX_TOKENS: int = 1024         # Ollama options.num_predict

    # =========================
    # Logging / Misc
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    SLOW_REQUEST_MS: int = 5000        # 이 시간(ms)을 넘는 요청은 WARNING 로그

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
