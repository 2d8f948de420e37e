from database.db import SessionLocal
from services.llm.http_client import OllamaClient
from services.llm.inference import InferenceBridge
from services.storage import RecordStore


# ✅ 라우터에 주입되는 저장소 게이트웨이 (테스트에서는 dependency_overrides로 교체)
def get_store() -> RecordStore:
    return RecordStore(SessionLocal)


# ✅ 텍스트 생성 서버 브리지
def get_inference_bridge() -> InferenceBridge:
    return InferenceBridge(OllamaClient.from_settings())
