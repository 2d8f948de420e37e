import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

# ✅ 응답 시간 측정: X-Latency-Ms 헤더 + 느린 요청(리포트/추론 호출 등) 경고 로그
class TimingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, slow_ms: int = 5000):
        super().__init__(app)
        self.slow_ms = slow_ms

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)

        level = logging.WARNING if latency_ms >= self.slow_ms else logging.DEBUG
        logger.log(level, "%s %s → %s (%d ms)",
                   request.method, request.url.path, response.status_code, latency_ms)
        return response
