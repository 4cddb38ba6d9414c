import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from database.db import Database
from dependencies.services import get_store
from services.store import EntityStore

# ✅ 로깅 설정 (LOG_LEVEL 환경변수)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
# 서드파티 디버그 로그 비활성화
logging.getLogger("fontTools").setLevel(logging.WARNING)
logging.getLogger("weasyprint").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware  # noqa: E402
from middlewares.error_handler import add_error_handlers  # noqa: E402

# ✅ 라우터 임포트
from routers import courses, grades, stats, students  # noqa: E402


# ✅ DB 엔진은 프로세스 시작 시 생성, 종료 시 해제
@asynccontextmanager
async def lifespan(app: FastAPI):
    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database(settings.DATABASE_URL, pool_pre_ping=True)
        logger.info("database engine created: %s", app.state.database.engine.url.render_as_string(hide_password=True))
    try:
        yield
    finally:
        if owns_database:
            app.state.database.dispose()
            app.state.database = None
            logger.info("database engine disposed")


app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# ✅ CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(students.router, prefix="/v1")
app.include_router(courses.router,  prefix="/v1")
app.include_router(grades.router,   prefix="/v1")
app.include_router(stats.router,    prefix="/v1")


# ✅ 헬스체크 엔드포인트 (DB 왕복 포함)
@app.get("/health")
def health_check(store: EntityStore = Depends(get_store)):
    try:
        store.execute("SELECT 1")
    except SQLAlchemyError:
        logger.exception("health check: database unreachable")
        return JSONResponse(status_code=503, content={"status": "degraded", "database": "unreachable"})
    return {"status": "ok", "database": "ok"}


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} {settings.APP_VERSION}"}
