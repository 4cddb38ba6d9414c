from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config.settings import settings
from services.catalog import CourseService, StudentService
from services.grade_ledger import GradeLedger
from services.pdf_service import PDFService
from services.stats import StatsAggregator
from services.store import EntityStore
from services.transcript import TranscriptAssembler


# ==========================================================
# [공통] DB 세션 관리 — 요청마다 하나, 어떤 경로로 끝나도 close
# ==========================================================
def get_db(request: Request):
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)


def get_pdf_service() -> PDFService:
    return PDFService(settings.TEMPLATE_DIR)


# ==========================================================
# [서비스] 라우터에서 Depends 로 주입
# ==========================================================
def get_student_service(store: EntityStore = Depends(get_store)) -> StudentService:
    return StudentService(store)


def get_course_service(store: EntityStore = Depends(get_store)) -> CourseService:
    return CourseService(store)


def get_grade_ledger(store: EntityStore = Depends(get_store)) -> GradeLedger:
    return GradeLedger(store)


def get_stats_aggregator(store: EntityStore = Depends(get_store)) -> StatsAggregator:
    return StatsAggregator(store, settings.PASS_THRESHOLD, settings.STATS_DECIMALS)


def get_transcript_assembler(
    store: EntityStore = Depends(get_store),
    pdf_service: PDFService = Depends(get_pdf_service),
) -> TranscriptAssembler:
    return TranscriptAssembler(
        store,
        pdf_service,
        settings.PASS_THRESHOLD,
        settings.STATS_DECIMALS,
        settings.TRANSCRIPT_INSTITUTION,
    )
