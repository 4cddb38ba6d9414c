from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import StreamingResponse

from config.settings import settings
from dependencies.services import get_grade_ledger, get_transcript_assembler
from schemas.common import AcademicYear, ErrorResponse
from schemas.grades import Grade, GradeCreate, GradeUpdate
from services.grade_ledger import GradeLedger
from services.transcript import TranscriptAssembler
from utils.responses import attachment_disposition, error_response

router = APIRouter(
    prefix="/grades",
    tags=["grades"],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 성적 추가 (학생/과목 존재 확인 → 중복이면 409)
@router.post("/", response_model=Grade, status_code=201, responses={409: {"model": ErrorResponse}})
def create_grade(grade: GradeCreate, ledger: GradeLedger = Depends(get_grade_ledger)):
    result = ledger.create(
        student_id=grade.student_id,
        course_id=grade.course_id,
        score=grade.score,
        semester=grade.semester,
        academic_year=grade.academic_year,
    )
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [READ] 전체 성적 조회
@router.get("/", response_model=List[Grade])
def read_grades(ledger: GradeLedger = Depends(get_grade_ledger)):
    result = ledger.get_all()
    if not result.ok:
        return error_response(result.error)
    return result.value


# ==========================================================
# [2단계] 학생 단위 조회
# ==========================================================

# ✅ [READ] 특정 학생의 성적 목록 (없는 학생이면 빈 목록)
@router.get("/student/{student_id}", response_model=List[Grade])
def read_student_grades(student_id: int, ledger: GradeLedger = Depends(get_grade_ledger)):
    result = ledger.get_by_student(student_id)
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [PDF] 성적증명서 — 검증/렌더링이 끝난 뒤에만 스트리밍 시작
@router.get(
    "/student/{student_id}/transcript",
    responses={200: {"content": {"application/pdf": {}}}},
)
def generate_transcript(
    student_id: int,
    academic_year: Optional[AcademicYear] = Query(None, alias="academicYear"),
    assembler: TranscriptAssembler = Depends(get_transcript_assembler),
):
    result = assembler.generate(student_id, academic_year)
    if not result.ok:
        return error_response(result.error)

    document = result.value
    return StreamingResponse(
        document.iter_chunks(settings.TRANSCRIPT_CHUNK_SIZE),
        media_type=document.media_type,
        headers={"Content-Disposition": attachment_disposition(document.filename)},
    )


# ==========================================================
# [3단계] 완전 동적 라우터
# ==========================================================

# ✅ [UPDATE] 점수/학기/학년도 수정
@router.put("/{grade_id}", response_model=Grade, responses={409: {"model": ErrorResponse}})
def update_grade(grade_id: int, updated: GradeUpdate, ledger: GradeLedger = Depends(get_grade_ledger)):
    result = ledger.update(grade_id, updated.model_dump(exclude_unset=True))
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [DELETE] 성적 삭제
@router.delete("/{grade_id}", status_code=204)
def delete_grade(grade_id: int, ledger: GradeLedger = Depends(get_grade_ledger)):
    result = ledger.delete(grade_id)
    if not result.ok:
        return error_response(result.error)
    return Response(status_code=204)
