from typing import List

from fastapi import APIRouter, Depends, Response

from dependencies.services import get_student_service
from schemas.common import ErrorResponse
from schemas.students import Student, StudentCreate, StudentUpdate
from services.catalog import StudentService
from utils.responses import error_response

router = APIRouter(
    prefix="/students",
    tags=["students"],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 학생 등록
@router.post("/", response_model=Student, status_code=201, responses={409: {"model": ErrorResponse}})
def create_student(student: StudentCreate, service: StudentService = Depends(get_student_service)):
    result = service.create(student.model_dump())
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [READ] 전체 학생 조회
@router.get("/", response_model=List[Student])
def read_students(service: StudentService = Depends(get_student_service)):
    result = service.get_all()
    if not result.ok:
        return error_response(result.error)
    return result.value


# ==========================================================
# [2단계] 완전 동적 라우터 (개별 조회/수정/삭제)
# ==========================================================

# ✅ [READ] 특정 학생 상세 조회
@router.get("/{student_id}", response_model=Student)
def read_student(student_id: int, service: StudentService = Depends(get_student_service)):
    result = service.get_by_id(student_id)
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [UPDATE] 이름/이메일 수정
@router.put("/{student_id}", response_model=Student, responses={409: {"model": ErrorResponse}})
def update_student(student_id: int, updated: StudentUpdate, service: StudentService = Depends(get_student_service)):
    result = service.update(student_id, updated.model_dump(exclude_unset=True))
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [DELETE] 학생 삭제 (성적이 남아 있으면 409)
@router.delete("/{student_id}", status_code=204, responses={409: {"model": ErrorResponse}})
def delete_student(student_id: int, service: StudentService = Depends(get_student_service)):
    result = service.delete(student_id)
    if not result.ok:
        return error_response(result.error)
    return Response(status_code=204)
