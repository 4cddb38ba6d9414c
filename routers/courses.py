from typing import List

from fastapi import APIRouter, Depends, Response

from dependencies.services import get_course_service
from schemas.common import ErrorResponse
from schemas.courses import Course, CourseCreate, CourseUpdate
from services.catalog import CourseService
from utils.responses import error_response

router = APIRouter(
    prefix="/courses",
    tags=["courses"],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


# ✅ [CREATE] 과목 추가 (코드 중복 → 409)
@router.post("/", response_model=Course, status_code=201, responses={409: {"model": ErrorResponse}})
def create_course(course: CourseCreate, service: CourseService = Depends(get_course_service)):
    result = service.create(course.model_dump())
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [READ] 전체 과목 조회
@router.get("/", response_model=List[Course])
def read_courses(service: CourseService = Depends(get_course_service)):
    result = service.get_all()
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [READ] 특정 과목 조회
@router.get("/{course_id}", response_model=Course)
def read_course(course_id: int, service: CourseService = Depends(get_course_service)):
    result = service.get_by_id(course_id)
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [UPDATE] 과목 정보 수정
@router.put("/{course_id}", response_model=Course, responses={409: {"model": ErrorResponse}})
def update_course(course_id: int, updated: CourseUpdate, service: CourseService = Depends(get_course_service)):
    result = service.update(course_id, updated.model_dump(exclude_unset=True))
    if not result.ok:
        return error_response(result.error)
    return result.value


# ✅ [DELETE] 과목 삭제
@router.delete("/{course_id}", status_code=204)
def delete_course(course_id: int, service: CourseService = Depends(get_course_service)):
    result = service.delete(course_id)
    if not result.ok:
        return error_response(result.error)
    return Response(status_code=204)
