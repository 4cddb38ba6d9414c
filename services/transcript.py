"""
services/transcript.py

성적증명서(PDF) 생성
1. 학생 조회 → 없으면 NotFound("student")
2. 학생 성적 조회(학년도 필터) → 없으면 NotFound
3~5. 학기별 그룹/소계(stats.summarize_semesters 재사용) → HTML → PDF
6. 라우터가 TranscriptDocument.iter_chunks() 로 조각 단위 스트리밍

1~2 단계 검증과 렌더링이 모두 끝난 뒤에만 문서를 돌려주므로,
렌더링 실패(Internal)는 200 응답이 시작되기 전에 드러난다.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

from schemas.transcript import (
    Transcript, TranscriptLine, TranscriptSemester, TranscriptStudent, TranscriptSummary,
)
from services.pdf_service import PDFService
from services.result import Err, Internal, NotFound, Ok, Result
from services.stats import semester_sort_key, summarize_semesters
from services.store import EntityStore

logger = logging.getLogger(__name__)

NO_GRADES_MESSAGE = "No grades found for this student"


@dataclass(frozen=True)
class TranscriptDocument:
    filename: str
    content: bytes
    media_type: str = "application/pdf"

    def iter_chunks(self, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        """
        이미 완성된 PDF 를 chunk_size 단위로 나눠 내보낸다.
        렌더링 중에 흘려보내는 것이 아니라 완성본을 조각 단위로 전달하는 것.
        """
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]


class TranscriptAssembler:
    def __init__(
        self,
        store: EntityStore,
        pdf_service: PDFService,
        pass_threshold: float,
        decimals: int = 2,
        institution: str = "Academic Records Office",
    ):
        self.store = store
        self.pdf_service = pdf_service
        self.pass_threshold = pass_threshold
        self.decimals = decimals
        self.institution = institution

    def build(self, student, rows, academic_year: Optional[str]) -> Transcript:
        """(성적, 과목) 목록 → 템플릿 입력 데이터"""
        subtotals = {
            (s.academic_year, s.semester): s
            for s in summarize_semesters(rows, self.pass_threshold, self.decimals)
        }

        lines = {}
        for grade, course in rows:
            lines.setdefault((grade.academic_year, grade.semester), []).append(
                TranscriptLine(
                    course_code=course.code,
                    course_name=course.name,
                    credits=course.credits,
                    score=grade.score,
                    passed=grade.score >= self.pass_threshold,
                )
            )

        semesters = [
            TranscriptSemester(
                academic_year=key[0],
                semester=key[1],
                lines=lines[key],
                subtotal=subtotals[key],
            )
            for key in sorted(lines, key=lambda k: semester_sort_key(*k))
        ]

        scores = [grade.score for grade, _ in rows]
        summary = TranscriptSummary(
            overall_average=round(sum(scores) / len(scores), self.decimals),
            total_credits=sum(s.subtotal.total_credits for s in semesters),
            validated_credits=sum(s.subtotal.validated_credits for s in semesters),
            courses_count=len(scores),
        )

        return Transcript(
            institution=self.institution,
            student=TranscriptStudent(
                student_number=student.student_number,
                first_name=student.first_name,
                last_name=student.last_name,
                email=student.email,
                date_of_birth=student.date_of_birth,
            ),
            academic_year=academic_year,
            semesters=semesters,
            summary=summary,
            pass_threshold=self.pass_threshold,
            generated_at=datetime.now(timezone.utc),
        )

    def generate(self, student_id: int, academic_year: Optional[str] = None) -> Result:
        # ==========================================================
        # [검증] 학생 / 성적 존재 확인
        # ==========================================================
        try:
            student = self.store.get_student(student_id)
            if student is None:
                return Err(NotFound("student"))
            rows = self.store.student_course_grades(student_id, academic_year)
        except SQLAlchemyError as e:
            logger.exception("transcript lookup failed: student_id=%s", student_id)
            return Err(Internal("Error while generating the transcript", e))

        if not rows:
            logger.info("no grades for transcript: student_id=%s academic_year=%s", student_id, academic_year)
            return Err(NotFound("grades", NO_GRADES_MESSAGE))

        # ==========================================================
        # [렌더링] 실패 시 Internal (아직 응답 바이트는 나가지 않은 상태)
        # ==========================================================
        try:
            transcript = self.build(student, rows, academic_year)
            content = self.pdf_service.generate_transcript_pdf(transcript)
        except Exception as e:
            logger.exception("transcript rendering failed: student_id=%s", student_id)
            return Err(Internal("Error while generating the transcript", e))

        suffix = f"_{academic_year}" if academic_year else ""
        filename = f"transcript_{student.student_number}{suffix}.pdf"
        logger.info("transcript generated: student_id=%s bytes=%s", student_id, len(content))
        return Ok(TranscriptDocument(filename=filename, content=content))
