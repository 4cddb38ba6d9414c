from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from services.pdf_service import PDFService
from services.result import Internal, NotFound
from services.stats import StatsAggregator
from services.transcript import NO_GRADES_MESSAGE, TranscriptAssembler, TranscriptDocument
from tests.factories import FAKE_PDF, make_course, make_grade

PASS = 50.0


@pytest.fixture
def assembler(store):
    return TranscriptAssembler(store, PDFService(), pass_threshold=PASS, decimals=2, institution="Test University")


@pytest.fixture
def graded_student(store, student):
    algo = make_course(store, code="CS201", name="Algorithms", credits=5)
    web = make_course(store, code="WEB110", name="Web <Basics>", credits=2)
    make_grade(store, student, algo, 72.5, "Fall", "2021-2022")
    make_grade(store, student, web, 35, "Fall", "2021-2022")
    make_grade(store, student, algo, 88, "Spring", "2022-2023")
    return student


def test_unknown_student_is_not_found(assembler, fake_pdf):
    result = assembler.generate(999)

    assert result.error == NotFound("student")
    assert fake_pdf == []


def test_no_grades_in_year_is_not_found_before_rendering(assembler, graded_student, fake_pdf):
    result = assembler.generate(graded_student.id, "2030-2031")

    assert result.error.status_code == 404
    assert result.error.message == NO_GRADES_MESSAGE
    assert fake_pdf == []


def test_generate_returns_pdf_document(assembler, graded_student):
    result = assembler.generate(graded_student.id, "2021-2022")

    assert result.ok
    document = result.value
    assert document.media_type == "application/pdf"
    assert document.filename == "transcript_12345_2021-2022.pdf"
    assert document.content == FAKE_PDF


def test_rendered_html_lists_semesters_and_summary(assembler, graded_student, fake_pdf):
    assembler.generate(graded_student.id)

    html = fake_pdf[0]
    assert "Test University" in html
    assert "John Doe" in html
    assert html.index("Fall 2021-2022") < html.index("Spring 2022-2023")
    assert "Web &lt;Basics&gt;" in html
    assert "Not validated" in html
    assert "Overall average: <strong>65.17</strong>" in html


def test_subtotals_match_student_semester_stats(assembler, store, graded_student):
    rows = store.student_course_grades(graded_student.id, None)
    transcript = assembler.build(graded_student, rows, None)

    expected = StatsAggregator(store, PASS, 2).student_semester_stats(graded_student.id).value

    assert [s.subtotal for s in transcript.semesters] == expected
    assert transcript.summary.validated_credits == sum(s.validated_credits for s in expected)
    assert transcript.summary.total_credits == 12
    assert transcript.summary.courses_count == 3


def test_subtotals_match_stats_with_year_filter(assembler, store, graded_student):
    rows = store.student_course_grades(graded_student.id, "2021-2022")
    transcript = assembler.build(graded_student, rows, "2021-2022")

    expected = StatsAggregator(store, PASS, 2).student_semester_stats(graded_student.id, "2021-2022").value

    assert [s.subtotal for s in transcript.semesters] == expected
    assert expected[0].validated_credits == 5
    assert expected[0].total_credits == 7


def test_rendering_failure_is_internal(store, graded_student):
    pdf_service = MagicMock()
    pdf_service.generate_transcript_pdf.side_effect = RuntimeError("font missing")

    result = TranscriptAssembler(store, pdf_service, PASS).generate(graded_student.id)

    assert isinstance(result.error, Internal)
    assert result.error.message == "Error while generating the transcript"


def test_lookup_failure_is_internal():
    store = MagicMock()
    store.get_student.side_effect = OperationalError("SELECT", {}, Exception("down"))

    result = TranscriptAssembler(store, PDFService(), PASS).generate(1)

    assert result.error.status_code == 500


def test_document_streams_in_chunks():
    document = TranscriptDocument(filename="t.pdf", content=b"abcdefghij")

    assert list(document.iter_chunks(4)) == [b"abcd", b"efgh", b"ij"]
    assert b"".join(document.iter_chunks(3)) == b"abcdefghij"
