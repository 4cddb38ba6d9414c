from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from schemas.transcript import Transcript

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


class PDFService:
    def __init__(self, template_dir: Optional[str] = None):
        # 템플릿 환경 설정
        self.env = Environment(
            loader=FileSystemLoader(Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR),
            autoescape=select_autoescape(["html"]),
        )

    def _render_template(self, template_name: str, data: Dict[str, Any]) -> str:
        """템플릿을 렌더링하여 HTML 생성"""
        template = self.env.get_template(template_name)
        return template.render(**data)

    def _html_to_pdf(self, html_content: str) -> bytes:
        """HTML을 PDF로 변환"""
        # weasyprint 는 import 시점에 pango 등 네이티브 라이브러리를 로드함
        import weasyprint

        return weasyprint.HTML(string=html_content).write_pdf()

    def render_transcript_html(self, transcript: Transcript) -> str:
        """성적증명서 HTML"""
        return self._render_template("transcript.html", {"transcript": transcript})

    def generate_transcript_pdf(self, transcript: Transcript) -> bytes:
        """성적증명서 PDF 생성"""
        return self._html_to_pdf(self.render_transcript_html(transcript))
