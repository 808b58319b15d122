"""
Word report writer with keyword highlight support.

This module generates a .docx analysis report with:
- Reading guide at the top
- SEO metrics table
- Recommendations
- Recommended keywords table
- Optimized text with keyword occurrences highlighted
"""

import io
import re
from pathlib import Path
from typing import Optional, Union

from docx import Document
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_COLOR_INDEX
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt
from docx.text.paragraph import Paragraph

from .highlighting import mark_keywords, parse_marker_segments
from .models import Analysis, Keyword, Recommendation

FONT_NAME = "Poppins"
HEADER_SHADING = "D9D9D9"

# Invalid XML 1.0 control characters (Word refuses to open files containing them)
_INVALID_XML_CHARS_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]"
)


def sanitize_for_xml(text: str) -> str:
    """
    Remove invalid XML characters from text.

    Args:
        text: Input text that may contain invalid XML characters.

    Returns:
        Sanitized text safe for XML/DOCX.
    """
    if not text:
        return text
    return _INVALID_XML_CHARS_RE.sub("", text)


def set_cell_shading(cell, color: str) -> None:
    """Set background color/shading for a table cell."""
    tc = cell._tc
    tcPr = tc.get_or_add_tcPr()
    shd = OxmlElement("w:shd")
    shd.set(qn("w:fill"), color)
    tcPr.append(shd)


def add_marked_text(paragraph: Paragraph, text: str, font_name: str = FONT_NAME) -> None:
    """
    Write `text` into `paragraph`, converting [[[ADD]]]/[[[ENDADD]]] segments
    into highlighted runs and leaving all other text normal.

    Args:
        paragraph: The paragraph to add text to.
        text: Text with optional [[[ADD]]]...[[[ENDADD]]] markers.
        font_name: Font to use for all runs.
    """
    for segment, highlighted in parse_marker_segments(sanitize_for_xml(text)):
        run = paragraph.add_run(segment)
        run.font.name = font_name
        if highlighted:
            run.font.highlight_color = WD_COLOR_INDEX.BRIGHT_GREEN


class AnalysisReportWriter:
    """
    Writes an analysis to a Word document.

    Creates a report with:
    - Reading guide explaining the highlight convention
    - Metrics and recommendations
    - Keyword table
    - Optimized text with keyword occurrences highlighted
    """

    def __init__(self):
        """Initialize the document writer."""
        self.doc = Document()
        self._setup_styles()

    def _setup_styles(self) -> None:
        """Configure document styles with Poppins font and consistent spacing."""
        normal_style = self.doc.styles["Normal"]
        normal_style.font.name = FONT_NAME
        normal_style.font.size = Pt(11)
        normal_style.paragraph_format.space_before = Pt(6)
        normal_style.paragraph_format.space_after = Pt(6)
        normal_style.paragraph_format.line_spacing = 1.15

        for style_name, font_size in (("Heading 1", Pt(20)), ("Heading 2", Pt(16))):
            if style_name in self.doc.styles:
                style = self.doc.styles[style_name]
                style.font.name = FONT_NAME
                style.font.size = font_size
                style.font.bold = True

        if "Table Grid" in self.doc.styles:
            self.doc.styles["Table Grid"].font.name = FONT_NAME
            self.doc.styles["Table Grid"].font.size = Pt(10)

    def write(
        self,
        analysis: Analysis,
        output: Union[str, Path, io.BytesIO],
        document_title: Optional[str] = None,
    ) -> Union[Path, io.BytesIO]:
        """
        Write the analysis report.

        Args:
            analysis: Analysis to report on.
            output: Path for the .docx file, or a binary buffer.
            document_title: Optional custom document title.

        Returns:
            Path to the created document, or the buffer that was written.
        """
        if not isinstance(output, io.BytesIO):
            output = Path(output)
            if output.suffix.lower() != ".docx":
                output = output.with_suffix(".docx")

        title = document_title or f"SEO Analysis #{analysis.id}"
        self.doc.add_heading(sanitize_for_xml(title), level=1)

        self._add_reading_guide()
        self._add_metrics_table(analysis)
        self._add_recommendations(analysis.recommendations)
        self._add_keyword_table(analysis.keywords)

        self.doc.add_heading("Optimized Text", level=2)
        marked = mark_keywords(analysis.optimized_text or analysis.original_text, analysis.keywords)
        for block in marked.split("\n"):
            if block.strip():
                add_marked_text(self.doc.add_paragraph(), block)

        self.doc.save(output if isinstance(output, io.BytesIO) else str(output))
        return output

    def _add_reading_guide(self) -> None:
        guide_para = self.doc.add_paragraph()
        add_marked_text(
            guide_para,
            "This report summarizes the SEO analysis of your content. Text "
            "highlighted in [[[ADD]]]green like this[[[ENDADD]]] marks occurrences "
            "of recommended keywords in the optimized text.",
        )

    def _add_table(self, headers: list[str], widths: list[float]):
        """Add a grid table with a shaded, bold header row."""
        table = self.doc.add_table(rows=1, cols=len(headers))
        table.style = "Table Grid"
        table.alignment = WD_TABLE_ALIGNMENT.LEFT

        for i, width in enumerate(widths):
            table.columns[i].width = Inches(width)

        header_cells = table.rows[0].cells
        for i, header in enumerate(headers):
            header_cells[i].text = header
            for paragraph in header_cells[i].paragraphs:
                for run in paragraph.runs:
                    run.font.bold = True
            set_cell_shading(header_cells[i], HEADER_SHADING)

        return table

    def _add_metrics_table(self, analysis: Analysis) -> None:
        self.doc.add_heading("SEO Metrics", level=2)
        table = self._add_table(["Metric", "Value"], [2.5, 3.5])

        rows = [
            ("SEO Score", f"{analysis.seo_score}/100"),
            ("Readability", analysis.readability_score.value),
            ("Keyword Density", f"{analysis.keyword_density:.1f}%"),
            ("Word Count", str(analysis.word_count)),
            ("Content Type", analysis.content_type.label.title()),
            ("Keywords Inserted", str(analysis.keywords_inserted)),
        ]
        for metric, value in rows:
            cells = table.add_row().cells
            cells[0].text = metric
            cells[1].text = value

        self.doc.add_paragraph()

    def _add_recommendations(self, recommendations: list[Recommendation]) -> None:
        self.doc.add_heading("Optimization Opportunities", level=2)

        if not recommendations:
            self.doc.add_paragraph("No recommendations. The content meets every check.")
            return

        for rec in recommendations:
            para = self.doc.add_paragraph(style="List Bullet")
            title_run = para.add_run(f"{sanitize_for_xml(rec.title)}: ")
            title_run.font.bold = True
            para.add_run(sanitize_for_xml(rec.description))

    def _add_keyword_table(self, keywords: list[Keyword]) -> None:
        self.doc.add_heading("Recommended Keywords", level=2)

        if not keywords:
            self.doc.add_paragraph("No keywords were extracted for this content.")
            return

        table = self._add_table(
            ["Keyword", "Difficulty", "Volume", "Relevance", "Context"],
            [1.8, 0.9, 0.9, 0.9, 2.5],
        )
        for kw in keywords:
            cells = table.add_row().cells
            cells[0].text = sanitize_for_xml(kw.text)
            cells[1].text = sanitize_for_xml(kw.difficulty)
            cells[2].text = sanitize_for_xml(kw.volume)
            cells[3].text = f"{kw.relevance_score:.2f}"
            cells[4].text = sanitize_for_xml(kw.context)

        self.doc.add_paragraph()


def write_analysis_report(
    analysis: Analysis,
    output_path: Union[str, Path],
    document_title: Optional[str] = None,
) -> Path:
    """
    Convenience function to write an analysis report.

    Returns:
        Path to created document.
    """
    writer = AnalysisReportWriter()
    return writer.write(analysis, output_path, document_title=document_title)


def analysis_report_bytes(analysis: Analysis) -> bytes:
    """Render an analysis report to .docx bytes."""
    buffer = io.BytesIO()
    AnalysisReportWriter().write(analysis, buffer)
    return buffer.getvalue()
