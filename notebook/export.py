"""
Interview export - raw JSON and a plain-text summary.
"""

import json
import re

from models import Interview, TemplateCategory

QUOTE_PATTERN = re.compile(r'"([^"]+)"')

# Summary theme -> tag id prefix it collects.
SUMMARY_THEMES = (
    ("Behaviour Patterns", "b_"),
    ("Stress Themes", "s_"),
    ("Impact Themes", "i_"),
)


def export_interview_json(interview: Interview) -> str:
    """The interview record as stored, pretty-printed."""
    return json.dumps(interview.to_record(), indent=2)


def _display_tag(tag_id: str) -> str:
    return re.sub(r"^[bsic]_", "", tag_id)


def build_text_summary(interview: Interview, template: list[TemplateCategory]) -> str:
    """
    Human-readable summary of one interview.

    Walks sections in template order, skipping empty or orphaned ones.
    Tag themes are grouped by id prefix; quoted phrases in notes are
    pulled out as key quotes.
    """
    themes: dict[str, dict[str, None]] = {prefix: {} for _, prefix in SUMMARY_THEMES}
    quotes: list[str] = []
    details = ""

    for category in template:
        section = interview.section_for(category.id)
        if section is None or not section.questions:
            continue

        details += f"\n[{category.name.upper()}]\n"
        for index, question in enumerate(section.questions, 1):
            for tag_id in question.tags:
                for prefix in themes:
                    if tag_id.startswith(prefix):
                        themes[prefix][tag_id] = None
            details += f"Q{index}: {question.prompt}\nNotes: {question.notes}\n"
            quotes.extend(m.group(0) for m in QUOTE_PATTERN.finditer(question.notes))

    meta = interview.metadata
    lines = [
        f"Participant ID: {meta.participant_id}",
        f"City: {meta.city or '-'}",
        f"Mode: {meta.mode.value}",
        "",
    ]
    for title, prefix in SUMMARY_THEMES:
        tags = "\n".join(f"- {_display_tag(t)}" for t in themes[prefix])
        lines += [title, tags or "- None", ""]

    quote_block = "".join(f"- {q}\n" for q in quotes)
    lines += ["Key Quotes", quote_block or "- None detected", ""]
    lines += ["Detailed Interview Notes", details, ""]
    return "\n".join(lines)
