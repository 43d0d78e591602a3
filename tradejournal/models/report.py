"""Structured report document models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ReportEntry(BaseModel):
    """A single label/value line in a report section."""

    label: str = Field(..., description="Metric label")
    value: str = Field(..., description="Formatted value")

    model_config = {"frozen": True}


class ReportSection(BaseModel):
    """A titled block of key/value entries and free lines."""

    title: str = Field(..., description="Section heading")
    entries: list[ReportEntry] = Field(default_factory=list)
    lines: list[str] = Field(default_factory=list, description="Per-record or free-text lines")

    def get(self, label: str) -> Optional[str]:
        """Return the value for a label, or None if absent."""
        for entry in self.entries:
            if entry.label == label:
                return entry.value
        return None


class ReportDocument(BaseModel):
    """A report ready to hand to a text or PDF renderer."""

    scope: str = Field(..., description="Report scope")
    title: str = Field(..., description="Document title")
    generated_at: datetime = Field(..., description="Generation timestamp")
    sections: list[ReportSection] = Field(default_factory=list)
    footer: str = Field(default="", description="Footer line")
    filename: str = Field(..., description="Suggested export filename")

    @property
    def generated_line(self) -> str:
        return f"Generated: {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}"

    def section(self, title: str) -> Optional[ReportSection]:
        """Return the section with the given title, or None."""
        for section in self.sections:
            if section.title == title:
                return section
        return None

    def to_dict(self) -> dict:
        """Flatten into {section title: {label: value}} plus line lists."""
        result: dict = {}
        for section in self.sections:
            body: dict = {entry.label: entry.value for entry in section.entries}
            if section.lines:
                body["lines"] = list(section.lines)
            result[section.title] = body
        return result
