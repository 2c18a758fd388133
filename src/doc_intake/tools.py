"""Tool rule table and catalog for the intake screen."""

from __future__ import annotations

from typing import Dict, List, Sequence

from .exceptions import UnsupportedFileTypeError
from .models import ToolDescriptor, ToolRule
from .routes import dashboard_tool_path

CATALOG_TOOL_ID = "pdf-tools"
DEFAULT_TITLE = "Upload your file"

PDF_EXTENSIONS = (".pdf",)

DEFAULT_RULE = ToolRule(title=DEFAULT_TITLE)

TOOL_RULES: Dict[str, ToolRule] = {
    "document-to-pdf": ToolRule(
        title="Upload document to convert",
        accepted_extensions=(".doc", ".docx", ".ppt", ".pptx", ".xls", ".xlsx"),
    ),
    "ocr": ToolRule(
        title="Upload image for text extraction",
        accepted_extensions=(".jpg", ".jpeg", ".png"),
    ),
    CATALOG_TOOL_ID: ToolRule(title="PDF Tools", accepted_extensions=PDF_EXTENSIONS),
    "pdf-merge": ToolRule(title=DEFAULT_TITLE, accepted_extensions=PDF_EXTENSIONS),
    "pdf-split": ToolRule(title=DEFAULT_TITLE, accepted_extensions=PDF_EXTENSIONS),
    "pdf-protect": ToolRule(title=DEFAULT_TITLE, accepted_extensions=PDF_EXTENSIONS),
    "pdf-redact": ToolRule(title=DEFAULT_TITLE, accepted_extensions=PDF_EXTENSIONS),
}
"""Known tool identifiers. Anything else falls back to ``DEFAULT_RULE``."""

PDF_TOOL_CATALOG: List[ToolDescriptor] = [
    ToolDescriptor(label="Merge PDF", description="Combine PDFs", href=dashboard_tool_path("pdf-merge")),
    ToolDescriptor(label="Split PDF", description="Split PDF", href=dashboard_tool_path("pdf-split")),
    ToolDescriptor(
        label="Document to PDF",
        description="Convert document",
        href=dashboard_tool_path("document-to-pdf"),
    ),
]


def get_tool_rule(tool_id: str) -> ToolRule:
    return TOOL_RULES.get(tool_id, DEFAULT_RULE)


def is_known_tool(tool_id: str) -> bool:
    return tool_id in TOOL_RULES


def is_catalog_tool(tool_id: str) -> bool:
    return tool_id == CATALOG_TOOL_ID


def catalog_entries(tool_id: str) -> List[ToolDescriptor]:
    """Return the fixed catalog for the overview identifier, empty otherwise."""
    if not is_catalog_tool(tool_id):
        return []
    return list(PDF_TOOL_CATALOG)


def extension_of(filename: str) -> str:
    """Return the lower-cased, dot-prefixed text after the last ``.``.

    A name without a dot yields the whole name as its extension, so
    ``"README"`` becomes ``".readme"``.
    """
    return "." + filename.rsplit(".", 1)[-1].lower()


def validate_extension(filename: str, allowed: Sequence[str]) -> str:
    """Return the extension of ``filename`` or raise if ``allowed`` excludes it."""
    extension = extension_of(filename)
    if allowed and extension not in allowed:
        raise UnsupportedFileTypeError(extension, allowed)
    return extension
