"""FastAPI surface for the tool catalog and file-type validation."""

from __future__ import annotations

from typing import List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from .config import get_settings
from .controller import IntakeController
from .logging_config import get_logger
from .models import FileSource, SelectedFile, SelectionOutcome, ToolDescriptor
from .routes import processing_path
from .tools import CATALOG_TOOL_ID, TOOL_RULES, catalog_entries, get_tool_rule, is_known_tool

logger = get_logger(__name__)


class ToolRuleResponse(BaseModel):
    tool_id: str
    title: str
    accepted_extensions: List[str]
    known: bool
    catalog: bool = False


class ValidateRequest(BaseModel):
    filename: str = Field(..., min_length=1, description="Name of the file the user picked.")
    source: FileSource = FileSource.BROWSE

    @field_validator("filename")
    @classmethod
    def _no_blank_filename(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("filename must not be blank")
        return value


class ValidateResponse(BaseModel):
    tool_id: str
    filename: str
    outcome: SelectionOutcome
    accepted: bool
    error: Optional[str] = None
    processing_path: Optional[str] = None


def _rule_response(tool_id: str) -> ToolRuleResponse:
    rule = get_tool_rule(tool_id)
    return ToolRuleResponse(
        tool_id=tool_id,
        title=rule.title,
        accepted_extensions=list(rule.accepted_extensions),
        known=is_known_tool(tool_id),
        catalog=tool_id == CATALOG_TOOL_ID,
    )


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="DocTool Studio API", version="0.1.0")

    def auth_dependency(x_api_key: Optional[str] = Header(default=None, alias="X-API-Key")) -> None:
        configured = getattr(settings, "api_key", None)
        if configured and x_api_key != configured:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")

    @app.get("/v1/tools", response_model=List[ToolRuleResponse])
    def list_tools(_: None = Depends(auth_dependency)) -> List[ToolRuleResponse]:
        return [_rule_response(tool_id) for tool_id in TOOL_RULES]

    @app.get("/v1/tools/{tool_id}", response_model=ToolRuleResponse)
    def get_tool(tool_id: str, _: None = Depends(auth_dependency)) -> ToolRuleResponse:
        return _rule_response(tool_id)

    @app.get("/v1/catalog", response_model=List[ToolDescriptor])
    def get_catalog(_: None = Depends(auth_dependency)) -> List[ToolDescriptor]:
        return catalog_entries(CATALOG_TOOL_ID)

    @app.post("/v1/tools/{tool_id}/validate", response_model=ValidateResponse)
    def validate_file(tool_id: str, payload: ValidateRequest, _: None = Depends(auth_dependency)) -> ValidateResponse:
        controller = IntakeController(tool_id)
        outcome = controller.select_file(SelectedFile(name=payload.filename), payload.source)
        accepted = outcome is SelectionOutcome.ACCEPTED
        logger.info("Validated file", tool_id=tool_id, filename=payload.filename, outcome=outcome.value)
        return ValidateResponse(
            tool_id=tool_id,
            filename=payload.filename,
            outcome=outcome,
            accepted=accepted,
            error=controller.error,
            processing_path=processing_path(tool_id) if accepted else None,
        )

    @app.get("/v1/openapi")
    def export_openapi(_: None = Depends(auth_dependency)) -> JSONResponse:
        return JSONResponse(content=app.openapi())

    return app
