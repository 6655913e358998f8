"""Transport message handling: batch import requests and status replies"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mdsync.config import Settings
from mdsync.core.models import ImportOutcome, SourceFile
from mdsync.core.pipeline import import_batch
from mdsync.host.base import DocumentHost


logger = logging.getLogger(__name__)

IMPORT_BATCH = "import-markdown-batch"


class ImportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["import-markdown-batch"] = IMPORT_BATCH
    files: list[SourceFile] = Field(default_factory=list)
    create_missing: bool | None = Field(default=None, alias="createMissing")


class StatusReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["status"] = "status"
    message: str
    error: bool = False
    processed_count: int = Field(default=0, alias="processedCount")


async def handle_message(host: DocumentHost, payload: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Answer one transport message with a status reply dict."""
    try:
        request = ImportRequest.model_validate(payload)
    except ValidationError as e:
        logger.warning("Rejected message: %s", e)
        return StatusReply(message="Invalid import request.", error=True).model_dump(by_alias=True)

    if not request.files:
        return StatusReply(message="No files request received.", error=True).model_dump(by_alias=True)

    result = await import_batch(host, request.files, settings, request.create_missing)
    reply = StatusReply(
        message=result.message,
        error=result.outcome in (ImportOutcome.no_matches, ImportOutcome.all_failed),
        processed_count=result.succeeded,
    )
    return reply.model_dump(by_alias=True)
