"""
Workspace snapshot format.

A workspace file is a JSON object ``{"trades": [...], "version": str,
"timestamp": int}``. Importing one replaces the whole ledger, so the payload
is validated completely before anything is returned.
"""

import json
import time
from dataclasses import dataclass
from datetime import date
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from aether.core.constants import WORKSPACE_FILENAME_PREFIX, WORKSPACE_VERSION
from aether.core.exceptions.portfolio import ValidationError
from aether.core.models.ledger import TradeLedger
from aether.core.models.trade import Trade
from aether.core.types.financial import is_finite_number


class WorkspaceDocument(BaseModel):
    """Shape check for an imported workspace; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    trades: list[Any] = Field(..., description="Trade records")
    version: Any = Field(default=None, description="Exporting app version")
    timestamp: Any = Field(default=None, description="Export time in ms")


@dataclass(frozen=True)
class Workspace:
    """A validated workspace ready to replace the ledger."""

    trades: list[Trade]
    version: str | None
    timestamp: int | None


def _load_json(payload: str | bytes) -> Any:
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Workspace is not valid JSON: {e}") from e


def parse_workspace(payload: str | bytes | dict[str, Any]) -> Workspace:
    """Validate a workspace document.

    Args:
        payload: Raw JSON text/bytes or an already-decoded object

    Returns:
        Workspace with fully validated trades

    Raises:
        ValidationError: If the JSON is invalid, ``trades`` is missing or not
            an array, or any trade record is malformed
    """
    data = _load_json(payload) if isinstance(payload, str | bytes) else payload
    if not isinstance(data, dict):
        raise ValidationError(
            f"Workspace must be a JSON object, got {type(data).__name__}"
        )

    try:
        document = WorkspaceDocument.model_validate(data)
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ValidationError(f"Invalid workspace, bad field(s): {fields}") from e

    trades = []
    for index, record in enumerate(document.trades):
        try:
            trades.append(Trade.from_dict(record))
        except ValidationError as e:
            raise ValidationError(f"Invalid trade at index {index}: {e}") from e

    timestamp = int(document.timestamp) if is_finite_number(document.timestamp) else None
    version = str(document.version) if document.version is not None else None
    return Workspace(trades=trades, version=version, timestamp=timestamp)


def export_workspace(trades: list[Trade] | tuple[Trade, ...], now_ms: int | None = None) -> dict:
    """Build the workspace document for the given trades."""
    return {
        "trades": [trade.to_dict() for trade in trades],
        "version": WORKSPACE_VERSION,
        "timestamp": now_ms if now_ms is not None else int(time.time() * 1000),
    }


def dumps_workspace(trades: list[Trade] | tuple[Trade, ...], now_ms: int | None = None) -> str:
    """Serialize the workspace document as indented JSON."""
    return json.dumps(export_workspace(trades, now_ms), indent=2)


def workspace_filename(day: date | None = None) -> str:
    """Suggested backup file name, e.g. aether_prime_backup_2025-01-31.json."""
    day = day or date.today()
    return f"{WORKSPACE_FILENAME_PREFIX}{day.isoformat()}.json"


def import_workspace(ledger: TradeLedger, payload: str | bytes | dict[str, Any]) -> Workspace:
    """Validate payload and replace the ledger with its trades.

    All-or-nothing: on any ValidationError the ledger is untouched.
    """
    workspace = parse_workspace(payload)
    ledger.replace_all(workspace.trades)
    logger.info(f"Imported workspace with {len(workspace.trades)} trades (v{workspace.version})")
    return workspace
