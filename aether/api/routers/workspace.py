"""
Workspace export/import API endpoints.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from aether.api.dependencies import get_engine
from aether.api.schemas.api_models import WorkspaceImportResponse
from aether.engine import PortfolioEngine
from aether.infrastructure.storage.workspace import (
    export_workspace,
    import_workspace,
    workspace_filename,
)

router = APIRouter()


@router.get("/export")
async def export(engine: PortfolioEngine = Depends(get_engine)) -> JSONResponse:
    """Download the ledger as a workspace file."""
    return JSONResponse(
        content=export_workspace(engine.ledger.list()),
        headers={"Content-Disposition": f'attachment; filename="{workspace_filename()}"'},
    )


@router.post("/import")
def import_(
    payload: Any = Body(...), engine: PortfolioEngine = Depends(get_engine)
) -> WorkspaceImportResponse:
    """Replace the ledger with an uploaded workspace."""
    workspace = import_workspace(engine.ledger, payload)
    return WorkspaceImportResponse(imported=len(workspace.trades), version=workspace.version)
