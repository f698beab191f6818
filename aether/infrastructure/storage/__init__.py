"""
Ledger persistence and workspace file exchange.
"""

from .json_store import JsonTradeStore
from .workspace import (
    Workspace,
    dumps_workspace,
    export_workspace,
    import_workspace,
    parse_workspace,
)

__all__ = [
    "JsonTradeStore",
    "Workspace",
    "dumps_workspace",
    "export_workspace",
    "import_workspace",
    "parse_workspace",
]
