"""FastMCP server exposing the fronts store as MCP tools.

Tools:
  - get_fronts()                         — the whole fronts document
  - toggle_secret(danger_id, secret_id)   — reveal / hide a secret
  - toggle_portent(danger_id, portent_id) — complete / reopen a grim portent

Reads and writes go through backend.storage, so the MCP bridge and the HTTP
API always see the same document.

Usage:
    uv run python -m backend.mcp_server
"""

from mcp.server.fastmcp import FastMCP

from backend import storage

mcp = FastMCP("front-manager")


@mcp.tool()
def get_fronts() -> dict:
    """Return every front with its dangers, secrets and grim portents."""
    return {"fronts": storage.get_fronts()}


@mcp.tool()
def toggle_secret(danger_id: str, secret_id: str) -> dict:
    """Reveal a hidden secret, or hide a revealed one. Returns the secret."""
    return storage.toggle_secret(danger_id, secret_id)


@mcp.tool()
def toggle_portent(danger_id: str, portent_id: str) -> dict:
    """Mark a grim portent completed, or reopen it. Returns the portent."""
    return storage.toggle_portent(danger_id, portent_id)


if __name__ == "__main__":
    import os
    from pathlib import Path

    data_dir = Path(os.getenv("DATA_DIR", Path(__file__).parent.parent / "data"))
    storage.init_storage(data_dir)
    mcp.run()
