"""File-based JSON storage for the reference fronts store.

Data layout:
  data/
    fronts.json    {"fronts": [...]}  the whole document, camelCase keys

The store keeps fronts as plain dicts and never validates their shape
beyond what the toggles need, so fields the client adds survive a round
trip untouched.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    fronts_path,
    init_storage,
)

from .fronts import (  # noqa: F401
    get_fronts,
    save_fronts,
    toggle_portent,
    toggle_secret,
)
