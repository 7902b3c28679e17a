from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("tealgen")
except importlib.metadata.PackageNotFoundError:
    # Source checkouts without an installed distribution.
    __version__ = "0.0.0"
