"""configpanel - configuration panel engine of a self-hosted server platform."""

from __future__ import annotations

__version__ = "0.1.0"
