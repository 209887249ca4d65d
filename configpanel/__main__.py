"""Run the configpanel CLI with ``python -m configpanel``."""

from __future__ import annotations

from configpanel.cli.main import main

if __name__ == "__main__":
    main()
