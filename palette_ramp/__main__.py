# palette_ramp/__main__.py
"""Allow `python -m palette_ramp`."""

from .cli import main

raise SystemExit(main())
