# Path: ppo_index/__main__.py
"""Allow `python -m ppo_index`."""

import sys

from .main import main

sys.exit(main())
