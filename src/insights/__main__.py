"""Entry point for running reports as a module.

Allows running with: python -m src.insights <report>
"""

import sys

from src.insights.cli import main

if __name__ == "__main__":
    sys.exit(main())
