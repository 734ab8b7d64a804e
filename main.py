"""
Entry point for the CRUD backends

    python main.py serve --service relations
    python main.py init-schema --service crud
"""

import os
import sys

# Add src directory to Python path for running from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from crud_backend.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
