"""
Territory Manager command-line wrapper.
Run 'python scripts/manage.py seed' once, then import, export or inspect.
"""

import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from territory.cli import main

if __name__ == "__main__":
    sys.exit(main())
