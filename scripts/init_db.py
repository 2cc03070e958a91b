"""
Database initialization script.

Creates the database tables directly, without Alembic. Use
``alembic upgrade head`` for managed databases.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from app.core.logging import setup_logging
from app.db.init_db import init_db
from app.db.session import create_db_engine

if __name__ == "__main__":
    setup_logging()
    print("=" * 50)
    print("Accounts Database Initialization")
    print("=" * 50)
    print()

    try:
        init_db(create_db_engine())
        print()
        print("=" * 50)
        print("SUCCESS: Database initialized!")
        print("=" * 50)
        sys.exit(0)

    except Exception as e:
        print()
        print("=" * 50)
        print("ERROR: Database initialization failed!")
        print(f"Details: {e}")
        print("=" * 50)
        sys.exit(1)
