"""
Development server launcher.

Loads .env file and runs the backend API or the web tier with uvicorn in
reload mode.

Usage:
    python scripts/run_dev.py            # backend on :8000
    python scripts/run_dev.py web        # web tier on :3000
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env file
from dotenv import load_dotenv

load_dotenv()

import uvicorn

TARGETS = {
    "api": ("app.main:get_app", 8000),
    "web": ("app.web.main:get_web_app", 3000),
}

if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else "api"
    if target not in TARGETS:
        print(f"Unknown target {target!r}, expected one of: {', '.join(TARGETS)}")
        sys.exit(2)

    factory, port = TARGETS[target]
    print("=" * 60)
    print(f"Accounts development server ({target})")
    print("=" * 60)
    print()
    print(f"URL:  http://localhost:{port}")
    print(f"Docs: http://localhost:{port}/docs")
    print()
    print("Press Ctrl+C to stop")
    print("=" * 60)

    uvicorn.run(factory, factory=True, host="0.0.0.0", port=port, reload=True, log_level="info")
