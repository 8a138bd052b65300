"""Run the reference fronts store locally with auto-reload.

    uv run python main.py                 # serve ./data
    uv run python main.py --demo          # reset ./data to the demo campaign
    uv run python main.py --data-dir tmp  # serve another directory
"""

import argparse
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Serve the fronts store for a FrontManager")
    parser.add_argument("--data-dir", type=Path, help="where fronts.json lives (default: ./data)")
    parser.add_argument("--demo", action="store_true", help="replace stored fronts with the demo campaign")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    data_dir = (args.data_dir or ROOT / "data").resolve()

    if args.demo:
        from backend import storage
        from backend.demo import create_demo_data

        storage.init_storage(data_dir)
        create_demo_data()
        print(f"Demo fronts written to {storage.fronts_path()}")

    host = os.getenv("HOST", "0.0.0.0")
    port = os.getenv("BACKEND_PORT", "3000")
    print(f"Fronts store: http://localhost:{port}/api/fronts (data: {data_dir})")

    command = ["uv", "run", "uvicorn", "backend.app:app", "--reload", "--host", host, "--port", port]
    try:
        return subprocess.run(command, cwd=ROOT, env={**os.environ, "DATA_DIR": str(data_dir)}).returncode
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
