#!/usr/bin/env python3
"""
Launch script for the sreader web panel
"""

import argparse
import sys
from pathlib import Path

from sreader.utils.logging import configure_logging


def main():
    """Launch the sreader web panel"""
    parser = argparse.ArgumentParser(description="sreader web panel")
    parser.add_argument("--data-dir", type=Path, default=Path("data"))
    parser.add_argument("--workspace", type=Path, default=Path.cwd())
    parser.add_argument("--port", type=int, default=7860)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    configure_logging(verbose=args.verbose)

    try:
        from sreader.ui.app import build_ui

        demo = build_ui(data_dir=args.data_dir, workspace=args.workspace)
        print("🚀 Launching reader panel...")
        # Local only, no public sharing
        demo.launch(server_name="127.0.0.1", server_port=args.port, share=False, show_error=True)
    except KeyboardInterrupt:
        print("\n👋 Shutting down...")
    except ImportError as e:
        print(f"❌ Import error: {e}")
        print("Install the project first: pip install -e .")
        sys.exit(1)


if __name__ == "__main__":
    main()
