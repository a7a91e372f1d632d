"""
Script to run the snapshot pipeline for all (or the named) sources

    python scripts/run_etl.py             # every source
    python scripts/run_etl.py coins nfts  # only these
"""

import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from ingestion.cli import main


if __name__ == "__main__":
    names = sys.argv[1:]
    sys.exit(main(["run", *names] if names else ["run", "--all"]))
