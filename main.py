"""
Energy Coins — Entry Point.

Single entry point: `python main.py <command>` runs the CLI, which sets up
logging from ENERGY_COINS_LOG_LEVEL before dispatching.
"""

import sys

from energy_coins.cli import main

if __name__ == "__main__":
    sys.exit(main())
