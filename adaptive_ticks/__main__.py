"""Entry point for running adaptive-ticks as a module.

Usage:
    python -m adaptive_ticks ticks 0 10
"""

from adaptive_ticks.cli import main

if __name__ == "__main__":
    main()
