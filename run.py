#!/usr/bin/env python3
"""
run.py - Main entry point for dropfour
"""

import argparse
import sys

from dropfour.interfaces.cli import SimpleCLI

EPILOG = """
    Examples:

    # Play against the heuristic bot
    python run.py play

    # Two players sharing the terminal on a larger grid
    python run.py --columns 9 --rows 7 play --two-player

    # Analyze a position (rows top to bottom)
    python run.py test --position '......./......./......./......./1....../1222...'

    # Bot-vs-bot benchmark with a fixed seed and debug logging
    python run.py --seed 7 --debug benchmark --iterations 500

    # Random agent against the bot through the gymnasium environment
    python run.py --seed 7 env --episodes 50
    """


def main():
    """Main entry point for dropfour."""
    argv = sys.argv[1:]
    if not argv or argv[0] in ('-h', '--help'):
        parser = SimpleCLI.build_parser()
        parser.epilog = EPILOG
        parser.formatter_class = argparse.RawDescriptionHelpFormatter
        parser.print_help()
        return 0
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
