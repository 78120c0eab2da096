#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Usage:
    python run.py play --players 3 --width 8 --height 7
    python run.py benchmark --iterations 500 --seed 1
"""

import sys

from connectfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
