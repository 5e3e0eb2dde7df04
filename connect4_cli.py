#!/usr/bin/env python3
"""Entry point for playing Connect-4 against the heuristic engine."""

from connect4bot.cli import main


if __name__ == "__main__":
    main()
