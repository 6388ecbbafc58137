"""Entry point for the Grid Snake game."""

from __future__ import annotations

from grid_snake.game import main

if __name__ == "__main__":
    main()
