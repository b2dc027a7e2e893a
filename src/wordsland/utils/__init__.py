"""Display helpers."""

from .board_visualizer import render_board, render_hand, cell_symbol

__all__ = [
    "render_board",
    "render_hand",
    "cell_symbol",
]
