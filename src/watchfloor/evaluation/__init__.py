"""Evaluation layer (tabular exports)."""

from .exports import BOARD_COLUMNS, WEEKEND_COLUMNS, board_dataframe, weekend_dataframe

__all__ = ["BOARD_COLUMNS", "WEEKEND_COLUMNS", "board_dataframe", "weekend_dataframe"]
