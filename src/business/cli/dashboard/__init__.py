"""Dashboard module for the portfolio terminal.

This module provides the plain-text panels of the terminal: market
quotes, profile and portfolio holdings, and historical performance.
"""

from src.business.cli.dashboard.renderer import COMPUTING, LOADING, DashboardRenderer

__all__ = ["COMPUTING", "DashboardRenderer", "LOADING"]
