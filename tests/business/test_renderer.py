"""Tests for the dashboard renderer and its components."""

from datetime import datetime

import pytest

from src.business.cli.dashboard import COMPUTING, LOADING, DashboardRenderer
from src.business.cli.dashboard.components import (
    box,
    format_money,
    format_number,
    format_pct,
    table,
    table_row,
)
from src.business.config import AppConfig, ProfileConfig
from src.business.terminal import HOME, PortfolioView, Session

NOW = datetime(2024, 1, 2, 10, 30)


@pytest.fixture
def session(profile_data, history_provider) -> Session:
    return Session.build(1, ProfileConfig.from_dict(profile_data), AppConfig(), history_provider)


@pytest.fixture
def renderer() -> DashboardRenderer:
    return DashboardRenderer()


class TestComponents:
    """Tests for formatting helpers."""

    def test_format_money(self):
        assert format_money(12345.678) == "12,345.68"
        assert format_money(-50, signed=True) == "-50.00"
        assert format_money(None) == "-"

    def test_format_pct(self):
        assert format_pct(7.177) == "7.18%"
        assert format_pct(1.5, signed=True) == "+1.50%"
        assert format_pct(None) == "-"

    def test_format_number(self):
        assert format_number(100.0) == "100"
        assert format_number(12.5) == "12.50"

    def test_box(self):
        lines = box("Title", ["hello"], 20)
        assert lines[0].startswith("┌─── Title")
        assert lines[1].startswith("│ hello ") and lines[1].endswith(" │")
        assert [len(line) for line in lines] == [20, 20, 20]
        assert lines[-1] == "└" + "─" * 18 + "┘"

    def test_table_row_alignment(self):
        columns = [("A", 6), ("B", 8)]
        assert table_row(["VTI", "1,234.50"], columns) == "│VTI   │1,234.50│"
        assert table_row(["x", "-3.5%"], columns) == "│x     │   -3.5%│"

    def test_table_with_footer(self):
        lines = table([("A", 3)], [["x"]], footer=["y"])
        assert len(lines) == 5


class TestDashboardRenderer:
    """Tests for panel rendering."""

    def test_placeholders_before_refresh(self, renderer, session):
        screen = renderer.render(session, HOME, now=NOW)

        assert "Main  |  2024-01-02 10:30:00" in screen
        assert screen.count(LOADING) == 2
        assert COMPUTING in screen

    def test_profile_panel(self, renderer, session, history_provider):
        session.profile.refresh(history_provider)
        session.market.refresh(history_provider)

        screen = renderer.render(session, HOME, now=NOW)

        assert LOADING not in screen
        assert "PORTFOLIO" in screen
        assert "Core" in screen and "Growth" in screen and "Cash" in screen
        assert "TOTAL" in screen
        assert "6,300.00" in screen
        assert "S&P 500" in screen

    def test_portfolio_panel(self, renderer, session, history_provider):
        session.profile.refresh(history_provider)

        screen = renderer.render(session, PortfolioView(0), now=NOW)

        assert "Main / Core" in screen
        for header in ("SYMBOL", "CLASS", "QUANTITY", "UNREALIZED%", "TARGET"):
            assert header in screen
        assert "US Stock Large" in screen
        assert "3,500.00" in screen
        assert "60.00%" in screen

    def test_performance_panel(self, renderer, session, history_provider):
        session.profile.refresh(history_provider)
        performance = session.performance_for(PortfolioView(0))
        performance.compute()

        screen = renderer.render(session, PortfolioView(0), now=NOW)

        assert COMPUTING not in screen
        assert "Performance: Core vs SPY" in screen
        for header in ("Start Date", "Initial Balance", "CAGR", "Max Drawdown", "Sharpe Ratio"):
            assert header in screen
        assert "2022-01-03" in screen
        assert "Trailing Returns" in screen
        assert "10-Year" in screen

    def test_help_panel(self, renderer, session):
        screen = renderer.render(session, HOME, show_help=True, now=NOW)

        assert "Help" in screen
        assert "reload configuration" in screen
        assert "1      Core" in screen
        assert "2      Growth" in screen

    def test_message(self, renderer, session):
        screen = renderer.render(session, HOME, message="Reload failed: bad", now=NOW)
        assert "Reload failed: bad" in screen

    def test_report(self, renderer, session, history_provider):
        performance = session.performance_for(PortfolioView(0))
        assert renderer.render_report(performance).count(COMPUTING) == 1

        performance.compute()
        report = renderer.render_report(performance)

        assert "Yearly Returns" in report
        assert "2022" in report and "2023" in report
