"""Dashboard renderer for CLI.

Renders the portfolio terminal with multiple panels:
- Market strip (index quotes)
- Profile table (portfolios + cash, actual vs target allocation)
- Portfolio table (holdings of one portfolio)
- Performance table (portfolio vs benchmark)
- Trailing returns table
- Help panel

Panels whose data is not there yet show a placeholder instead:
"Loading ..." before the first quote refresh, "Computing ..." until
the performance computation is ready.
"""

from datetime import datetime
from typing import Optional

from src.business.cli.dashboard.components import (
    box,
    format_money,
    format_number,
    format_pct,
    side_by_side,
    table,
    table_width,
)
from src.business.performance import Performance
from src.business.portfolio import CASH_KEY, Market, Portfolio, Profile
from src.business.terminal.session import Session
from src.business.terminal.views import PortfolioView, View
from src.engine import PerformanceResult

LOADING = "Loading ..."
COMPUTING = "Computing ..."

WIDTH = 120

HELP_LINES = [
    "h      show / hide this help",
    "0, m   profile overview",
    "1..9   portfolio N",
    "r      reload configuration",
    "q      quit",
]

PROFILE_COLUMNS = [
    ("PORTFOLIO", 16),
    ("VALUE", 14),
    ("1-DAY CHANGE$", 14),
    ("1-DAY CHANGE%", 14),
    ("UNREALIZED$", 14),
    ("UNREALIZED%", 12),
    ("ALLOCATION", 11),
    ("TARGET", 9),
]

PORTFOLIO_COLUMNS = [
    ("SYMBOL", 10),
    ("CLASS", 22),
    ("QUANTITY", 10),
    ("PRICE", 10),
    ("1-DAY CHANGE$", 13),
    ("1-DAY CHANGE%", 13),
    ("VALUE", 13),
    ("1-DAY VALUE CHANGE$", 19),
    ("UNREALIZED$", 13),
    ("UNREALIZED%", 11),
    ("ALLOCATION", 10),
    ("TARGET", 8),
]

PERFORMANCE_COLUMNS = [
    ("Portfolio", 16),
    ("Start Date", 12),
    ("Initial Balance", 16),
    ("Final Balance", 16),
    ("CAGR", 9),
    ("Stdev", 9),
    ("Best Year", 10),
    ("Worst Year", 11),
    ("Max Drawdown", 13),
    ("Sharpe Ratio", 13),
]

RETURN_LABELS = ["1-Month", "3-Month", "6-Month", "YTD", "1-Year", "3-Year", "5-Year", "10-Year", "Max"]
RETURNS_COLUMNS = [("Portfolio", 16)] + [(label, 9) for label in RETURN_LABELS]


class DashboardRenderer:
    """Dashboard renderer for terminal output."""

    def __init__(self, width: int = WIDTH):
        self.width = width

    def render(
        self,
        session: Session,
        view: View,
        show_help: bool = False,
        message: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Render the complete dashboard for one view.

        Args:
            session: Current session (profile, market, performances)
            view: HomeView or PortfolioView
            show_help: Append the help panel
            message: Status line shown under the title (e.g. reload errors)
            now: Timestamp for the title line (defaults to now)

        Returns:
            Formatted dashboard string
        """
        lines = []

        timestamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        title = session.profile.name
        if isinstance(view, PortfolioView) and session.contains(view):
            title = f"{title} / {session.profile.portfolios[view.index].name}"
        lines.append("═" * self.width)
        lines.append(f"  {title}  |  {timestamp}  |  h: help  q: quit")
        lines.append("═" * self.width)
        if message:
            lines.append(f"  {message}")
        lines.append("")

        lines.extend(self.render_market(session.market))
        lines.append("")

        portfolio = session.portfolio_for(view)
        if portfolio is None:
            lines.extend(self.render_profile(session.profile))
        else:
            lines.extend(self.render_portfolio(portfolio))
        lines.append("")

        lines.extend(self.render_performance(session.performance_for(view)))
        lines.append("")

        if show_help:
            lines.extend(self.render_help(session.profile))
            lines.append("")

        return "\n".join(lines)

    def render_market(self, market: Market) -> list[str]:
        """Render the market strip as two boxes side by side."""
        half = self.width // 2 - 1
        if not market.refreshed:
            return box("Market", [LOADING], self.width)

        rows = []
        for index in market.indices:
            quote = market.quotes.get(index.symbol)
            if quote is None:
                rows.append(f"{index.name:<14}{'-':>14}")
                continue
            rows.append(
                f"{index.name:<14}{format_money(quote.close):>14}"
                f"{format_money(quote.change, signed=True):>12}"
                f"{format_pct(quote.change_percent, signed=True):>10}"
            )

        middle = (len(rows) + 1) // 2
        return side_by_side(
            box("Market", rows[:middle], half),
            box("Market", rows[middle:], half),
            gap=2,
        )

    def render_profile(self, profile: Profile) -> list[str]:
        """Render the profile overview table (portfolios + cash + TOTAL)."""
        width = max(self.width, table_width(PROFILE_COLUMNS))
        snapshot = profile.snapshot
        if not snapshot.refreshed:
            return box(f"Profile: {profile.name}", [LOADING], width)

        status = snapshot.status
        rows = []
        for portfolio, portfolio_snapshot in zip(profile.portfolios, snapshot.portfolios):
            p = portfolio_snapshot.status
            rows.append([
                portfolio.name,
                format_money(p.value),
                format_money(p.regular_market_change, signed=True),
                format_pct(p.regular_market_change_percent, signed=True),
                format_money(p.unrealized, signed=True),
                format_pct(p.unrealized_percent, signed=True),
                format_pct(status.allocation.get(portfolio.name, 0.0)),
                format_pct(profile.target_allocation.get(portfolio.name, 0.0)),
            ])
        rows.append([
            "Cash",
            format_money(profile.cash),
            "",
            "",
            "",
            "",
            format_pct(status.allocation.get(CASH_KEY, 0.0)),
            format_pct(profile.target_allocation.get(CASH_KEY, 0.0)),
        ])
        footer = [
            "TOTAL",
            format_money(status.value),
            format_money(status.regular_market_change, signed=True),
            format_pct(status.regular_market_change_percent, signed=True),
            format_money(status.unrealized, signed=True),
            format_pct(status.unrealized_percent, signed=True),
            format_pct(100.0 if status.value else 0.0),
            format_pct(sum(profile.target_allocation.values())),
        ]
        return [f"Profile: {profile.name}"] + table(PROFILE_COLUMNS, rows, footer)

    def render_portfolio(self, portfolio: Portfolio) -> list[str]:
        """Render the holdings table of one portfolio."""
        width = max(self.width, table_width(PORTFOLIO_COLUMNS))
        snapshot = portfolio.snapshot
        if not snapshot.refreshed:
            return box(f"Portfolio: {portfolio.name}", [LOADING], width)

        status = snapshot.status
        rows = []
        for symbol in portfolio.symbols:
            holding = snapshot.holdings[symbol]
            quote = holding.quote
            rows.append([
                symbol,
                holding.asset.subclass.value,
                format_number(holding.quantity),
                format_money(holding.price),
                format_money(quote.change if quote else None, signed=True),
                format_pct(quote.change_percent if quote else None, signed=True),
                format_money(holding.status.value),
                format_money(holding.value_change, signed=True),
                format_money(holding.status.unrealized, signed=True),
                format_pct(holding.status.unrealized_percent, signed=True),
                format_pct(status.allocation.get(symbol, 0.0)),
                format_pct(portfolio.target_allocation.get(symbol, 0.0)),
            ])
        footer = [
            "TOTAL",
            "",
            "",
            "",
            "",
            format_pct(status.regular_market_change_percent, signed=True),
            format_money(status.value),
            format_money(status.regular_market_change, signed=True),
            format_money(status.unrealized, signed=True),
            format_pct(status.unrealized_percent, signed=True),
            format_pct(100.0 if status.value else 0.0),
            format_pct(portfolio.total_target_allocation),
        ]
        return [f"Portfolio: {portfolio.name}"] + table(PORTFOLIO_COLUMNS, rows, footer)

    def render_performance(self, performance: Performance) -> list[str]:
        """Render performance and trailing returns tables (portfolio + benchmark)."""
        width = max(self.width, table_width(PERFORMANCE_COLUMNS))
        if not performance.ready:
            return box(f"Performance: {performance.name}", [COMPUTING], width)

        results = [performance.result, performance.benchmark]
        start = performance.start_date.isoformat() if performance.start_date else "-"

        lines = [f"Performance: {performance.name} vs {performance.benchmark_symbol}"]
        lines.extend(table(
            PERFORMANCE_COLUMNS,
            [self._performance_row(result, start) for result in results],
        ))
        lines.append("")
        lines.append("Trailing Returns")
        lines.extend(table(RETURNS_COLUMNS, [self._returns_row(result) for result in results]))
        return lines

    def _performance_row(self, result: PerformanceResult, start: str) -> list[str]:
        return [
            result.name,
            start,
            format_money(result.initial_balance),
            format_money(result.final_balance),
            format_pct(result.cagr),
            format_pct(result.stdev),
            format_pct(result.best_year),
            format_pct(result.worst_year),
            format_pct(result.max_drawdown),
            f"{result.sharpe_ratio:.2f}",
        ]

    def _returns_row(self, result: PerformanceResult) -> list[str]:
        returns = result.returns.to_dict()
        return [result.name] + [format_pct(returns[label]) for label in RETURN_LABELS]

    def render_help(self, profile: Profile) -> list[str]:
        lines = list(HELP_LINES)
        lines.append("")
        for i, portfolio in enumerate(profile.portfolios[:9], start=1):
            lines.append(f"{i}      {portfolio.name}")
        return box("Help", lines, 60)

    def render_report(self, performance: Performance) -> str:
        """Render a one-shot performance report (no live panels)."""
        lines = self.render_performance(performance)
        if performance.ready:
            lines.append("")
            lines.append("Yearly Returns")
            years = list(performance.result.yearly_returns)
            columns = [("Portfolio", 16)] + [(str(year), 9) for year in years[-10:]]
            rows = [
                [result.name] + [format_pct(result.yearly_returns.get(year)) for year in years[-10:]]
                for result in (performance.result, performance.benchmark)
            ]
            lines.extend(table(columns, rows))
        return "\n".join(lines)


__all__ = ["DashboardRenderer", "LOADING", "COMPUTING"]
