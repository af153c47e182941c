"""Tests for Holding and Portfolio."""

import threading
from datetime import date

import pytest

from src.business.config import InvalidAllocationError, PortfolioConfig
from src.business.portfolio import Holding, Portfolio
from src.data.providers import (
    DataProviderError,
    HistoricalDataUnavailableError,
    QuoteFetchFailedError,
    QuoteUnavailableError,
)
from tests.conftest import make_daily_bars, make_quote


def core_config(**overrides) -> PortfolioConfig:
    data = {
        "name": "Core",
        "holdings": [
            {"symbol": "VTI", "allocation": 60, "quantity": 10, "basis": 1500},
            {"symbol": "BND", "allocation": 40, "quantity": 20, "basis": 1600},
        ],
    }
    data.update(overrides)
    return PortfolioConfig.from_dict(data)


class TestHolding:
    """Tests for Holding."""

    def test_status_before_refresh(self):
        holding = Holding.create("VTI", quantity=10, cost_basis=1500)
        holding.refresh_status()

        assert holding.quote is None
        assert holding.status.value == 0.0
        assert holding.status.unrealized == -1500.0

    def test_refresh(self, fake_provider):
        holding = Holding.create("VTI", quantity=10, cost_basis=1500)
        holding.refresh(fake_provider)

        assert holding.status.value == pytest.approx(2000.0)
        assert holding.status.unrealized == pytest.approx(500.0)
        assert holding.status.unrealized_percent == pytest.approx(500 / 1500 * 100)
        assert holding.value_change == pytest.approx(20.0)

    def test_zero_cost_basis(self, fake_provider):
        holding = Holding.create("VTI", quantity=10)
        holding.refresh(fake_provider)

        assert holding.status.unrealized == pytest.approx(2000.0)
        assert holding.status.unrealized_percent == 0.0

    def test_refresh_quote_unavailable(self, fake_provider):
        holding = Holding.create("XYZ", quantity=1)
        with pytest.raises(QuoteUnavailableError):
            holding.refresh_quote(fake_provider)
        assert holding.quote is None

    def test_historical_quote_on_trading_day(self, fake_provider):
        fake_provider.daily["VTI"] = make_daily_bars("VTI", date(2022, 1, 3), 5, price=210.0)
        holding = Holding.create("VTI")

        bar = holding.historical_quote_on(fake_provider, date(2022, 1, 4))

        assert bar.timestamp.date() == date(2022, 1, 4)
        assert bar.close == 210.0

    def test_historical_quote_on_weekend(self, fake_provider):
        fake_provider.daily["VTI"] = make_daily_bars("VTI", date(2022, 1, 3), 10)
        holding = Holding.create("VTI")

        with pytest.raises(HistoricalDataUnavailableError):
            holding.historical_quote_on(fake_provider, date(2022, 1, 8))

    def test_clone_is_independent(self, fake_provider):
        holding = Holding.create("VTI", quantity=10)
        holding.refresh(fake_provider)
        copy = holding.clone()
        copy.quantity = 99

        assert holding.quantity == 10
        assert copy.asset == holding.asset


class TestPortfolioLoad:
    """Tests for Portfolio.load validation."""

    def test_load(self):
        portfolio = Portfolio.load(core_config())

        assert portfolio.name == "Core"
        assert portfolio.symbols == ["VTI", "BND"]
        assert portfolio.cost_basis == 3100
        assert portfolio.target_allocation == {"VTI": 60, "BND": 40}
        assert portfolio.has_target_allocation

    def test_zero_total_allowed(self):
        config = core_config(
            holdings=[{"symbol": "VTI", "quantity": 1}, {"symbol": "BND", "quantity": 1}]
        )
        portfolio = Portfolio.load(config)

        assert portfolio.total_target_allocation == 0
        assert not portfolio.has_target_allocation

    def test_fractional_total_allowed(self):
        config = core_config(
            holdings=[
                {"symbol": "VTI", "allocation": 33.3},
                {"symbol": "BND", "allocation": 33.3},
                {"symbol": "VNQ", "allocation": 33.4},
            ]
        )
        assert Portfolio.load(config).total_target_allocation == pytest.approx(100)

    @pytest.mark.parametrize("allocations", [(50, 40), (60, 60), (99.5, 0)])
    def test_invalid_total(self, allocations):
        config = core_config(
            holdings=[
                {"symbol": "VTI", "allocation": allocations[0]},
                {"symbol": "BND", "allocation": allocations[1]},
            ]
        )
        with pytest.raises(InvalidAllocationError):
            Portfolio.load(config)

    def test_duplicate_symbol(self):
        config = core_config(
            holdings=[
                {"symbol": "VTI", "allocation": 50},
                {"symbol": "vti", "allocation": 50},
            ]
        )
        with pytest.raises(InvalidAllocationError, match="duplicate"):
            Portfolio.load(config)


class TestPortfolioRefresh:
    """Tests for Portfolio.refresh and status aggregation."""

    def test_refresh(self, fake_provider):
        portfolio = Portfolio.load(core_config())
        portfolio.refresh(fake_provider)
        status = portfolio.status

        assert fake_provider.quote_calls == [["VTI", "BND"]]
        assert status.value == pytest.approx(3500.0)
        # VTI +2 x 10, BND -0.5 x 20
        assert status.regular_market_change == pytest.approx(10.0)
        assert status.regular_market_change_percent == pytest.approx(10 / 3490 * 100)
        assert status.unrealized == pytest.approx(400.0)
        assert status.unrealized_percent == pytest.approx(400 / 3100 * 100)
        assert status.allocation["VTI"] == pytest.approx(2000 / 3500 * 100)
        assert status.allocation["BND"] == pytest.approx(1500 / 3500 * 100)
        assert sum(status.allocation.values()) == pytest.approx(100.0)
        assert portfolio.refreshed

    def test_zero_value_gives_zero_allocations(self, fake_provider):
        fake_provider.quotes["VTI"] = make_quote("VTI", 0.0)
        fake_provider.quotes["BND"] = make_quote("BND", 0.0)
        portfolio = Portfolio.load(core_config())
        portfolio.refresh(fake_provider)

        assert portfolio.status.value == 0.0
        assert portfolio.status.allocation == {"VTI": 0.0, "BND": 0.0}
        assert portfolio.status.regular_market_change_percent == 0.0

    def test_missing_quote_applies_nothing(self, fake_provider):
        del fake_provider.quotes["BND"]
        portfolio = Portfolio.load(core_config())

        with pytest.raises(QuoteFetchFailedError, match="BND"):
            portfolio.refresh(fake_provider)

        assert portfolio.holdings["VTI"].quote is None
        assert portfolio.status.value == 0.0
        assert not portfolio.refreshed

    def test_provider_error(self, fake_provider):
        fake_provider.fail_quotes = True
        portfolio = Portfolio.load(core_config())

        with pytest.raises(QuoteFetchFailedError) as exc_info:
            portfolio.refresh(fake_provider)
        assert isinstance(exc_info.value.__cause__, DataProviderError)

    def test_readers_see_previous_snapshot_mid_refresh(self, fake_provider, monkeypatch):
        portfolio = Portfolio.load(core_config())
        portfolio.refresh(fake_provider)
        before = portfolio.snapshot
        fake_provider.quotes["VTI"] = make_quote("VTI", 400.0, 4.0)

        paused, resume = threading.Event(), threading.Event()
        original = Holding.refresh_status

        def refresh_status(holding):
            original(holding)
            if not paused.is_set():
                paused.set()
                resume.wait(5)

        monkeypatch.setattr(Holding, "refresh_status", refresh_status)
        worker = threading.Thread(target=portfolio.refresh, args=(fake_provider,))
        worker.start()
        assert paused.wait(5)

        # first holding repriced, nothing published yet
        snapshot = portfolio.snapshot
        assert snapshot is before
        assert snapshot.status.value == pytest.approx(3500.0)
        assert sum(h.status.value for h in snapshot.holdings.values()) == pytest.approx(
            snapshot.status.value
        )

        resume.set()
        worker.join(5)

        assert portfolio.holdings["VTI"].status.value == pytest.approx(4000.0)
        assert portfolio.status.value == pytest.approx(5500.0)
        assert before.holdings["VTI"].status.value == pytest.approx(2000.0)

    def test_clone_is_deep(self, fake_provider):
        portfolio = Portfolio.load(core_config())
        portfolio.refresh(fake_provider)
        copy = portfolio.clone()

        copy.holdings["VTI"].quantity = 0
        copy.target_allocation["VTI"] = 0

        assert portfolio.holdings["VTI"].quantity == 10
        assert portfolio.target_allocation["VTI"] == 60
        assert copy.status == portfolio.status

    def test_add_holding(self):
        portfolio = Portfolio("SPY")
        portfolio.add_holding(Holding.create("SPY", target_allocation=100))

        assert portfolio.symbols == ["SPY"]
        assert portfolio.total_target_allocation == 100
        assert portfolio.cost_basis == 0
