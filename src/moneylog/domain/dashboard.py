"""Dashboard presentation adapter.

Holds the dashboard state as an immutable snapshot and pushes every new
snapshot to subscribers. A load either applies all of its results or none.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from moneylog.database.base import Database
from moneylog.domain.entities import (
    CategoryStatistic,
    ChartDataPoint,
    Statistics,
    StatisticsPeriod,
    Transaction,
    TransactionType,
)
from moneylog.domain.events import TRANSACTIONS_CHANGED, Event, EventBus
from moneylog.domain.statistics import StatisticsService, compute_chart_series
from moneylog.domain.transaction import RECENT_TRANSACTIONS_LIMIT

logger = logging.getLogger(__name__)

Listener = Callable[["DashboardState"], None]


@dataclass(frozen=True)
class DashboardState:
    """Everything the dashboard screen renders."""

    time_frame: StatisticsPeriod = StatisticsPeriod.MONTH
    selected_type: TransactionType = TransactionType.EXPENSE
    total_balance: Decimal = Decimal("0")
    period_income: Decimal = Decimal("0")
    period_expenses: Decimal = Decimal("0")
    recent_transactions: tuple[Transaction, ...] = ()
    statistics: Optional[Statistics] = None
    category_breakdown: tuple[CategoryStatistic, ...] = ()
    chart_data: tuple[ChartDataPoint, ...] = ()
    daily_average: Decimal = Decimal("0")
    percentage_change: Decimal = Decimal("0")
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def period_net_change(self) -> Decimal:
        return self.period_income - self.period_expenses

    @property
    def is_positive_period(self) -> bool:
        return self.period_net_change >= 0


class Dashboard:
    """Loads dashboard figures from the store and publishes state changes."""

    def __init__(
        self,
        db: Database,
        event_bus: Optional[EventBus] = None,
        time_frame: StatisticsPeriod = StatisticsPeriod.MONTH,
    ):
        """Initialize the dashboard.

        Args:
            db: Database instance
            event_bus: Optional bus; the dashboard reloads on transaction changes
            time_frame: Initial statistics time frame
        """
        self.db = db
        self.statistics_service = StatisticsService(db)
        self._state = DashboardState(time_frame=time_frame)
        self._listeners: list[Listener] = []
        self._transactions: list[Transaction] = []
        self._today: Optional[date] = None
        self._unsubscribe_bus = None
        if event_bus is not None:
            self._unsubscribe_bus = event_bus.subscribe(TRANSACTIONS_CHANGED, self._on_transactions_changed)

    @property
    def state(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every new state. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Stop listening to the event bus."""
        if self._unsubscribe_bus is not None:
            self._unsubscribe_bus()
            self._unsubscribe_bus = None

    def _set_state(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def load(self, today: Optional[date] = None) -> DashboardState:
        """Reload every dashboard figure.

        On failure the previous figures are kept and ``error`` is set.
        """
        if today is None:
            today = date.today()
        time_frame = self._state.time_frame
        self._set_state(is_loading=True, error=None)

        try:
            balance = self.db.total_balance()
            transactions = self.db.list_transactions()
            stats = self.statistics_service.get_statistics_for(time_frame, reference=today)
        except Exception as exc:
            logger.exception("Dashboard load failed")
            self._set_state(is_loading=False, error=str(exc) or exc.__class__.__name__)
            return self._state

        self._transactions = transactions
        self._today = today
        self._set_state(
            total_balance=balance,
            recent_transactions=tuple(transactions[:RECENT_TRANSACTIONS_LIMIT]),
            statistics=stats,
            period_income=stats.total_income,
            period_expenses=stats.total_expenses,
            category_breakdown=stats.breakdown_for(TransactionType.EXPENSE),
            daily_average=stats.daily_averages.average_expense,
            percentage_change=stats.percentage_change,
            chart_data=compute_chart_series(transactions, self._state.selected_type, today),
            is_loading=False,
            error=None,
        )
        return self._state

    def refresh(self) -> DashboardState:
        return self.load(today=self._today)

    def change_period(self, time_frame: StatisticsPeriod) -> DashboardState:
        """Switch the statistics time frame and reload."""
        if time_frame is self._state.time_frame:
            return self._state
        self._set_state(time_frame=time_frame)
        return self.load(today=self._today)

    def select_type(self, kind: TransactionType) -> DashboardState:
        """Switch the charted transaction kind; the chart is rebuilt from loaded data."""
        if kind is self._state.selected_type:
            return self._state
        today = self._today or date.today()
        self._set_state(
            selected_type=kind,
            chart_data=compute_chart_series(self._transactions, kind, today),
        )
        return self._state

    def _on_transactions_changed(self, event: Event) -> None:
        logger.debug("Reloading dashboard after %s", event.name)
        self.refresh()
