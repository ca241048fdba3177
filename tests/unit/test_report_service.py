"""
Unit tests for ReportService.

Tests cover:
- Statement signs for every movement type
- Statement date filtering with date-only bounds
- Investment summary valuation
- Per-investment movement history
- Tax report aggregation
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from miubank.core.exceptions import AccountNotFoundError, NotFoundError
from miubank.core.timezone import now_brt
from miubank.domain.models import AccountType, AssetType, MovementType
from miubank.services import ReportService


CORRENTE = AccountType.CORRENTE
INVESTIMENTO = AccountType.INVESTIMENTO


# =============================================================================
# STATEMENT TESTS
# =============================================================================


class TestAccountStatement:
    """Tests for get_account_statement."""

    def test_signed_lines_reconcile_with_balance(
        self,
        report_service: ReportService,
        transfer_service,
        user_factory,
    ):
        """
        GIVEN a user with a deposit, a withdrawal, an internal transfer and an
              external transfer in and out of CORRENTE
        WHEN the CORRENTE statement is requested
        THEN every line has the right sign and the signed total equals the balance
        """
        alice = user_factory(cpf="100.000.000-01")
        bob = user_factory(cpf="200.000.000-02")
        transfer_service.deposit(alice.user_id, Decimal("1000.00"))
        transfer_service.deposit(bob.user_id, Decimal("300.00"))
        transfer_service.withdraw(alice.user_id, Decimal("100.00"))
        transfer_service.transfer_internal(alice.user_id, Decimal("200.00"), CORRENTE, INVESTIMENTO)
        transfer_service.transfer_external(alice.user_id, "200.000.000-02", Decimal("100.00"))
        transfer_service.transfer_external(bob.user_id, "100.000.000-01", Decimal("50.00"))

        statement = report_service.get_account_statement(alice.user_id, CORRENTE)

        signed = [(line.movement_type, line.signed_amount) for line in statement.lines]
        assert signed == [
            (MovementType.DEPOSITO, Decimal("1000.00")),
            (MovementType.SAQUE, Decimal("-100.00")),
            (MovementType.TRANSFERENCIA_INTERNA, Decimal("-200.00")),
            (MovementType.TRANSFERENCIA_EXTERNA, Decimal("-100.50")),
            (MovementType.TRANSFERENCIA_EXTERNA, Decimal("50.00")),
        ]
        assert sum(amount for _, amount in signed) == statement.current_balance
        assert statement.current_balance == Decimal("649.50")
        assert statement.total_credits == Decimal("1050.00")
        assert statement.total_debits == Decimal("400.50")

    def test_trading_lines_on_investimento(
        self,
        report_service: ReportService,
        trading_service,
        investor_factory,
        stock_factory,
        set_price,
    ):
        """
        GIVEN an investor who buys and sells a stock
        WHEN the INVESTIMENTO statement is requested
        THEN the transfer in and the sale are credits and the purchase is a debit
        """
        user = investor_factory(Decimal("2000.00"))
        stock = stock_factory(price=Decimal("100.00"))
        purchase = trading_service.buy_asset(user.user_id, stock.asset_id, Decimal("10"))
        set_price(stock.asset_id, Decimal("110.00"))
        trading_service.sell_asset(user.user_id, purchase.investment.investment_id)

        statement = report_service.get_account_statement(user.user_id, INVESTIMENTO)

        signed = [(line.movement_type, line.signed_amount) for line in statement.lines]
        assert signed == [
            (MovementType.TRANSFERENCIA_INTERNA, Decimal("2000.00")),
            (MovementType.COMPRA_ATIVO, Decimal("-1010.00")),
            (MovementType.VENDA_ATIVO, Decimal("1085.00")),
        ]
        assert sum(amount for _, amount in signed) == statement.current_balance

    def test_date_only_end_bound_includes_today(
        self, report_service: ReportService, funded_user_factory
    ):
        """
        GIVEN a deposit made today
        WHEN the statement is requested with today's date as end_date
        THEN the deposit is included
        """
        user = funded_user_factory(Decimal("10.00"))
        today = now_brt().date()

        statement = report_service.get_account_statement(
            user.user_id, CORRENTE, start_date=today, end_date=today.isoformat()
        )

        assert len(statement.lines) == 1

    def test_period_before_activity_is_empty(
        self, report_service: ReportService, funded_user_factory
    ):
        """
        GIVEN a deposit made today
        WHEN the statement covers only yesterday
        THEN no lines are returned but the current balance is still reported
        """
        user = funded_user_factory(Decimal("10.00"))
        yesterday = now_brt().date() - timedelta(days=1)

        statement = report_service.get_account_statement(
            user.user_id, CORRENTE, start_date=yesterday, end_date=yesterday
        )

        assert statement.lines == []
        assert statement.current_balance == Decimal("10.00")

    def test_filter_by_movement_type(
        self, report_service: ReportService, transfer_service, funded_user_factory
    ):
        """
        GIVEN a deposit and a withdrawal on CORRENTE
        WHEN the statement is requested for SAQUE only
        THEN only the withdrawal is listed
        """
        user = funded_user_factory(Decimal("100.00"))
        transfer_service.withdraw(user.user_id, Decimal("30.00"))

        statement = report_service.get_account_statement(
            user.user_id, CORRENTE, movement_types=[MovementType.SAQUE]
        )

        assert [line.signed_amount for line in statement.lines] == [Decimal("-30.00")]
        assert statement.current_balance == Decimal("70.00")

    def test_unknown_account(self, report_service: ReportService):
        """
        GIVEN no user
        WHEN a statement is requested
        THEN AccountNotFoundError is raised
        """
        with pytest.raises(AccountNotFoundError):
            report_service.get_account_statement("missing", CORRENTE)


# =============================================================================
# INVESTMENT SUMMARY TESTS
# =============================================================================


class TestInvestmentSummary:
    """Tests for get_investment_summary."""

    def test_open_positions_valued_at_current_price(
        self,
        report_service: ReportService,
        trading_service,
        investor_factory,
        stock_factory,
        fixed_income_factory,
        set_price,
    ):
        """
        GIVEN an open stock position of 10 at 100.00 now priced 90.00
              and a sold CDB position
        WHEN the summary is requested
        THEN only the stock is listed with a 100.00 unrealized loss
        """
        user = investor_factory(Decimal("5000.00"))
        stock = stock_factory(price=Decimal("100.00"), symbol="XPTO3")
        cdb = fixed_income_factory(price=Decimal("1000.00"))
        trading_service.buy_asset(user.user_id, stock.asset_id, Decimal("10"))
        cdb_purchase = trading_service.buy_asset(user.user_id, cdb.asset_id, Decimal("1"))
        trading_service.sell_asset(user.user_id, cdb_purchase.investment.investment_id)
        set_price(stock.asset_id, Decimal("90.00"))

        [position] = report_service.get_investment_summary(user.user_id)

        assert position.asset_label == "XPTO3"
        assert position.asset_type == AssetType.STOCK
        assert position.quantity == Decimal("10")
        assert position.current_price == Decimal("90.00")
        assert position.current_value == Decimal("900.00")
        assert position.profit_or_loss == Decimal("-100.00")

    def test_no_investments(self, report_service: ReportService, user_factory):
        """
        GIVEN a user without investments
        WHEN the summary is requested
        THEN it is empty
        """
        user = user_factory()

        assert report_service.get_investment_summary(user.user_id) == []


# =============================================================================
# INVESTMENT HISTORY TESTS
# =============================================================================


class TestInvestmentHistory:
    """Tests for get_investment_history."""

    def test_purchase_and_partial_sales(
        self,
        report_service: ReportService,
        trading_service,
        investor_factory,
        stock_factory,
        set_price,
    ):
        """
        GIVEN 10 shares bought at 100.00 and sold in lots of 4 and 6 at 110.00
        WHEN the investment history is requested
        THEN it lists the purchase as a debit and both net sales as credits
        """
        user = investor_factory(Decimal("2000.00"))
        stock = stock_factory(price=Decimal("100.00"))
        purchase = trading_service.buy_asset(user.user_id, stock.asset_id, Decimal("10"))
        investment_id = purchase.investment.investment_id
        set_price(stock.asset_id, Decimal("110.00"))
        trading_service.sell_asset(user.user_id, investment_id, Decimal("4"))
        trading_service.sell_asset(user.user_id, investment_id)

        history = report_service.get_investment_history(user.user_id, investment_id)

        assert [(line.movement_type, line.signed_amount) for line in history] == [
            (MovementType.COMPRA_ATIVO, Decimal("-1010.00")),
            (MovementType.VENDA_ATIVO, Decimal("434.00")),
            (MovementType.VENDA_ATIVO, Decimal("651.00")),
        ]

    def test_other_users_investment_is_not_found(
        self,
        report_service: ReportService,
        trading_service,
        investor_factory,
        stock_factory,
    ):
        """
        GIVEN an investment owned by another user
        WHEN its history is requested
        THEN NotFoundError is raised
        """
        owner = investor_factory(Decimal("1000.00"))
        other = investor_factory(Decimal("1000.00"))
        stock = stock_factory(price=Decimal("10.00"))
        purchase = trading_service.buy_asset(owner.user_id, stock.asset_id, Decimal("1"))

        with pytest.raises(NotFoundError):
            report_service.get_investment_history(
                other.user_id, purchase.investment.investment_id
            )


# =============================================================================
# TAX REPORT TESTS
# =============================================================================


class TestTaxReport:
    """Tests for get_tax_report."""

    def test_totals_grouped_by_asset_type(
        self,
        report_service: ReportService,
        trading_service,
        investor_factory,
        stock_factory,
        fixed_income_factory,
        set_price,
    ):
        """
        GIVEN a stock sold with 200.00 profit and a CDB sold with 100.00 profit
        WHEN the tax report is requested
        THEN stock tax is 30.00, CDB tax is 22.00 and totals add up
        """
        user = investor_factory(Decimal("10000.00"))
        stock = stock_factory(price=Decimal("100.00"))
        cdb = fixed_income_factory(price=Decimal("1000.00"))
        stock_buy = trading_service.buy_asset(user.user_id, stock.asset_id, Decimal("10"))
        cdb_buy = trading_service.buy_asset(user.user_id, cdb.asset_id, Decimal("1"))
        set_price(stock.asset_id, Decimal("120.00"))
        set_price(cdb.asset_id, Decimal("1100.00"))
        trading_service.sell_asset(user.user_id, stock_buy.investment.investment_id)
        trading_service.sell_asset(user.user_id, cdb_buy.investment.investment_id)

        report = report_service.get_tax_report(user.user_id)

        by_type = {b.asset_type: b for b in report.by_asset_type}
        assert by_type[AssetType.STOCK].tax_paid == Decimal("30.00")
        assert by_type[AssetType.STOCK].realized_profit == Decimal("170.00")
        assert by_type[AssetType.STOCK].closed_positions == 1
        assert by_type[AssetType.CDB].tax_paid == Decimal("22.00")
        assert by_type[AssetType.CDB].realized_profit == Decimal("78.00")
        assert report.total_tax_paid == Decimal("52.00")
        assert report.total_realized_profit == Decimal("248.00")

    def test_empty_report(self, report_service: ReportService, user_factory):
        """
        GIVEN a user who never traded
        WHEN the tax report is requested
        THEN totals are zero and there are no breakdowns
        """
        user = user_factory()

        report = report_service.get_tax_report(user.user_id)

        assert report.total_tax_paid == Decimal("0")
        assert report.by_asset_type == []
