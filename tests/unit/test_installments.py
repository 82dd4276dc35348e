"""Unit tests for installment plan generation"""

import pytest
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from credit_plans.domain.exceptions import InvalidPlanRequest
from credit_plans.domain.installments import build_plan
from credit_plans.domain.models import (
    AmountDownPayment,
    InstallmentLabel,
    InterestKind,
    PercentDownPayment,
    PlanRequest,
)

D = Decimal


def amounts(result):
    return [inst.amount for inst in result.installments]


def test_build_plan_even_split_last_absorbs_residual(base_request: PlanRequest):
    """1000.00 over 3 -> 333.33, 333.33, 333.34"""
    result = build_plan(base_request)

    assert amounts(result) == [D("333.33"), D("333.33"), D("333.34")]
    assert result.total_interest == D("0")
    assert result.principal_financed == D("1000.00")
    assert result.total_payable == D("1000.00")
    assert all(inst.label == InstallmentLabel.REGULAR for inst in result.installments)


def test_build_plan_dates(base_request: PlanRequest):
    """Net 15 then every 15 days, local midnights in the business timezone"""
    result = build_plan(base_request)

    assert [inst.due_date for inst in result.installments] == [
        datetime(2025, 1, 16, 6, 0, tzinfo=timezone.utc),
        datetime(2025, 1, 31, 6, 0, tzinfo=timezone.utc),
        datetime(2025, 2, 15, 6, 0, tzinfo=timezone.utc),
    ]
    assert [inst.number for inst in result.installments] == [1, 2, 3]


def test_build_plan_zero_days_to_first_due(base_request: PlanRequest):
    """Net 0: first installment falls on the issue date"""
    result = build_plan(replace(base_request, days_to_first_due=0))
    assert result.installments[0].due_date == datetime(2025, 1, 1, 6, 0, tzinfo=timezone.utc)


def test_build_plan_percent_down_payment(base_request: PlanRequest):
    """20% down: row 1 is 200.00, the remaining 800.00 split over 2 rows"""
    request = replace(base_request, down_payment=PercentDownPayment(D("20")))
    result = build_plan(request)

    assert amounts(result) == [D("200.00"), D("400.00"), D("400.00")]
    assert result.installments[0].label == InstallmentLabel.DOWN_PAYMENT
    assert result.installments[0].number == 1
    assert [inst.label for inst in result.installments[1:]] == [InstallmentLabel.REGULAR] * 2
    assert result.principal_financed == D("800.00")
    assert result.total_payable == D("1000.00")
    assert result.down_payment == result.installments[0]


def test_build_plan_down_payment_dates(base_request: PlanRequest):
    """Down payment at Net X, regular rows start one cadence later"""
    request = replace(base_request, down_payment=AmountDownPayment(D("100")))
    result = build_plan(request)

    assert [inst.due_date for inst in result.installments] == [
        datetime(2025, 1, 16, 6, 0, tzinfo=timezone.utc),
        datetime(2025, 1, 31, 6, 0, tzinfo=timezone.utc),
        datetime(2025, 2, 15, 6, 0, tzinfo=timezone.utc),
    ]
    assert amounts(result) == [D("100.00"), D("450.00"), D("450.00")]


@pytest.mark.parametrize(
    "down_payment",
    [AmountDownPayment(D("0")), AmountDownPayment(D("-50")), PercentDownPayment(D("0")), PercentDownPayment(D("0.0001"))],
)
def test_build_plan_non_positive_down_payment_is_absent(base_request: PlanRequest, down_payment):
    """A down payment resolving to <= 0 produces no down-payment row"""
    result = build_plan(replace(base_request, down_payment=down_payment))

    assert len(result.installments) == 3
    assert result.down_payment is None
    assert amounts(result) == [D("333.33"), D("333.33"), D("333.34")]


def test_build_plan_down_payment_only(base_request: PlanRequest):
    """A single installment with a down payment leaves no regular rows"""
    request = replace(base_request, installment_count=1, down_payment=AmountDownPayment(D("250")))
    result = build_plan(request)

    assert len(result.installments) == 1
    assert result.installments[0].label == InstallmentLabel.DOWN_PAYMENT
    assert result.total_interest == D("0")
    assert result.principal_financed == D("750.00")
    assert result.total_payable == D("250.00")


def test_build_plan_down_payment_exceeds_principal(base_request: PlanRequest):
    request = replace(base_request, down_payment=AmountDownPayment(D("1000.01")))
    with pytest.raises(InvalidPlanRequest):
        build_plan(request)


def test_build_plan_simple_interest(base_request: PlanRequest):
    """Equal capital 333.33 plus 2% on the declining balance"""
    request = replace(base_request, interest_kind=InterestKind.SIMPLE, interest_rate_per_period=D("0.02"))
    result = build_plan(request)

    # balances: 1000.00, 666.67, 333.34
    assert amounts(result) == [D("353.33"), D("346.66"), D("340.00")]
    assert result.total_interest == D("40.00")
    # 353.33 + 346.66 + 340.00; capital repaid is 3 * 333.33 = 999.99
    assert result.total_payable == D("1039.99")
    drift = abs(result.total_payable - (result.principal_financed + result.total_interest))
    assert drift == D("0.01")


def test_build_plan_simple_interest_drift_bounded():
    """Drift never exceeds one cent per regular installment"""
    request = PlanRequest(
        principal_total=D("100.00"),
        issue_date=date(2025, 1, 1),
        days_to_first_due=30,
        days_between_installments=30,
        installment_count=6,
        interest_kind=InterestKind.SIMPLE,
        interest_rate_per_period=D("0.015"),
    )
    result = build_plan(request)

    assert sum(amounts(result)) == result.total_payable
    drift = abs(result.total_payable - (result.principal_financed + result.total_interest))
    assert drift <= D("0.01") * 6


def test_build_plan_compound_interest():
    """Fixed installment traced period by period"""
    request = PlanRequest(
        principal_total=D("1000.00"),
        issue_date=date(2025, 1, 1),
        days_to_first_due=30,
        days_between_installments=30,
        installment_count=2,
        interest_kind=InterestKind.COMPOUND,
        interest_rate_per_period=D("0.05"),
    )
    result = build_plan(request)

    # A = round2(1000 * 0.05 / (1 - 1.05^-2)) = 537.80
    assert amounts(result) == [D("537.80"), D("537.80")]
    # 1000.00 * 0.05 = 50.00; balance 1000.00 - 487.80 = 512.20; 512.20 * 0.05 = 25.61
    assert result.total_interest == D("75.61")
    assert result.total_payable == D("1075.60")
    assert result.total_payable == sum(amounts(result))


def test_build_plan_compound_zero_rate_falls_back_to_even_split(base_request: PlanRequest):
    request = replace(base_request, interest_kind=InterestKind.COMPOUND, interest_rate_per_period=D("0"))
    result = build_plan(request)

    assert amounts(result) == [D("333.33"), D("333.33"), D("333.34")]
    assert result.total_interest == D("0")


def test_build_plan_none_ignores_rate(base_request: PlanRequest):
    """Rate is ignored, even negative, when there is no interest"""
    result = build_plan(replace(base_request, interest_rate_per_period=D("-1")))
    assert result.total_payable == D("1000.00")


@pytest.mark.parametrize("kind", [InterestKind.NONE, InterestKind.SIMPLE, InterestKind.COMPOUND])
@pytest.mark.parametrize("count", [1, 2, 5, 12])
def test_build_plan_schedule_properties(base_request: PlanRequest, kind, count):
    """Numbers are 1..n, dates strictly increase, totals are the plain sum"""
    request = replace(
        base_request,
        principal_total=D("1234.57"),
        installment_count=count,
        interest_kind=kind,
        interest_rate_per_period=D("0.03"),
        down_payment=PercentDownPayment(D("15")),
    )
    result = build_plan(request)

    assert [inst.number for inst in result.installments] == list(range(1, count + 1))
    dates = [inst.due_date for inst in result.installments]
    assert all(a < b for a, b in zip(dates, dates[1:]))
    assert sum(amounts(result)) == result.total_payable
    labels = [inst.label for inst in result.installments]
    assert labels.count(InstallmentLabel.DOWN_PAYMENT) == 1
    assert labels[0] == InstallmentLabel.DOWN_PAYMENT


def test_build_plan_is_deterministic(base_request: PlanRequest):
    request = replace(base_request, interest_kind=InterestKind.COMPOUND, interest_rate_per_period=D("0.025"))
    assert build_plan(request) == build_plan(request)


@pytest.mark.parametrize(
    "changes",
    [
        {"installment_count": 0},
        {"days_between_installments": 0},
        {"days_between_installments": -15},
        {"days_to_first_due": -1},
        {"principal_total": D("0")},
        {"interest_kind": InterestKind.SIMPLE, "interest_rate_per_period": D("-0.01")},
        {"interest_kind": InterestKind.COMPOUND, "interest_rate_per_period": D("-0.01")},
    ],
)
def test_build_plan_invalid_request(base_request: PlanRequest, changes):
    """Invalid input fails before any row is produced"""
    with pytest.raises(InvalidPlanRequest):
        build_plan(replace(base_request, **changes))


def test_build_plan_compound_rate_below_precision_falls_back_to_even_split(base_request: PlanRequest):
    """A rate too small to move (1+i)^-n at working precision acts like zero"""
    request = replace(base_request, interest_kind=InterestKind.COMPOUND, interest_rate_per_period=D("1E-29"))
    result = build_plan(request)

    assert amounts(result) == [D("333.33"), D("333.33"), D("333.34")]
    assert result.total_interest == D("0")
    assert result.total_payable == D("1000.00")


@pytest.mark.parametrize(
    "changes",
    [
        {"principal_total": D("1E27")},
        {"interest_kind": InterestKind.SIMPLE, "interest_rate_per_period": D("1E30")},
        {"days_to_first_due": 10**7},
    ],
)
def test_build_plan_out_of_range_amounts(base_request: PlanRequest, changes):
    """Values beyond decimal precision or the calendar are invalid requests"""
    with pytest.raises(InvalidPlanRequest):
        build_plan(replace(base_request, **changes))
