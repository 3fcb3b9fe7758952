"""Thin adapters mapping calculator inputs to engine calls and result layouts.

Each adapter receives the validated inputs and the calculator options from
the catalogue, calls the formula engine and describes the cards, tables and
charts for the response builder.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import asdict
from functools import partial
from typing import Any

from fincalc.backend.config.catalogue import load_tax_rules
from fincalc.backend.config.schema import CalculatorDefinition

from .calculators import (
    calculate_compound_interest,
    calculate_down_payment,
    calculate_emi,
    calculate_lease,
    calculate_mortgage,
    calculate_mutual_fund,
    calculate_retirement,
    calculate_salary,
    calculate_simple_interest,
    calculate_sip,
    compare_lease_terms,
    compare_regimes,
    sample_schedule,
    simulate_swp,
)
from .calculators.interest import COMPOUNDING_FREQUENCIES
from .calculators.loans import LoanSummary
from .outputs import CalculatorOutput, CardSpec, ChartSpec, TableSpec, columns

Adapter = Callable[[Mapping[str, Any], Mapping[str, Any]], CalculatorOutput]


def _rows(items: Sequence[Any]) -> list[dict[str, Any]]:
    return [asdict(item) for item in items]


def _split(**parts: float) -> list[dict[str, Any]]:
    return [{"id": key, "value": value} for key, value in parts.items()]


def _loan_layout(summary: LoanSummary) -> tuple[tuple[TableSpec, ...], tuple[ChartSpec, ...]]:
    yearly = _rows(summary.yearly_schedule)
    tables = (
        TableSpec(
            id="yearly_amortization",
            columns=columns(
                "year", "principal", "interest", "balance", "cumulative_interest", year="number"
            ),
            rows=yearly,
        ),
    )
    charts = (
        ChartSpec(
            id="balance",
            type="line",
            x_key="month",
            series=("balance", "cumulative_principal", "cumulative_interest"),
            data=_rows(sample_schedule(summary.schedule)),
        ),
        ChartSpec(
            id="payment_split",
            type="pie",
            x_key="id",
            series=("value",),
            data=_split(principal=summary.principal, interest=summary.total_interest),
        ),
    )
    return tables, charts


def mortgage(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_mortgage(
        values["property_value"],
        values["down_payment"],
        values["interest_rate"],
        values["loan_term_years"],
    )
    loan = result.loan
    tables, charts = _loan_layout(loan)
    return CalculatorOutput(
        cards=(
            CardSpec("monthly_payment", loan.monthly_payment, highlight=True),
            CardSpec(
                "loan_amount",
                result.loan_amount,
                description="cards.loan_to_value_description",
                params={"ratio": (result.loan_to_value, "percent")},
            ),
            CardSpec("total_interest", loan.total_interest),
            CardSpec("total_payment", loan.total_payment),
            CardSpec("loan_to_value", result.loan_to_value, kind="percent"),
        ),
        tables=tables,
        charts=charts,
    )


def emi(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    loan = calculate_emi(values["loan_amount"], values["interest_rate"], values["loan_term_years"])
    tables, charts = _loan_layout(loan)
    monthly = TableSpec(
        id="monthly_schedule",
        columns=columns("month", "payment", "principal", "interest", "balance", month="number"),
        rows=_rows(loan.schedule),
    )
    return CalculatorOutput(
        cards=(
            CardSpec("monthly_payment", loan.monthly_payment, highlight=True),
            CardSpec("total_interest", loan.total_interest),
            CardSpec("total_payment", loan.total_payment),
        ),
        tables=(monthly, *tables),
        charts=charts,
    )


def down_payment(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    kwargs = {}
    if "comparison_percents" in options:
        kwargs["comparison_percents"] = tuple(options["comparison_percents"])
    result = calculate_down_payment(
        values["property_value"],
        values["down_payment_percent"],
        values["loan_term_years"],
        values["interest_rate"],
        **kwargs,
    )
    options_rows = _rows(result.options)
    return CalculatorOutput(
        cards=(
            CardSpec("down_payment", result.down_payment, highlight=True),
            CardSpec("loan_amount", result.loan_amount),
            CardSpec("monthly_payment", result.monthly_payment),
            CardSpec("total_interest", result.total_interest),
            CardSpec("loan_to_value", result.loan_to_value, kind="percent"),
        ),
        tables=(
            TableSpec(
                id="down_payment_options",
                columns=columns(
                    "percent", "down_payment", "loan_amount", "monthly_payment", percent="percent"
                ),
                rows=options_rows,
            ),
        ),
        charts=(
            ChartSpec(
                id="payment_by_down_payment",
                type="bar",
                x_key="percent",
                series=("monthly_payment",),
                data=options_rows,
            ),
        ),
    )


def lease(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_lease(
        values["vehicle_price"],
        values["down_payment"],
        values["lease_term_months"],
        values["interest_rate"],
        values["residual_value_percent"],
    )
    comparison = compare_lease_terms(
        values["vehicle_price"],
        values["down_payment"],
        values["interest_rate"],
        values["residual_value_percent"],
        terms=tuple(options.get("comparison_terms", (24, 36, 48, 60))),
        step_percent=options.get("residual_step_percent", 5.0),
        floor_percent=options.get("residual_floor_percent", 20.0),
    )
    return CalculatorOutput(
        cards=(
            CardSpec("monthly_payment", result.monthly_payment, highlight=True),
            CardSpec("total_lease_payments", result.total_lease_payments),
            CardSpec(
                "total_cost",
                result.total_cost,
                description="cards.total_cost_description",
                params={"down_payment": (result.down_payment, "currency")},
            ),
            CardSpec("residual_value", result.residual_value),
            CardSpec("monthly_depreciation", result.monthly_depreciation),
            CardSpec("monthly_finance_charge", result.monthly_finance_charge),
        ),
        tables=(
            TableSpec(
                id="lease_terms",
                columns=columns(
                    "term_months",
                    "residual_percent",
                    "monthly_payment",
                    "total_cost",
                    term_months="number",
                    residual_percent="percent",
                ),
                rows=_rows(comparison),
            ),
            TableSpec(
                id="yearly_lease",
                columns=columns(
                    "year", "depreciation", "finance_charge", "total", "running_total", year="number"
                ),
                rows=_rows(result.yearly),
            ),
        ),
        charts=(
            ChartSpec(
                id="lease_cumulative",
                type="area",
                x_key="month",
                series=("cumulative_depreciation", "cumulative_finance_charge"),
                data=_rows(result.breakdown),
            ),
            ChartSpec(
                id="payment_split",
                type="pie",
                x_key="id",
                series=("value",),
                data=_split(
                    depreciation=result.monthly_depreciation,
                    finance_charge=result.monthly_finance_charge,
                ),
            ),
        ),
    )


def sip(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_sip(values["monthly_investment"], values["expected_return"], values["years"])
    rows = _rows(result.breakdown)
    return CalculatorOutput(
        cards=(
            CardSpec("invested", result.invested),
            CardSpec("estimated_returns", result.returns),
            CardSpec("total_value", result.value, highlight=True),
        ),
        tables=(
            TableSpec(
                id="yearly_growth",
                columns=columns("year", "invested", "returns", "value", year="number"),
                rows=rows,
            ),
        ),
        charts=(
            ChartSpec(
                id="growth", type="area", x_key="year", series=("invested", "value"), data=rows
            ),
            ChartSpec(
                id="value_split",
                type="pie",
                x_key="id",
                series=("value",),
                data=_split(invested=result.invested, returns=result.returns),
            ),
        ),
    )


def _interest_output(result) -> CalculatorOutput:
    rows = _rows(result.breakdown)
    cards = [
        CardSpec("principal", result.principal),
        CardSpec("interest_earned", result.interest),
        CardSpec("maturity_amount", result.amount, highlight=True),
    ]
    if result.compound:
        cards.append(
            CardSpec(
                "compounding",
                COMPOUNDING_FREQUENCIES[result.frequency],
                kind="label",
            )
        )
    return CalculatorOutput(
        cards=tuple(cards),
        tables=(
            TableSpec(
                id="yearly_interest",
                columns=columns("year", "principal", "interest", "amount", year="number"),
                rows=rows,
            ),
        ),
        charts=(
            ChartSpec(
                id="interest_growth",
                type="bar",
                x_key="year",
                series=("principal", "interest"),
                data=rows,
            ),
        ),
    )


def simple_interest(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_simple_interest(
        values["principal"],
        values["interest_rate"],
        values["years"],
        compound=bool(values.get("compound", False)),
        frequency=int(values.get("compound_frequency", 1)),
    )
    return _interest_output(result)


def compound_interest(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_compound_interest(
        values["principal"],
        values["interest_rate"],
        values["years"],
        frequency=int(values.get("compound_frequency", 1)),
    )
    return _interest_output(result)


def swp(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = simulate_swp(
        values["initial_investment"],
        values["monthly_withdrawal"],
        values["expected_return"],
        values["years"],
        highly_sustainable_factor=options.get("highly_sustainable_factor", 0.7),
        moderately_sustainable_factor=options.get("moderately_sustainable_factor", 0.9),
    )
    return CalculatorOutput(
        cards=(
            CardSpec("total_withdrawn", result.total_withdrawn),
            CardSpec("final_corpus", result.final_corpus, highlight=True),
            CardSpec(
                "withdrawal_rate",
                result.sustainability.withdrawal_rate,
                kind="percent",
                description="cards.withdrawal_rate_description",
                params={"expected_return": (values["expected_return"], "percent")},
            ),
            CardSpec("sustainability", result.sustainability.status, kind="label"),
        ),
        tables=(
            TableSpec(
                id="yearly_withdrawals",
                columns=columns(
                    "year", "withdrawn", "returns", "cumulative_withdrawn", "balance", year="number"
                ),
                rows=_rows(result.yearly),
            ),
        ),
        charts=(
            ChartSpec(
                id="corpus",
                type="line",
                x_key="month",
                series=("balance", "withdrawn"),
                data=_rows(result.monthly),
            ),
        ),
    )


def retirement(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_retirement(
        values["current_age"],
        values["retirement_age"],
        values["life_expectancy"],
        values["current_savings"],
        values["monthly_savings"],
        values["monthly_expenses"],
        values["pre_retirement_return"],
        values["post_retirement_return"],
        values["inflation_rate"],
    )
    projection = _rows(result.projection)
    if result.adequate:
        verdict = CardSpec("retirement_status", "on_track", kind="label")
    else:
        verdict = CardSpec(
            "retirement_status",
            "action_needed",
            kind="label",
            description="cards.action_needed_description",
            params={
                "shortfall": (result.shortfall, "currency"),
                "additional": (result.additional_monthly_savings, "currency"),
            },
        )
    return CalculatorOutput(
        cards=(
            CardSpec("corpus_at_retirement", result.corpus_at_retirement, kind="compact", highlight=True),
            CardSpec("required_corpus", result.required_corpus, kind="compact"),
            CardSpec("shortfall", result.shortfall),
            CardSpec("additional_monthly_savings", result.additional_monthly_savings),
            CardSpec(
                "monthly_expense_at_retirement",
                result.monthly_expense_at_retirement,
                description="cards.years_in_retirement_description",
                params={"years": (result.years_in_retirement, "number")},
            ),
            verdict,
        ),
        tables=(
            TableSpec(
                id="retirement_projection",
                columns=columns(
                    "age",
                    "phase",
                    "contribution",
                    "returns",
                    "expenses",
                    "savings",
                    age="number",
                    phase="label",
                ),
                rows=projection,
            ),
        ),
        charts=(
            ChartSpec(
                id="retirement_savings",
                type="area",
                x_key="age",
                series=("savings",),
                data=projection,
            ),
        ),
    )


def mutual_fund(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_mutual_fund(
        values["investment_mode"],
        values["lumpsum_amount"],
        values["monthly_investment"],
        values["years"],
        values["expected_return"],
        values["expense_ratio"],
    )
    rows = _rows(result.breakdown)
    return CalculatorOutput(
        cards=(
            CardSpec("invested", result.invested),
            CardSpec("total_value", result.value, highlight=True),
            CardSpec("estimated_returns", result.returns),
            CardSpec("expenses_paid", result.expenses),
            CardSpec("net_return", result.net_return, kind="percent"),
        ),
        tables=(
            TableSpec(
                id="yearly_fund",
                columns=columns(
                    "year",
                    "yearly_investment",
                    "invested",
                    "returns",
                    "expenses",
                    "value",
                    year="number",
                ),
                rows=rows,
            ),
        ),
        charts=(
            ChartSpec(
                id="fund_growth",
                type="bar",
                x_key="year",
                series=("invested", "value", "gross_value"),
                data=rows,
            ),
        ),
    )


def tax_saving(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    rules = load_tax_rules()
    investments = {name: values.get(name, 0.0) for name in rules.deduction_components}
    result = compare_regimes(values["annual_income"], investments, rules)
    slab_columns = columns(
        "lower_bound", "upper_bound", "rate", "taxable", "tax", rate="percent"
    )
    return CalculatorOutput(
        cards=(
            CardSpec("tax_savings", result.tax_savings, highlight=True),
            CardSpec("old_regime_tax", result.old_regime_tax),
            CardSpec("new_regime_tax", result.new_regime_tax),
            CardSpec(
                "better_regime",
                f"regime_{result.better_regime}",
                kind="label",
                description="cards.better_regime_description",
                params={
                    "difference": (abs(result.old_regime_tax - result.new_regime_tax), "currency")
                },
            ),
            CardSpec("total_deductions", result.total_deductions),
            CardSpec("taxable_income", result.taxable_income),
        ),
        tables=(
            TableSpec(
                id="deductions",
                columns=columns("section", "claimed", "allowed", "cap", section="label"),
                rows=_rows(result.deductions),
            ),
            TableSpec(id="old_regime_slabs", columns=slab_columns, rows=_rows(result.old_regime_slabs)),
            TableSpec(id="new_regime_slabs", columns=slab_columns, rows=_rows(result.new_regime_slabs)),
        ),
        charts=(
            ChartSpec(
                id="regime_comparison",
                type="bar",
                x_key="id",
                series=("value",),
                data=_split(
                    regime_old=result.old_regime_tax,
                    regime_new=result.new_regime_tax,
                ),
            ),
            ChartSpec(
                id="investments",
                type="pie",
                x_key="id",
                series=("value",),
                data=_split(**{key: value for key, value in investments.items() if value > 0}),
            ),
        ),
    )


def salary(values: Mapping[str, Any], options: Mapping[str, Any]) -> CalculatorOutput:
    result = calculate_salary(
        values["basic_salary"],
        values["hra_percent"],
        values["special_allowance"],
        bool(values["provident_fund"]),
        values["professional_tax"],
        values["other_deductions"],
        values["bonus_amount"],
        values.get("bonus_months") or (),
        pf_rate_percent=options.get("pf_rate_percent", 12.0),
        pf_monthly_cap=options.get("pf_monthly_cap", 1800.0),
    )
    components = [
        {"component": item.id, "amount": item.signed_amount, "deduction": item.deduction}
        for item in result.components
    ]
    months = _rows(result.months)
    return CalculatorOutput(
        cards=(
            CardSpec("monthly_net_pay", result.monthly_net_pay, highlight=True),
            CardSpec("monthly_gross", result.monthly_gross),
            CardSpec("monthly_deductions", result.monthly_deductions),
            CardSpec("annual_gross", result.annual_gross),
            CardSpec("annual_deductions", result.annual_deductions),
            CardSpec("annual_net_pay", result.annual_net_pay),
        ),
        tables=(
            TableSpec(
                id="salary_components",
                columns=columns("component", "amount", component="label"),
                rows=components,
            ),
            TableSpec(
                id="monthly_salary",
                columns=columns("month", "gross", "bonus", "deductions", "net_pay", month="month"),
                rows=months,
            ),
        ),
        charts=(
            ChartSpec(
                id="salary_split",
                type="pie",
                x_key="id",
                series=("value",),
                data=[
                    {"id": item.id, "value": item.amount}
                    for item in result.components
                    if not item.deduction and item.amount > 0
                ],
            ),
            ChartSpec(
                id="monthly_pay",
                type="bar",
                x_key="month",
                series=("gross", "net_pay"),
                data=months,
            ),
        ),
    )


ADAPTERS: Mapping[str, Adapter] = {
    "mortgage": mortgage,
    "emi": emi,
    "down-payment": down_payment,
    "lease": lease,
    "sip": sip,
    "simple-interest": simple_interest,
    "compound-interest": compound_interest,
    "swp": swp,
    "retirement": retirement,
    "mutual-fund": mutual_fund,
    "tax-saving": tax_saving,
    "salary": salary,
}


def bind_adapter(definition: CalculatorDefinition) -> Callable[[Mapping[str, Any]], CalculatorOutput]:
    """Return the adapter for ``definition`` with its options bound."""

    try:
        adapter = ADAPTERS[definition.slug]
    except KeyError as exc:
        raise LookupError(f"No adapter registered for '{definition.slug}'") from exc
    return partial(adapter, options=definition.options)


__all__ = ["ADAPTERS", "Adapter", "bind_adapter"]
