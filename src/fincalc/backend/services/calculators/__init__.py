"""Pure financial formulas shared by every calculator."""

from .interest import calculate_compound_interest, calculate_simple_interest, compound_amount
from .investments import calculate_mutual_fund, calculate_sip, sip_future_value
from .lease import calculate_lease, compare_lease_terms
from .loans import (
    amortization_schedule,
    amortized_payment,
    calculate_down_payment,
    calculate_emi,
    calculate_mortgage,
    sample_schedule,
    yearly_amortization,
)
from .retirement import calculate_retirement, required_corpus
from .salary import calculate_salary
from .tax import apply_deductions, calculate_slab_tax, compare_regimes, slab_breakdown
from .utils import monthly_rate, percent_to_fraction, round_currency, round_rate
from .withdrawals import simulate_swp, withdrawal_sustainability

__all__ = [
    "amortization_schedule",
    "amortized_payment",
    "apply_deductions",
    "calculate_compound_interest",
    "calculate_down_payment",
    "calculate_emi",
    "calculate_lease",
    "calculate_mortgage",
    "calculate_mutual_fund",
    "calculate_retirement",
    "calculate_salary",
    "calculate_simple_interest",
    "calculate_sip",
    "calculate_slab_tax",
    "compare_lease_terms",
    "compare_regimes",
    "compound_amount",
    "monthly_rate",
    "percent_to_fraction",
    "required_corpus",
    "round_currency",
    "round_rate",
    "sample_schedule",
    "sip_future_value",
    "simulate_swp",
    "slab_breakdown",
    "withdrawal_sustainability",
    "yearly_amortization",
]
