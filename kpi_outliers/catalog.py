"""
Default catalog of property level KPIs.

Codes double as ids so policies and observations can reference catalog entries
without a lookup table.
"""

from kpi_outliers.models import MetricCategory, MetricDefinition, MetricFormat

# KPIs where a lower actual than baseline is an improvement
DEFAULT_INVERSE_METRIC_CODES: frozenset[str] = frozenset(
    {
        "operating_expense_ratio",
        "vacancy_rate",
        "loss_to_lease",
        "concessions",
        "total_expenses",
        "expense_per_unit",
        "ltv",
        "avg_days_vacant",
        "move_outs",
    }
)

# (code, name, category, format, sort_order, description)
_CATALOG: list[tuple[str, str, MetricCategory, MetricFormat, int, str]] = [
    # Rent / revenue
    ("gpr", "Gross Potential Rent", MetricCategory.RENT_REVENUE, MetricFormat.CURRENCY, 1,
     "Total rent if all units were leased at market rates"),
    ("egi", "Effective Gross Income", MetricCategory.RENT_REVENUE, MetricFormat.CURRENCY, 2,
     "Gross potential rent minus vacancy and concessions, plus other income"),
    ("total_revenue", "Total Revenue", MetricCategory.RENT_REVENUE, MetricFormat.CURRENCY, 3,
     "All income from the property"),
    ("revenue_per_unit", "Revenue Per Unit", MetricCategory.RENT_REVENUE, MetricFormat.CURRENCY, 4,
     "Average monthly revenue per unit"),
    ("revenue_per_sqft", "Revenue Per Sq Ft", MetricCategory.RENT_REVENUE, MetricFormat.CURRENCY, 5,
     "Revenue per square foot"),
    ("rent_growth", "Rent Growth", MetricCategory.RENT_REVENUE, MetricFormat.PERCENTAGE, 6,
     "Year-over-year rent increase percentage"),
    ("loss_to_lease", "Loss to Lease", MetricCategory.RENT_REVENUE, MetricFormat.CURRENCY, 7,
     "Difference between market rent and actual rent"),
    ("concessions", "Concessions", MetricCategory.RENT_REVENUE, MetricFormat.CURRENCY, 8,
     "Total concessions and discounts given"),
    # Occupancy
    ("physical_occupancy", "Physical Occupancy Rate", MetricCategory.OCCUPANCY, MetricFormat.PERCENTAGE, 1,
     "Percentage of units that are physically occupied"),
    ("economic_occupancy", "Economic Occupancy Rate", MetricCategory.OCCUPANCY, MetricFormat.PERCENTAGE, 2,
     "Actual rent collected as percentage of potential rent"),
    ("vacancy_rate", "Vacancy Rate", MetricCategory.OCCUPANCY, MetricFormat.PERCENTAGE, 3,
     "Percentage of units that are vacant"),
    ("lease_renewal_rate", "Lease Renewal Rate", MetricCategory.OCCUPANCY, MetricFormat.PERCENTAGE, 4,
     "Percentage of tenants who renew their lease"),
    ("avg_days_vacant", "Average Days Vacant", MetricCategory.OCCUPANCY, MetricFormat.NUMBER, 5,
     "Average number of days a unit stays vacant"),
    ("move_ins", "Move-Ins", MetricCategory.OCCUPANCY, MetricFormat.NUMBER, 6,
     "Number of new move-ins in the period"),
    ("move_outs", "Move-Outs", MetricCategory.OCCUPANCY, MetricFormat.NUMBER, 7,
     "Number of move-outs in the period"),
    ("occupancy_rate", "Occupancy Rate", MetricCategory.OCCUPANCY, MetricFormat.PERCENTAGE, 10,
     "Current occupancy percentage"),
    # Property performance
    ("noi", "Net Operating Income", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.CURRENCY, 1,
     "Revenue minus operating expenses (before debt service)"),
    ("noi_margin", "NOI Margin", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.PERCENTAGE, 2,
     "NOI as a percentage of total revenue"),
    ("operating_expense_ratio", "Operating Expense Ratio", MetricCategory.PROPERTY_PERFORMANCE,
     MetricFormat.PERCENTAGE, 3, "Operating expenses as percentage of revenue"),
    ("cap_rate", "Cap Rate", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.PERCENTAGE, 4,
     "NOI divided by property value"),
    ("cash_on_cash", "Cash on Cash Return", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.PERCENTAGE, 5,
     "Annual cash flow divided by total cash invested"),
    ("total_expenses", "Total Operating Expenses", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.CURRENCY, 6,
     "All operating expenses for the period"),
    ("expense_per_unit", "Expense Per Unit", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.CURRENCY, 7,
     "Average operating expense per unit"),
    ("noi_yield_on_cost", "NOI Yield on Cost", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.PERCENTAGE, 13,
     "In-place NOI divided by total cost basis"),
    ("in_place_noi", "In-Place NOI", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.CURRENCY, 17,
     "Annualized net operating income based on current leases"),
    ("annualized_noi", "Annualized NOI", MetricCategory.PROPERTY_PERFORMANCE, MetricFormat.CURRENCY, 18,
     "Projected annual net operating income"),
    # Financial
    ("ebitda", "EBITDA", MetricCategory.FINANCIAL, MetricFormat.CURRENCY, 1,
     "Earnings before interest, taxes, depreciation, and amortization"),
    ("free_cash_flow", "Free Cash Flow", MetricCategory.FINANCIAL, MetricFormat.CURRENCY, 2,
     "Cash available after all expenses and capital expenditures"),
    ("roi", "Return on Investment", MetricCategory.FINANCIAL, MetricFormat.PERCENTAGE, 3,
     "Total return as percentage of investment"),
    ("irr", "Internal Rate of Return", MetricCategory.FINANCIAL, MetricFormat.PERCENTAGE, 4,
     "Annualized rate of return on investment"),
    ("equity_multiple", "Equity Multiple", MetricCategory.FINANCIAL, MetricFormat.RATIO, 5,
     "Total distributions divided by total equity invested"),
    ("property_value", "Current Property Value", MetricCategory.FINANCIAL, MetricFormat.CURRENCY, 6,
     "Estimated current market value"),
    ("appreciation", "Appreciation", MetricCategory.FINANCIAL, MetricFormat.PERCENTAGE, 7,
     "Change in property value from acquisition"),
    # Debt service
    ("dscr", "Debt Service Coverage Ratio", MetricCategory.DEBT_SERVICE, MetricFormat.RATIO, 1,
     "NOI divided by annual debt service"),
    ("ltv", "Loan-to-Value", MetricCategory.DEBT_SERVICE, MetricFormat.PERCENTAGE, 2,
     "Loan balance as percentage of property value"),
    ("interest_coverage", "Interest Coverage Ratio", MetricCategory.DEBT_SERVICE, MetricFormat.RATIO, 3,
     "EBITDA divided by interest expense"),
    ("principal_balance", "Principal Balance", MetricCategory.DEBT_SERVICE, MetricFormat.CURRENCY, 4,
     "Outstanding loan principal"),
    ("monthly_debt_service", "Monthly Debt Service", MetricCategory.DEBT_SERVICE, MetricFormat.CURRENCY, 5,
     "Monthly principal and interest payment"),
    ("annual_debt_service", "Annual Debt Service", MetricCategory.DEBT_SERVICE, MetricFormat.CURRENCY, 6,
     "Total annual debt payments"),
    ("interest_rate", "Interest Rate", MetricCategory.DEBT_SERVICE, MetricFormat.PERCENTAGE, 7,
     "Current loan interest rate"),
]


def default_metric_definitions() -> list[MetricDefinition]:
    """Get the built-in property KPI catalog."""
    return [
        MetricDefinition(
            id=code,
            code=code,
            name=name,
            category=category,
            format=metric_format,
            sort_order=sort_order,
            description=description,
        )
        for code, name, category, metric_format, sort_order, description in _CATALOG
    ]
