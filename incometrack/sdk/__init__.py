"""Income Track SDK - Core functionality for work-day income and tax calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_data_path,
    get_default_data_path,
)

from .taxes import (
    TaxRules,
    DeductionSet,
    TaxCalculationResult,
    TaxRulesNotFoundError,
    load_tax_rules,
    rules_for_year,
    available_years,
    calculate_yearly_taxes,
)

from .income import (
    EarningRecord,
    EarningsRepository,
    get_yearly_gross_income,
    calculate_taxes_from_work_days,
)

from .schemas import WorkDay, MonthlySummary, FreeDay, FreeDays

from .workdays import (
    DEFAULT_BULK_HOURS,
    DEFAULT_BULK_RATE,
    WorkDayStore,
    WorkDayError,
    DuplicateWorkDayError,
    WorkDayNotFoundError,
    daily_earnings,
    generate_work_day_id,
    select_days,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "get_data_path",
    "get_default_data_path",
    # Taxes
    "TaxRules",
    "DeductionSet",
    "TaxCalculationResult",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "rules_for_year",
    "available_years",
    "calculate_yearly_taxes",
    # Income aggregation
    "EarningRecord",
    "EarningsRepository",
    "get_yearly_gross_income",
    "calculate_taxes_from_work_days",
    # Work days
    "WorkDay",
    "MonthlySummary",
    "FreeDay",
    "FreeDays",
    "WorkDayStore",
    "WorkDayError",
    "DuplicateWorkDayError",
    "WorkDayNotFoundError",
    "daily_earnings",
    "generate_work_day_id",
    "select_days",
    "DEFAULT_BULK_HOURS",
    "DEFAULT_BULK_RATE",
]
