"""Tax rules loading.

Each tax year has one YAML file (rules/YYYY.yaml). A year without its own
file uses the closest earlier year, and if there is none, the newest file.
Loaded rules are cached for the life of the process and are immutable.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import yaml

from .schemas import TaxRules


class TaxRulesNotFoundError(Exception):
    """Raised when no tax rules file exists at all."""
    pass


def get_tax_rules_dir() -> Path:
    """Get the packaged rules directory path."""
    return Path(__file__).parent / "rules"


def available_years(rules_dir: Optional[Path] = None) -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = Path(rules_dir) if rules_dir else get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def _load_rules_file(path: Path) -> TaxRules:
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    return TaxRules.model_validate(data)


def load_tax_rules(year: Union[int, str], rules_dir: Optional[Path] = None) -> TaxRules:
    """Load tax rules for a specific year from rules/YYYY.yaml.

    Raises:
        FileNotFoundError: If that year has no rules file
        pydantic.ValidationError: If the file does not match TaxRules
    """
    rules_dir = Path(rules_dir) if rules_dir else get_tax_rules_dir()
    config_file = rules_dir / f"{int(year)}.yaml"
    if not config_file.exists():
        raise FileNotFoundError(f"Tax rules file not found for year {year}: {config_file}")
    return _load_rules_file(config_file.resolve())


def rules_for_year(year: Union[int, str], rules_dir: Optional[Path] = None) -> TaxRules:
    """Get the rules that apply to a tax year, with fallback to prior years.

    Args:
        year: Tax year (e.g., 2024)
        rules_dir: Directory of YYYY.yaml files (default: packaged rules)

    Returns:
        TaxRules of the newest year <= requested year, else of the newest year

    Raises:
        TaxRulesNotFoundError: If the directory holds no rules files
    """
    years = available_years(rules_dir)
    if not years:
        raise TaxRulesNotFoundError(
            f"No tax rules found in {rules_dir or get_tax_rules_dir()}"
        )

    target_year = int(year)
    candidate_years = [y for y in years if y <= target_year] or years
    return load_tax_rules(candidate_years[0], rules_dir)
