"""
Policy Loader (``labor_config.loader``).

Responsibility
--------------
Loads a YAML policy file and parses it into a frozen ``LaborCostPolicy``.
Runtime callers go through ``labor_config.get_active_policy()``; this
module is the parsing layer underneath it.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Depends on the kernel
exceptions and the workforce enums only.

Invariants enforced
-------------------
* Numeric YAML values are converted to ``Decimal`` through ``str`` so a
  YAML float like ``15.22`` becomes exactly ``Decimal("15.22")``.
* Unknown pay period or interval keys are rejected, never ignored.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the
  parsed document for configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``policy`` section or bad values  -> ``InvalidPolicyError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from labor_config.schema import LaborCostPolicy
from labor_kernel.exceptions import InvalidPolicyError
from labor_modules.workforce.models import ContractorPaymentInterval, PayPeriodType

_E = TypeVar("_E", bound=Enum)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def _to_decimal(setting: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise InvalidPolicyError(setting, value, "expected a number")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidPolicyError(setting, value, "expected a number") from exc


def _parse_table(
    setting: str, raw: Any, enum_cls: type[_E],
) -> dict[_E, Decimal]:
    if not isinstance(raw, dict):
        raise InvalidPolicyError(setting, raw, "expected a mapping")
    table: dict[_E, Decimal] = {}
    for key, value in raw.items():
        try:
            member = enum_cls(key)
        except ValueError as exc:
            raise InvalidPolicyError(f"{setting}.{key}", value, "unknown key") from exc
        table[member] = _to_decimal(f"{setting}.{key}", value)
    return table


def parse_policy(data: dict[str, Any]) -> LaborCostPolicy:
    """
    Parse a ``LaborCostPolicy`` from a loaded YAML document.

    Settings absent from the document keep their schema defaults.

    Raises:
        InvalidPolicyError: if the ``policy`` section is missing or any
            value fails parsing or validation.
    """
    section = data.get("policy")
    if not isinstance(section, dict):
        raise InvalidPolicyError("policy", section, "missing 'policy' section")

    kwargs: dict[str, Any] = {}
    if "name" in section:
        kwargs["name"] = str(section["name"])
    if "version" in section:
        kwargs["version"] = int(section["version"])
    if "days_per_pay_period" in section:
        kwargs["days_per_pay_period"] = _parse_table(
            "days_per_pay_period", section["days_per_pay_period"], PayPeriodType,
        )
    if "days_per_contractor_interval" in section:
        kwargs["days_per_contractor_interval"] = _parse_table(
            "days_per_contractor_interval",
            section["days_per_contractor_interval"],
            ContractorPaymentInterval,
        )
    if "max_shift_hours" in section:
        kwargs["max_shift_hours"] = _to_decimal("max_shift_hours", section["max_shift_hours"])
    if "dedup_window_minutes" in section:
        kwargs["dedup_window_minutes"] = int(section["dedup_window_minutes"])
    if "bi_weekly_anchor" in section:
        try:
            kwargs["bi_weekly_anchor"] = parse_date(section["bi_weekly_anchor"])
        except ValueError as exc:
            raise InvalidPolicyError(
                "bi_weekly_anchor", section["bi_weekly_anchor"], "expected YYYY-MM-DD"
            ) from exc
    if "standard_hours_per_week" in section:
        kwargs["standard_hours_per_week"] = _to_decimal(
            "standard_hours_per_week", section["standard_hours_per_week"],
        )

    return LaborCostPolicy(**kwargs)


def load_policy(path: Path) -> LaborCostPolicy:
    """Load and parse a policy file."""
    return parse_policy(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of a loaded policy document."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
