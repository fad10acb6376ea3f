#!/usr/bin/env python3
"""
Labor cost report from a JSON export (no DB).

Reads employees plus either time punches (actual cost) or shifts (scheduled
cost) and prints the breakdown with one row per day.

Input document:
  {
    "employees":    [{"id": "e1", "compensation_type": "hourly", "hourly_rate": 2000, ...}],
    "time_punches": [{"employee_id": "e1", "punch_time": "2024-01-01T09:00:00", "punch_type": "clock_in"}],
    "shifts":       [{"employee_id": "e1", "start_time": "...", "end_time": "...", "break_duration": 30}]
  }

Usage:
  python3 -m scripts.labor_report export.json --start 2024-01-01 --end 2024-01-07
  python3 -m scripts.labor_report export.json --start 2024-01-01 --end 2024-01-07 \\
    --mode scheduled --format text [--policy my_policy.yaml]

Exit codes: 0 success, 1 unreadable input, 2 invalid record or policy.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any

from labor_config import get_active_policy
from labor_engines.results import LaborCostResult
from labor_kernel.exceptions import LaborKernelError
from labor_kernel.logging_config import configure_logging
from labor_modules.workforce.service import LaborCostService


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_text(result: LaborCostResult) -> str:
    b = result.breakdown
    lines = [
        f"{'Date':<12}{'Hourly':>12}{'Salary':>12}{'Contractor':>12}{'Daily rate':>12}"
        f"{'Total':>12}{'Hours':>10}",
    ]
    for day in result.daily_costs:
        lines.append(
            f"{day.date.isoformat():<12}{day.hourly_cost:>12}{day.salary_cost:>12}"
            f"{day.contractor_cost:>12}{day.daily_rate_cost:>12}{day.total_cost:>12}"
            f"{day.hours_worked.quantize(Decimal('0.01')):>10}"
        )
    lines.append("")
    lines.append(f"Hourly:     {b.hourly.cost} ({b.hourly.hours.quantize(Decimal('0.01'))} h)")
    lines.append(f"Salary:     {b.salary.cost} ({b.salary.employees} employees)")
    lines.append(f"Contractor: {b.contractor.cost} ({b.contractor.employees} employees)")
    lines.append(f"Daily rate: {b.daily_rate.cost} ({b.daily_rate.employees} employees)")
    lines.append(f"TOTAL:      {b.total}")
    if result.diagnostics:
        lines.append("")
        lines.append(f"Punch anomalies: {len(result.diagnostics)}")
        for d in result.diagnostics:
            lines.append(
                f"  {d.punch_time.isoformat()}  {d.employee_id:<10} {d.anomaly.value}"
                + (f"  ({d.detail})" if d.detail else "")
            )
    return "\n".join(lines)


def run(
    document: dict[str, Any],
    start: str,
    end: str,
    mode: str,
    policy_path: Path | None = None,
    restaurant_id: str | None = None,
) -> LaborCostResult:
    policy = get_active_policy(policy_path)
    service = LaborCostService(policy)
    employees = document.get("employees") or []

    if mode == "scheduled":
        return service.scheduled_labor_cost(
            shifts=document.get("shifts") or [],
            employees=employees,
            start_date=start,
            end_date=end,
            restaurant_id=restaurant_id,
        )
    return service.actual_labor_cost(
        employees=employees,
        time_punches=document.get("time_punches") or [],
        start_date=start,
        end_date=end,
        restaurant_id=restaurant_id,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compute labor cost from a JSON export of employees and punches or shifts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input", type=Path, help="Path to the JSON export")
    parser.add_argument("--start", required=True, help="First day YYYY-MM-DD")
    parser.add_argument("--end", required=True, help="Last day YYYY-MM-DD (inclusive)")
    parser.add_argument(
        "--mode",
        choices=("actual", "scheduled"),
        default="actual",
        help="actual: cost from time_punches; scheduled: cost from shifts",
    )
    parser.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("--policy", type=Path, default=None, help="Policy YAML file")
    parser.add_argument("--restaurant-id", default=None, help="Tag log records with this id")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Structured log level on stderr (default: WARNING)",
    )
    args = parser.parse_args(argv)

    configure_logging(level=getattr(logging, args.log_level), stream=sys.stderr)

    if not args.input.exists():
        print(f"ERROR: Input file not found: {args.input}", file=sys.stderr)
        return 1
    try:
        with open(args.input) as f:
            document = json.load(f)
    except json.JSONDecodeError as exc:
        print(f"ERROR: Input is not valid JSON: {exc}", file=sys.stderr)
        return 1
    if not isinstance(document, dict):
        print("ERROR: Input must be a JSON object", file=sys.stderr)
        return 1
    if args.policy is not None and not args.policy.exists():
        print(f"ERROR: Policy file not found: {args.policy}", file=sys.stderr)
        return 1

    try:
        result = run(
            document,
            args.start,
            args.end,
            args.mode,
            policy_path=args.policy,
            restaurant_id=args.restaurant_id,
        )
    except LaborKernelError as exc:
        print(f"ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 2

    if args.format == "text":
        print(render_text(result))
    else:
        print(json.dumps(result.to_dict(), indent=2, default=_json_default))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
