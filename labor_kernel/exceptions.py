"""
Typed Exception Hierarchy for the Labor Kernel.

===============================================================================
WHERE EXCEPTIONS ARE RAISED
===============================================================================

The calculation engines never raise for data problems. Unpaired punches are
dropped (and reported on the diagnostics channel), and compensation terms
with missing fields cost zero. Exceptions exist only at the two boundaries
where untrusted input enters the system:

  1. Record parsing -- ``from_dict`` constructors on the workforce records
     turn raw dicts (ISO-8601 strings, cents integers) into typed records.
  2. Policy loading -- ``labor_config`` builds a ``LaborCostPolicy`` from
     YAML and validates it.

Every exception has a ``code`` class attribute (machine-readable, API-safe)
and keeps its context as attributes rather than only in the message:

    try:
        employee = Employee.from_dict(row)
    except UnknownEnumValueError as e:
        reject_row(code=e.code, field=e.field, value=e.value)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LaborKernelError (base)
    |
    +-- RecordError
    |   +-- InvalidRecordError
    |   +-- UnknownEnumValueError
    |
    +-- PolicyError
        +-- InvalidPolicyError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category  | Code                 | When Raised
----------|----------------------|---------------------------------------------
Record    | INVALID_RECORD       | Missing/unparseable field in a raw record
          | UNKNOWN_ENUM_VALUE   | Status, pay type or punch type not recognised
----------|----------------------|---------------------------------------------
Policy    | INVALID_POLICY       | Policy table or tolerance fails validation
"""

from typing import Any


class LaborKernelError(Exception):
    """
    Base exception for all labor kernel errors.

    All subclasses must have a `code` class attribute for
    machine-readable error identification.
    """

    code: str = "LABOR_KERNEL_ERROR"


# Record-related exceptions


class RecordError(LaborKernelError):
    """Base exception for raw record parsing errors."""

    code: str = "RECORD_ERROR"


class InvalidRecordError(RecordError):
    """A raw record is missing a required field or a field cannot be parsed."""

    code: str = "INVALID_RECORD"

    def __init__(self, record_type: str, field: str, value: Any, reason: str):
        self.record_type = record_type
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid {record_type}.{field} ({value!r}): {reason}"
        )


class UnknownEnumValueError(RecordError):
    """A raw record carries an enumerated value outside the allowed set."""

    code: str = "UNKNOWN_ENUM_VALUE"

    def __init__(self, record_type: str, field: str, value: Any, allowed: tuple[str, ...]):
        self.record_type = record_type
        self.field = field
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Unknown {record_type}.{field} value {value!r}; "
            f"expected one of {', '.join(allowed)}"
        )


# Policy-related exceptions


class PolicyError(LaborKernelError):
    """Base exception for labor cost policy errors."""

    code: str = "POLICY_ERROR"


class InvalidPolicyError(PolicyError):
    """A labor cost policy failed validation."""

    code: str = "INVALID_POLICY"

    def __init__(self, setting: str, value: Any, reason: str):
        self.setting = setting
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid policy setting {setting}={value!r}: {reason}")
