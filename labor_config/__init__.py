"""
labor_config -- single public entrypoint for labor cost policy.

Responsibility:
    Provides the way to obtain the ``LaborCostPolicy`` at runtime through
    ``get_active_policy()``.  Engines never read files; they receive a
    policy object (or fall back to the in-code ``DEFAULT_POLICY``, which
    matches the packaged ``sets/default.yaml``).

Architecture position:
    Configuration -- YAML-driven policy tables.  Sits above
    ``labor_kernel`` and beside ``labor_modules``; ``labor_engines``
    consume only the frozen ``LaborCostPolicy``.

Invariants enforced:
    - The returned policy is frozen and validated.
    - Deterministic loading: the same YAML always produces an equal policy
      and the same checksum.

Failure modes:
    - ``FileNotFoundError`` -- the requested policy file does not exist.
    - ``InvalidPolicyError`` -- a table or tolerance fails validation.

Audit relevance:
    Every ``get_active_policy()`` call emits a ``LABOR_CONFIG_TRACE`` log
    entry with the policy name, version and checksum, tying computed labor
    costs back to the exact tables that produced them.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

from labor_config.loader import compute_checksum, load_yaml_file, parse_policy
from labor_config.schema import DEFAULT_POLICY, LaborCostPolicy

_logger = logging.getLogger("labor_kernel.config")

_DEFAULT_POLICY_FILE = Path(__file__).parent / "sets" / "default.yaml"

__all__ = [
    "DEFAULT_POLICY",
    "LaborCostPolicy",
    "get_active_policy",
]


@functools.lru_cache(maxsize=8)
def _load(path: Path) -> tuple[LaborCostPolicy, str]:
    data = load_yaml_file(path)
    return parse_policy(data), compute_checksum(data)


def get_active_policy(policy_file: Path | str | None = None) -> LaborCostPolicy:
    """Return the labor cost policy.

    Args:
        policy_file: Optional path to a policy YAML file.  Defaults to
            the packaged ``labor_config/sets/default.yaml``.

    Returns:
        A frozen, validated ``LaborCostPolicy``.  Parsed files are cached
        by path.

    Raises:
        FileNotFoundError: If the policy file does not exist.
        InvalidPolicyError: If the policy fails validation.
    """
    path = Path(policy_file).resolve() if policy_file is not None else _DEFAULT_POLICY_FILE
    policy, checksum = _load(path)

    _logger.info(
        "LABOR_CONFIG_TRACE",
        extra={
            "trace_type": "LABOR_CONFIG_TRACE",
            "policy_name": policy.name,
            "policy_version": policy.version,
            "checksum": checksum,
            "source": str(path),
        },
    )
    return policy
