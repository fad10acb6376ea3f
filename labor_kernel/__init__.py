"""
Labor Kernel

Shared foundation for the labor cost engines:
- Structured JSON logging with request-scoped context
- Typed exception hierarchy with machine-readable codes
- Value helpers for the cents-in / dollars-out boundary, rounding,
  worked-hour arithmetic and calendar-day iteration
"""

__version__ = "0.1.0"
