"""
Labor Modules.

Thin orchestration layers over the Labor Kernel and Engines.

Modules:
- Workforce: employee, punch and shift records; the labor cost service facade

Actual calculation logic lives in the engines.
"""
