"""
Payroll Kernel

Pure domain layer for the payroll computation engine:
- Immutable employee, attendance, holiday and pay-slip value types
- Decimal-only monetary arithmetic
- Typed exceptions with machine-readable codes
- Structured JSON logging and an injectable clock
"""

__version__ = "0.1.0"
