"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Payroll callers (batch runs, data-entry screens, report builders) need to
tell malformed input apart from broken configuration without parsing
message strings. Every exception here:
  1. Is a TYPED class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA as instance attributes

Example:
    try:
        payslip = calculate_payroll(employee, "13/2025", holiday_pool=pool)
    except InvalidPeriodError as e:
        api_response(code=e.code, period=e.token)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PayrollKernelError (base)
    |
    +-- InvalidInputError
    |   +-- InvalidPeriodError
    |
    +-- ConfigurationError
    |   +-- ConfigNotFoundError
    |   +-- InvalidConfigError
    |
    +-- UnknownResolutionStrategyError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                         | When Raised
----------------|------------------------------|-----------------------------------------
Input           | INVALID_INPUT                | Non-numeric / non-finite amount, negative
                |                              | base salary, malformed record field
                | INVALID_PERIOD               | Period token is not "M/YYYY"
----------------|------------------------------|-----------------------------------------
Configuration   | CONFIG_NOT_FOUND             | No YAML set with the requested name
                | INVALID_CONFIG               | YAML set fails schema validation
----------------|------------------------------|-----------------------------------------
Holiday         | UNKNOWN_RESOLUTION_STRATEGY  | Holiday strategy name not registered

Domain rule outcomes are NOT exceptions: a malformed statutory identifier
yields a zero deduction, out-of-range attendance is clamped, and a negative
net salary is returned as-is.
"""


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Input-related exceptions


class InvalidInputError(PayrollKernelError):
    """Input data is malformed and cannot be computed on."""

    code: str = "INVALID_INPUT"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {value!r} ({reason})")


class InvalidPeriodError(InvalidInputError):
    """Pay period token is not a valid "month/year" string."""

    code: str = "INVALID_PERIOD"

    def __init__(self, token: object, reason: str):
        self.token = token
        super().__init__("period", token, reason)


# Configuration-related exceptions


class ConfigurationError(PayrollKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class ConfigNotFoundError(ConfigurationError):
    """No configuration set exists with the requested name."""

    code: str = "CONFIG_NOT_FOUND"

    def __init__(self, name: str, config_dir: str):
        self.name = name
        self.config_dir = config_dir
        super().__init__(f"Configuration set '{name}' not found in {config_dir}")


class InvalidConfigError(ConfigurationError):
    """Configuration set failed validation."""

    code: str = "INVALID_CONFIG"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration {source}: {reason}")


# Holiday resolution


class UnknownResolutionStrategyError(PayrollKernelError):
    """Holiday resolution strategy name is not registered."""

    code: str = "UNKNOWN_RESOLUTION_STRATEGY"

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown holiday resolution strategy '{name}'. "
            f"Available: {available}"
        )
