"""Custom exceptions for the surfacefire calculation package.

This module defines a hierarchy of exceptions used throughout surfacefire
to provide clear, specific error messages and enable targeted exception
handling by users of the library.

Exception Hierarchy:
    SurfaceFireError (base)
    ├── ConfigurationError - Invalid configuration files or parameters
    │   ├── UnknownScenarioError - Unregistered moisture scenario name
    │   └── FuelModelError - Unknown or malformed fuel model
    ├── ValidationError - Input validation failures
    └── PipelineError - Step ownership or ordering violations

Example:
    >>> from surfacefire.exceptions import UnknownScenarioError
    >>> raise UnknownScenarioError("d9l9")
"""

from typing import Optional


class SurfaceFireError(Exception):
    """Base exception for all surfacefire errors.

    All custom exceptions in surfacefire inherit from this class, allowing
    users to catch all of them with a single except clause if desired.

    Example:
        >>> try:
        ...     calculator.evaluate()
        ... except SurfaceFireError as e:
        ...     print(f"surfacefire error occurred: {e}")
    """

    pass


class ConfigurationError(SurfaceFireError):
    """Raised when configuration file or parameters are invalid.

    This exception is raised when:
    - Required parameters are missing from config files
    - An enumerated selector names an unknown member
    - A named catalog entry (scenario, fuel model) does not exist

    Configuration errors abort an evaluation pass before anything is
    published to the quantity registry.

    Attributes:
        message (str): Explanation of the configuration error.
        config_path (str): Path to the configuration file, if applicable.
        parameter (str): Name of the problematic parameter, if applicable.

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown blend algorithm 'median'",
        ...     config_path="/path/to/run.cfg",
        ...     parameter="algorithm"
        ... )
    """

    def __init__(self, message: str, config_path: Optional[str] = None, parameter: Optional[str] = None):
        self.config_path = config_path
        self.parameter = parameter

        parts = []
        if config_path:
            parts.append(f"in {config_path}")
        if parameter:
            parts.append(f"parameter '{parameter}'")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class UnknownScenarioError(ConfigurationError):
    """Raised when a moisture scenario name is not in the scenario catalog.

    Attributes:
        scenario (str): The scenario name that could not be resolved.

    Example:
        >>> raise UnknownScenarioError("d9l9")
    """

    def __init__(self, scenario: str, config_path: Optional[str] = None):
        self.scenario = scenario
        super().__init__(f"Unknown moisture scenario '{scenario}'",
                         config_path=config_path, parameter="scenario")


class FuelModelError(ConfigurationError):
    """Raised when fuel model operations fail.

    This exception is raised when:
    - An unknown fuel model number or code is requested
    - A fuel complex is built with more particles than the bed supports
    - The fuel model catalog is missing required fields

    Attributes:
        message (str): Explanation of the fuel model error.
        fuel_model_id: The fuel model number or code involved, if applicable.

    Example:
        >>> raise FuelModelError(
        ...     "Unknown fuel model",
        ...     fuel_model_id=999
        ... )
    """

    def __init__(self, message: str, fuel_model_id=None):
        self.fuel_model_id = fuel_model_id

        if fuel_model_id is not None:
            message = f"{message} (fuel model ID: {fuel_model_id})"

        super().__init__(message)


class ValidationError(SurfaceFireError):
    """Raised when input validation fails.

    This exception is raised when:
    - Function arguments are invalid
    - Data structures have invalid contents

    Attributes:
        message (str): Explanation of the validation failure.
        field (str): Name of the field that failed validation, if applicable.
        value: The invalid value, if applicable.

    Example:
        >>> raise ValidationError(
        ...     "Coverage must be between 0 and 1",
        ...     field="coverage",
        ...     value=1.5
        ... )
    """

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        self.field = field
        self.value = value

        parts = []
        if field:
            parts.append(f"field '{field}'")
        if value is not None:
            parts.append(f"value={value!r}")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class PipelineError(SurfaceFireError):
    """Raised when a pipeline step breaks its declared contract.

    This exception is raised when:
    - A step writes a quantity owned by a different step
    - A quantity is written twice in one evaluation pass
    - A step reads a quantity it did not declare as an input
    - A step list is not in dependency order

    These indicate programming errors in the step declarations rather
    than bad user input.

    Attributes:
        message (str): Explanation of the contract violation.
        step (str): Name of the offending step, if applicable.
        quantity (str): Name of the quantity involved, if applicable.
    """

    def __init__(self, message: str, step: Optional[str] = None, quantity: Optional[str] = None):
        self.step = step
        self.quantity = quantity

        parts = []
        if step:
            parts.append(f"step '{step}'")
        if quantity:
            parts.append(f"quantity '{quantity}'")

        if parts:
            full_message = f"{message} ({', '.join(parts)})"
        else:
            full_message = message

        super().__init__(full_message)
