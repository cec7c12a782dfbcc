"""Error mapping for the console entry point.

Converts structured ComponentTestError exceptions into machine-readable
error codes, recovery strategies and process exit codes.
"""

from typing import Any, Dict

from comptest.exceptions import (
    ComponentTestError,
    ConfigurationError,
    ValidationError,
)
from comptest.logger import session_logger as logger

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


# Recovery strategy templates keyed by error code
RECOVERY_STRATEGIES: Dict[str, str] = {
    # Component parameters
    "INVALID_TOLERANCE": "Use a tolerance fraction in [0, 1), e.g. 0.05 for +/-5%.",
    "INVALID_NOMINAL": "Use a finite, non-negative nominal value for every component.",
    "INVALID_KIND": "Use one of: Resistor, Capacitor, Inductor, Transistor.",
    # Executor settings
    "INVALID_DELAY_RANGE": "Provide non-negative delays with --min-delay <= --max-delay.",
    "INVALID_TIMEOUT": "Provide a positive --timeout, e.g. 5s.",
    # Batch file
    "BATCH_FILE_NOT_FOUND": "Check the --batch-file path.",
    "INVALID_BATCH_FILE": (
        "The batch file must be a readable UTF-8 JSON file shaped like "
        "{\"components\": [{\"kind\", \"nominal\", \"tolerance\"}]}."
    ),
    # Runtime
    "EMPTY_BATCH": "Add at least one component to the batch.",
    "COMPONENT_ALREADY_TESTED": "Submit untested components; each component is measured once per run.",
    "COMPONENT_NOT_TESTED": "Run the batch through the executor before analyzing it.",
    "COMPONENT_TIMEOUT": "Increase --timeout or lower --max-delay.",
}


def get_error_code(error: ComponentTestError) -> str:
    """Extract error code from exception class name.

    Converts class names like EmptyBatchError to EMPTY_BATCH.
    """
    name = error.__class__.__name__
    if name.endswith("Error"):
        name = name[:-5]
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.upper())
    return "".join(result)


def get_recovery_strategy(error_code: str, error: ComponentTestError) -> str:
    """Get recovery strategy for an error.

    Looks up the error's own code first, then the class-derived code, then
    falls back to a generic hint for the error family.
    """
    for code in (error.code, error_code):
        if code in RECOVERY_STRATEGIES:
            return RECOVERY_STRATEGIES[code]

    if isinstance(error, ConfigurationError):
        return "Review the batch definition and command-line options."
    elif isinstance(error, ValidationError):
        return "Review the validation error details and correct the input."

    return "Review the error message and try again."


def exit_code_for(error: BaseException) -> int:
    """Map an error to the process exit status."""
    if isinstance(error, (ConfigurationError, ValidationError)):
        return EXIT_USAGE
    return EXIT_FAILURE


def error_to_dict(error: ComponentTestError) -> Dict[str, Any]:
    """Convert error to a structured payload suitable for logging or JSON output."""
    error_code = get_error_code(error)
    payload = {
        "error_type": error_code,
        "code": error.code,
        "error": error.message,
        "details": error.details,
        "recovery": get_recovery_strategy(error_code, error),
    }
    logger.debug("sim.error_mapped", event="sim.error_mapped", code=error.code, error_type=error_code)
    return payload
