"""locale_audit — git-backed localization status for content trees."""

__all__ = [
    "__version__",
    "get_full_status",
    "get_file_status",
    "build_report",
    "validate_instance",
]
__version__ = "0.1.0"

# Programmatic entrypoints — see locale_audit.api.
from locale_audit.api import (  # noqa: E402, F401
    build_report,
    get_file_status,
    get_full_status,
)
from locale_audit.contracts.load import validate_instance  # noqa: E402, F401
