"""Exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — report produced, no policy violation
  1   Violation — ``--fail-on`` matched an entry, or a report failed validation
  2   Error — configuration error, parse error under ``fail`` policy, bad usage
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
