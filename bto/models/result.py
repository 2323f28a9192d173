"""
Result data model.

Every lifecycle operation returns a Result instead of raising for
expected business conditions.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import HousingError


@dataclass
class Result:
    """
    Outcome of one lifecycle operation.

    Usage:
        result = system.applications.submit(person, project, FlatKind.TWO_ROOM)
        if result:
            application = result.value
        else:
            display.print_error(result.error)
    """
    ok: bool
    value: Any = None                      # Created/updated record on success
    error: Optional[HousingError] = None   # Reason on failure

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: HousingError) -> "Result":
        return cls(ok=False, error=error)

    def __bool__(self):
        return self.ok

    def unwrap(self):
        """Return the value, or raise the carried error."""
        if not self.ok:
            raise self.error
        return self.value
