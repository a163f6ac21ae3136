"""
Exceptions for Armory.

All errors are ArmoryError with a structured code for programmatic handling.
"""

from typing import Any


class BaseError(Exception):
    """
    Error carrying a machine-readable code and context data.

    Subclasses provide `_default_messages` so callers can raise with just
    a code: ``raise ArmoryError('INVALID_QUANTITY', requested=0)``.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class ArmoryError(BaseError):
    """
    Structured exception for inventory operations.

    Usage:
        try:
            assets.transfer(10, 'Rifle', north, south)
        except ArmoryError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                print(f"Only {e.available} on hand")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_QUANTITY': 'Quantity must be a positive whole number',
        'INSUFFICIENT_QUANTITY': 'Not enough stock at source base',
        'MISSING_FIELDS': 'Missing fields',
        'SAME_BASE': 'Source and destination base must differ',
        'INVALID_ASSIGNMENT_TYPE': 'Type must be assigned or expended',
        'UNKNOWN_ASSET_TYPE': 'Unknown asset type',
        'UNKNOWN_BASE': 'Base not found',
        'BASE_REQUIRED': 'A base is required for this operation',
        'INVALID_DATE': 'Invalid date (expected YYYY-MM-DD)',
        'INVALID_RANGE': 'Start date is after end date',
        'INVALID_PAYLOAD': 'Request body must be a JSON object',
        'RETRIEVAL_FAILED': 'Dashboard error',
    }

    # Codes that describe a server-side failure rather than bad input
    _server_codes = frozenset({'RETRIEVAL_FAILED'})

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    @property
    def http_status(self) -> int:
        return 500 if self.code in self._server_codes else 400

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, float, bool, type(None))) else str(v)
                for k, v in self.data.items()
            }
        }
