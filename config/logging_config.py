"""
Structured log formatting.

Service modules log a bare event name and put their data in ``extra``.
``StructuredFormatter`` writes each record as one JSON line carrying those
fields, so ids and error text reach the console.
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID


# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_KEYS = frozenset(
    vars(logging.LogRecord('', 0, '', 0, '', (), None)).keys()
) | {'message', 'asctime', 'taskName'}


class _LogEncoder(json.JSONEncoder):
    """Handle Decimal, UUID and datetime values in log payloads."""

    def default(self, obj):
        if isinstance(obj, (Decimal, UUID)):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record):
        payload = {
            'ts': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RECORD_KEYS and key not in payload:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload['exc_type'] = type(exc).__name__
            payload['exc_message'] = str(exc)
            payload['traceback'] = self.formatException(record.exc_info)

        return json.dumps(payload, cls=_LogEncoder, default=str)
