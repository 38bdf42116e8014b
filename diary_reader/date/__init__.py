"""Date header recognition for diary text.

Only lines made up entirely of a date count as headers; dates inside prose are
left alone. Resolved dates are plain YYYY-MM-DD strings.
"""

from .months import MONTHS, to_iso_date
from .parsers import resolve_date
from .types import Segment
