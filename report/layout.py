"""Column layout for the attendance table."""
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from processor.errors import InvalidDateFormat
from processor.models import PollResult

logger = logging.getLogger(__name__)

# Width of every per-date cell, in header, body and footer rows
CELL_WIDTH = 5

DATE_FORMAT = '%Y%m%d'
DATE_PATTERN = re.compile(r'^\d{8}$')

# English names regardless of locale
WEEKDAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
          'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


@dataclass(frozen=True)
class DateColumn:
    """Header values for one date column."""
    date: str
    weekday: str
    day: int
    month: str


@dataclass(frozen=True)
class TableLayout:
    """Computed layout of the attendance table."""
    name_width: int
    columns: Tuple[DateColumn, ...]
    header_rows: Tuple[str, str, str]


def parse_date(date_str: str) -> DateColumn:
    """
    Parse a YYYYMMDD string into its header values.

    Args:
        date_str: Date string from the poll

    Returns:
        DateColumn with weekday, day of month and month

    Raises:
        InvalidDateFormat: If the string is not eight digits forming a
            valid calendar date
    """
    if not DATE_PATTERN.match(date_str):
        raise InvalidDateFormat(date_str, "expected YYYYMMDD")
    try:
        parsed = datetime.strptime(date_str, DATE_FORMAT)
    except ValueError as e:
        raise InvalidDateFormat(date_str, str(e)) from e

    return DateColumn(
        date=date_str,
        weekday=WEEKDAYS[parsed.weekday()],
        day=parsed.day,
        month=MONTHS[parsed.month - 1]
    )


def name_column_width(poll: PollResult) -> int:
    """Length of the longest participant name, 0 without participants."""
    return max((len(p.name) for p in poll.responses), default=0)


def build_layout(poll: PollResult) -> TableLayout:
    """
    Compute the name column width and the three date header rows.

    Header rows are indented by one more space than the name column.
    A single unparseable date aborts the whole layout.

    Args:
        poll: Decoded poll

    Returns:
        TableLayout for the poll
    """
    name_width = name_column_width(poll)
    columns = tuple(parse_date(date) for date in poll.dates)

    margin = ' ' * (name_width + 1)
    weekdays: List[str] = [margin]
    monthdays: List[str] = [margin]
    months: List[str] = [margin]
    for column in columns:
        weekdays.append(f" {column.weekday:>4}")
        monthdays.append(f"  {column.day:02d} ")
        months.append(f" {column.month:>4}")

    logger.debug(f"Layout: name width {name_width}, {len(columns)} date columns")
    return TableLayout(
        name_width=name_width,
        columns=columns,
        header_rows=(''.join(weekdays), ''.join(monthdays), ''.join(months))
    )
