"""Renderer for the attendance report."""
import logging
from collections import Counter
from dataclasses import dataclass
from typing import List, TextIO

from processor.models import Attendance, PollResult
from report.layout import CELL_WIDTH, build_layout

logger = logging.getLogger(__name__)

ANSI_GREEN = "\033[32m\033[7m"
ANSI_ORANGE = "\033[33m\033[7m"
ANSI_RESET = "\033[0m"
CHECK_MARK = "✓"


@dataclass(frozen=True)
class RenderConfig:
    """Colour settings for the report."""
    color: bool = True
    ok_color: str = ANSI_GREEN
    if_need_be_color: str = ANSI_ORANGE
    reset: str = ANSI_RESET
    check_mark: str = CHECK_MARK


class ReportRenderer:
    """Render a poll as a coloured attendance grid."""

    def __init__(self, config: RenderConfig = None):
        """
        Initialize the renderer.

        Args:
            config: Colour settings (default: colour enabled)
        """
        self.config = config or RenderConfig()

    def render(self, poll: PollResult) -> List[str]:
        """
        Render the complete report.

        Args:
            poll: Decoded poll

        Returns:
            Report lines without trailing newlines

        Raises:
            InvalidDateFormat: If any poll date cannot be parsed
        """
        layout = build_layout(poll)

        lines = [poll.name, poll.description, '']
        lines.extend(layout.header_rows)
        lines.append('')

        ok_count: Counter = Counter()
        ifneedbe_count: Counter = Counter()
        for participant in poll.responses:
            cells = []
            for date in poll.dates:
                attendance = participant.attendance_on(date)
                if attendance is Attendance.OK:
                    ok_count[date] += 1
                elif attendance is Attendance.IF_NEED_BE:
                    ifneedbe_count[date] += 1
                cells.append(self.cell(attendance))
            lines.append(
                f"{participant.name:>{layout.name_width}}  " + ''.join(cells)
            )
        lines.append('')

        margin = ' ' * layout.name_width
        oks = [margin]
        ifneedbes = [margin]
        for date in poll.dates:
            oks.append(f"   {ok_count[date]:2d}")
            if ifneedbe_count[date]:
                ifneedbes.append(f"  {'+' + str(ifneedbe_count[date]):>3}")
            else:
                ifneedbes.append(' ' * CELL_WIDTH)
        lines.append(''.join(oks))
        lines.append(''.join(ifneedbes))

        logger.debug(f"Rendered {len(lines)} lines for poll '{poll.name}'")
        return lines

    def cell(self, attendance: Attendance) -> str:
        """Return the body cell for one attendance value."""
        mark = self.config.check_mark
        if attendance is Attendance.OK:
            return self._paint(f"  {mark}  ", self.config.ok_color)
        if attendance is Attendance.IF_NEED_BE:
            return self._paint(f" ({mark}) ", self.config.if_need_be_color)
        return ' ' * CELL_WIDTH

    def render_to(self, poll: PollResult, stream: TextIO) -> None:
        """Render the whole report, then write it to a text stream."""
        lines = self.render(poll)
        stream.write('\n'.join(lines) + '\n')

    def _paint(self, text: str, color: str) -> str:
        if not self.config.color:
            return text
        return f"{color}{text}{self.config.reset}"
