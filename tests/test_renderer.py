"""Unit tests for ReportRenderer."""
import io
import re

import pytest

from processor.errors import InvalidDateFormat
from processor.models import Attendance, Participant, PollResult
from report.layout import CELL_WIDTH
from report.renderer import (
    ANSI_GREEN,
    ANSI_ORANGE,
    ANSI_RESET,
    RenderConfig,
    ReportRenderer,
)

ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;]*m')


def strip_ansi(text):
    return ANSI_ESCAPE.sub('', text)


def participant(name, ok=(), ifneedbe=()):
    availability = {date: Attendance.IF_NEED_BE for date in ifneedbe}
    availability.update({date: Attendance.OK for date in ok})
    return Participant(name=name, availability=availability)


@pytest.fixture
def plain_renderer():
    return ReportRenderer(RenderConfig(color=False))


@pytest.fixture
def sample_poll():
    """Three participants over three dates."""
    return PollResult(
        name='Board games',
        description='Which evening works?',
        dates=('20240101', '20240102', '20240103'),
        responses=(
            participant('Alice', ok=['20240101', '20240102']),
            participant('Bo', ok=['20240101'], ifneedbe=['20240103']),
            participant('Charlotte', ifneedbe=['20240101', '20240103']),
        )
    )


class TestReportRenderer:
    """Test cases for ReportRenderer class."""

    def test_single_ok_participant(self, plain_renderer):
        """Test the full report for one participant on one date."""
        poll = PollResult(
            name='Lunch',
            description='Where and when',
            dates=('20240101',),
            responses=(participant('Al', ok=['20240101']),)
        )

        lines = plain_renderer.render(poll)

        assert lines == [
            'Lunch',
            'Where and when',
            '',
            '     Mon',
            '     01 ',
            '     Jan',
            '',
            'Al    ✓  ',
            '',
            '      1',
            '       ',
        ]

    def test_single_ok_participant_colored(self):
        """Test that an OK cell is painted green and reset."""
        poll = PollResult(
            name='Lunch',
            description='',
            dates=('20240101',),
            responses=(participant('Al', ok=['20240101']),)
        )

        lines = ReportRenderer().render(poll)

        assert lines[7] == f"Al  {ANSI_GREEN}  ✓  {ANSI_RESET}"

    def test_ok_and_if_need_be_counts(self, plain_renderer):
        """Test footer counts for one OK and one if-need-be on a date."""
        poll = PollResult(
            name='Poll',
            description='',
            dates=('20240101',),
            responses=(
                participant('Al', ok=['20240101']),
                participant('Bea', ifneedbe=['20240101']),
            )
        )

        lines = plain_renderer.render(poll)

        assert lines[7] == ' Al    ✓  '
        assert lines[8] == 'Bea   (✓) '
        assert lines[-2] == '       1'
        assert lines[-1] == '      +1'

    def test_if_need_be_cell_colored(self):
        """Test that an if-need-be cell is painted orange."""
        renderer = ReportRenderer()

        cell = renderer.cell(Attendance.IF_NEED_BE)

        assert cell == f"{ANSI_ORANGE} (✓) {ANSI_RESET}"

    def test_none_cell_has_no_color(self):
        """Test that empty cells carry no escape sequences."""
        renderer = ReportRenderer()

        assert renderer.cell(Attendance.NONE) == ' ' * CELL_WIDTH

    def test_custom_colors(self):
        """Test that colour codes come from the configuration."""
        config = RenderConfig(ok_color='<ok>', if_need_be_color='<maybe>', reset='</>')
        renderer = ReportRenderer(config)

        assert renderer.cell(Attendance.OK) == '<ok>  ✓  </>'
        assert renderer.cell(Attendance.IF_NEED_BE) == '<maybe> (✓) </>'

    def test_color_disabled_has_no_escapes(self, plain_renderer, sample_poll):
        """Test that no escape sequence is emitted with colour off."""
        lines = plain_renderer.render(sample_poll)

        assert not any('\x1b' in line for line in lines)

    def test_names_right_aligned(self, plain_renderer, sample_poll):
        """Test that names are right-aligned to the longest name."""
        lines = plain_renderer.render(sample_poll)
        body = lines[7:10]

        assert [line[:9] for line in body] == ['    Alice', '       Bo', 'Charlotte']
        assert all(line[9:11] == '  ' for line in body)

    def test_cells_are_fixed_width(self, sample_poll):
        """Test that every row has one cell per date of CELL_WIDTH characters."""
        lines = [strip_ansi(line) for line in ReportRenderer().render(sample_poll)]
        name_width = len('Charlotte')
        cells = CELL_WIDTH * len(sample_poll.dates)

        headers = lines[3:6]
        body = lines[7:10]
        footer = lines[11:13]
        assert all(len(row) == name_width + 1 + cells for row in headers)
        assert all(len(row) == name_width + 2 + cells for row in body)
        assert all(len(row) == name_width + cells for row in footer)

    def test_footer_counts_match_markers(self, plain_renderer, sample_poll):
        """Test per-date totals against the markers in the body."""
        lines = plain_renderer.render(sample_poll)
        name_width = len('Charlotte')

        def cells(row, offset):
            row = row[offset:]
            return [row[i:i + CELL_WIDTH] for i in range(0, len(row), CELL_WIDTH)]

        body = [cells(line, name_width + 2) for line in lines[7:10]]
        oks = cells(lines[-2], name_width)
        ifneedbes = cells(lines[-1], name_width)

        for index in range(len(sample_poll.dates)):
            column = [row[index] for row in body]
            ok_total = column.count('  ✓  ')
            ifneedbe_total = column.count(' (✓) ')
            assert int(oks[index]) == ok_total
            if ifneedbe_total:
                assert ifneedbes[index].strip() == f"+{ifneedbe_total}"
            else:
                assert ifneedbes[index] == ' ' * CELL_WIDTH

        assert oks == ['    2', '    1', '    0']
        assert ifneedbes == ['   +1', '     ', '   +2']

    def test_no_participants(self, plain_renderer):
        """Test a poll nobody has answered yet."""
        poll = PollResult(
            name='Empty',
            description='No answers',
            dates=('20240101', '20240102'),
            responses=()
        )

        lines = plain_renderer.render(poll)

        assert lines == [
            'Empty',
            'No answers',
            '',
            '   Mon  Tue',
            '   01   02 ',
            '   Jan  Jan',
            '',
            '',
            '    0    0',
            '          ',
        ]

    def test_render_to_writes_all_lines(self, plain_renderer, sample_poll):
        """Test that render_to writes the rendered lines with newlines."""
        stream = io.StringIO()

        plain_renderer.render_to(sample_poll, stream)

        expected = plain_renderer.render(sample_poll)
        assert stream.getvalue() == '\n'.join(expected) + '\n'

    def test_render_to_writes_nothing_on_bad_date(self, plain_renderer):
        """Test that a failing render leaves the stream untouched."""
        poll = PollResult(
            name='Poll',
            description='',
            dates=('20240101', '2024-01-02'),
            responses=(participant('Al'),)
        )
        stream = io.StringIO()

        with pytest.raises(InvalidDateFormat):
            plain_renderer.render_to(poll, stream)

        assert stream.getvalue() == ''

    def test_invalid_date_aborts_render(self, plain_renderer):
        """Test that an invalid date fails before any line is produced."""
        poll = PollResult(
            name='Poll',
            description='',
            dates=('2024-01-01',),
            responses=(participant('Al'),)
        )

        with pytest.raises(InvalidDateFormat) as exc_info:
            plain_renderer.render(poll)

        assert exc_info.value.date == '2024-01-01'
