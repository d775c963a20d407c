#!/usr/bin/env python3
"""
Name: cal
Description: displays a month or year calendar, highlighting today
License: gpl
"""

import sys
import re
import argparse
from datetime import date
from typing import NamedTuple, Optional

VERSION = '1.0.0'

MONTH_NAMES = ['January', 'February', 'March', 'April', 'May', 'June',
               'July', 'August', 'September', 'October', 'November', 'December']

DAY_HEADERS = ['Su', 'Mo', 'Tu', 'We', 'Th', 'Fr', 'Sa']

# Each day cell is 3 columns; seven of them plus one padding column.
CELL_WIDTH = 3
MONTH_WIDTH = CELL_WIDTH * 7 + 1
WEEK_ROWS = 6

REVERSE_VIDEO = '\033[7m'
RESET = '\033[0m'

INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
UINT32_MAX = 2**32 - 1


# --- Errors ---

class CalError(ValueError):
    """Base class for invalid command-line values."""


class InvalidInteger(CalError):
    def __init__(self, text: str):
        super().__init__(f'Invalid integer "{text}"')
        self.text = text


class YearOutOfRange(CalError):
    def __init__(self, text: str):
        super().__init__(f'year "{text}" not in the range 1 through 9999')
        self.text = text


class MonthOutOfRange(CalError):
    def __init__(self, text: str):
        super().__init__(f'month "{text}" not in the range 1 through 12')
        self.text = text


class InvalidMonth(CalError):
    def __init__(self, text: str):
        super().__init__(f'Invalid month "{text}"')
        self.text = text


class Config(NamedTuple):
    """A validated invocation. A month of None means the whole year."""
    month: Optional[int]
    year: int
    today: date


# --- Core Date Calculation Functions ---

def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap year rule."""
    return (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0)

def last_day_in_month(year: int, month: int) -> int:
    """Returns the number of days in a given month for a given year."""
    if not 1 <= month <= 12:
        raise ValueError(f"month {month} not in the range 1 through 12")
    month_days = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    if month == 2 and is_leap_year(year):
        return 29
    return month_days[month]

def day_of_week(year: int, month: int, day: int) -> int:
    """Calculates the day of the week (0=Sun, 1=Mon...). Zeller's congruence."""
    a = (14 - month) // 12
    y = year - a
    m = month + (12 * a) - 2
    return (day + y + y // 4 - y // 100 + y // 400 + (31 * m) // 12) % 7


# --- Formatting and Display Functions ---

def month_cells(year: int, month: int) -> list:
    """
    Lays out a month as 42 cells (six weeks of seven days).
    Each cell is a day number, or None for a blank slot.
    """
    first_weekday = day_of_week(year, month, 1)
    num_days = last_day_in_month(year, month)

    cells = [None] * first_weekday
    cells.extend(range(1, num_days + 1))
    cells.extend([None] * (WEEK_ROWS * 7 - len(cells)))
    return cells

def format_cell(day: Optional[int], highlight: bool = False) -> str:
    """Renders one 3-column cell; the highlight wraps the digits only."""
    if day is None:
        return ' ' * CELL_WIDTH
    digits = str(day)
    pad = ' ' * (CELL_WIDTH - 1 - len(digits))
    if highlight:
        digits = f"{REVERSE_VIDEO}{digits}{RESET}"
    return f"{pad}{digits} "

def format_month(year: int, month: int, print_year: bool, today: date) -> list:
    """Generates the 8 rows of a single formatted month."""
    title = MONTH_NAMES[month - 1]
    if print_year:
        title += f" {year}"
    box_width = MONTH_WIDTH - 2
    lines = [f"{title:^{box_width}}  "]
    lines.append(" ".join(DAY_HEADERS) + "  ")

    highlight_day = None
    if today.year == year and today.month == month:
        highlight_day = today.day

    cells = month_cells(year, month)
    for i in range(0, len(cells), 7):
        week = cells[i:i+7]
        week_line = "".join(format_cell(day, day is not None and day == highlight_day)
                            for day in week)
        lines.append(week_line + " ")

    return lines

def format_year(year: int, today: date) -> list:
    """Lays out the twelve months of a year three to a row."""
    lines = [f"{year:>32}"]
    months_data = [format_month(year, m, False, today) for m in range(1, 13)]

    for m_row in range(0, 12, 3):
        if m_row > 0:
            lines.append("")
        # The two trailing columns of each month separate it from the next.
        for row in zip(*months_data[m_row:m_row + 3]):
            lines.append("".join(row))

    return lines


# --- Argument Parsing ---

def parse_int(text: str) -> int:
    """
    Parses a signed 32-bit integer literal: an optional sign followed by
    ASCII digits. Anything else, including values that overflow, is invalid.
    """
    if not re.fullmatch(r'[+-]?[0-9]+', text):
        raise InvalidInteger(text)
    num = int(text)
    if not INT32_MIN <= num <= INT32_MAX:
        raise InvalidInteger(text)
    return num

def parse_year(text: str) -> int:
    """Parses a year in the range 1 through 9999."""
    year = parse_int(text)
    if not 1 <= year <= 9999:
        raise YearOutOfRange(text)
    return year

def parse_month(text: str) -> int:
    """
    Parses a month number, or a case-insensitive prefix of a month name.
    Only unsigned 32-bit literals count as numbers; "-1" is tried as a name.
    The first month (in calendar order) whose name starts with the text wins.
    """
    if re.fullmatch(r'\+?[0-9]+', text) and int(text) <= UINT32_MAX:
        month = int(text)
        if not 1 <= month <= 12:
            raise MonthOutOfRange(text)
        return month

    lower = text.lower()
    for i, name in enumerate(MONTH_NAMES, 1):
        if name.lower().startswith(lower):
            return i
    raise InvalidMonth(text)

def _argument_type(parse):
    """Adapts a parse_* function to an argparse type callable."""
    def convert(text: str) -> int:
        try:
            return parse(text)
        except CalError as e:
            raise argparse.ArgumentTypeError(str(e)) from e
    convert.__name__ = parse.__name__
    return convert

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Displays a calendar.",
        usage="%(prog)s [-m month] [-y] [year]"
    )
    parser.add_argument('-V', '--version', action='version',
                        version=f"%(prog)s {VERSION}")
    parser.add_argument('-m', '--month', type=_argument_type(parse_month),
                        help='Month name or number (1-12).')
    parser.add_argument('-y', '--year', dest='show_current_year', action='store_true',
                        help='Show the whole current year.')
    parser.add_argument('year', nargs='?', type=_argument_type(parse_year),
                        help='Year (1-9999).')
    return parser

def get_args(argv: Optional[list] = None, today: Optional[date] = None) -> Config:
    """Parses the command line into a Config, defaulting from today's date."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.show_current_year and (args.month is not None or args.year is not None):
        parser.error("-y/--year cannot be used with -m/--month or a year")

    if today is None:
        today = date.today()

    month, year = args.month, args.year
    if args.show_current_year:
        month, year = None, today.year
    elif month is None and year is None:
        month, year = today.month, today.year
    elif year is None:
        year = today.year

    return Config(month=month, year=year, today=today)

def run(config: Config):
    """Prints the month or year described by config."""
    if config.month is not None:
        lines = format_month(config.year, config.month, True, config.today)
    else:
        lines = format_year(config.year, config.today)
    print("\n".join(lines))

def main(argv: Optional[list] = None):
    """Parses arguments and displays the appropriate calendar."""
    config = get_args(argv)
    try:
        run(config)
    except (IOError, KeyboardInterrupt):
        sys.stderr.close() # Silence errors on broken pipe or Ctrl+C
        sys.exit(1)

if __name__ == "__main__":
    main()
