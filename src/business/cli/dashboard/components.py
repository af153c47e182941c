"""Dashboard UI components.

Provides helper functions for rendering dashboard elements:
- Box panels
- Table rendering
- Money / percent formatting
"""

from typing import Optional


def format_money(value: Optional[float], signed: bool = False, na_str: str = "-") -> str:
    """Format a currency amount with thousands separators.

    Example:
        >>> format_money(12345.678)
        '12,345.68'
        >>> format_money(-50, signed=True)
        '-50.00'
    """
    if value is None:
        return na_str
    return f"{value:+,.2f}" if signed else f"{value:,.2f}"


def format_pct(
    value: Optional[float],
    decimals: int = 2,
    signed: bool = False,
    na_str: str = "-",
) -> str:
    """Format a value that is already in percent.

    Args:
        value: Percent value (7.18 = 7.18%)
        decimals: Number of decimal places
        signed: Always show the sign
        na_str: String to display if value is None

    Example:
        >>> format_pct(7.177)
        '7.18%'
        >>> format_pct(-3.5, 1, signed=True)
        '-3.5%'
    """
    if value is None:
        return na_str
    sign = "+" if signed else ""
    return f"{value:{sign}.{decimals}f}%"


def format_number(value: Optional[float], decimals: int = 2, na_str: str = "-") -> str:
    """Format a plain number, dropping trailing zeros of whole quantities."""
    if value is None:
        return na_str
    if float(value).is_integer():
        return f"{value:,.0f}"
    return f"{value:,.{decimals}f}"


def box_title(title: str, width: int = 40) -> str:
    """Create a box title line.

    Args:
        title: Title text
        width: Total width of the box

    Returns:
        Formatted title line like "┌─── Title ───────────┐"
    """
    padding = width - len(title) - 7  # 7 = "┌─── " + " " + "┐"
    if padding < 2:
        padding = 2
    return f"┌─── {title} {'─' * padding}┐"


def box_line(content: str, width: int = 40) -> str:
    """Create a box content line, truncating content that does not fit."""
    padding = width - len(content) - 4  # 4 = "│ " + " │"
    if padding < 0:
        content = content[:width - 4]
        padding = 0
    return f"│ {content}{' ' * padding} │"


def box_bottom(width: int = 40) -> str:
    return f"└{'─' * (width - 2)}┘"


def box(title: str, content: list[str], width: int = 40) -> list[str]:
    """Wrap content lines in a titled box."""
    lines = [box_title(title, width)]
    lines.extend(box_line(line, width) for line in content)
    lines.append(box_bottom(width))
    return lines


def table_width(columns: list[tuple[str, int]]) -> int:
    """Total printed width of a table row (cells plus separators)."""
    return sum(width for _, width in columns) + len(columns) + 1


def table_header(columns: list[tuple[str, int]], separator: str = "│") -> str:
    """Create a table header line.

    Args:
        columns: List of (name, width) tuples
        separator: Column separator character

    Returns:
        Header line string
    """
    parts = []
    for name, width in columns:
        parts.append(f"{name[:width]:^{width}}")
    return f"{separator}{separator.join(parts)}{separator}"


def table_separator(columns: list[tuple[str, int]], char: str = "─") -> str:
    """Create a table separator line."""
    parts = [char * width for _, width in columns]
    return f"┼{'┼'.join(parts)}┼"


def _is_numeric(val: str) -> bool:
    stripped = val.lstrip("+-").replace(",", "").replace(".", "").replace("%", "")
    return stripped.isdigit()


def table_row(values: list[str], columns: list[tuple[str, int]], separator: str = "│") -> str:
    """Create a table data row.

    Numbers are right-aligned, text is left-aligned.
    """
    parts = []
    for i, (_, width) in enumerate(columns):
        val = values[i] if i < len(values) else ""
        val = val[:width]
        if _is_numeric(val):
            parts.append(f"{val:>{width}}")
        else:
            parts.append(f"{val:<{width}}")
    return f"{separator}{separator.join(parts)}{separator}"


def table(
    columns: list[tuple[str, int]],
    rows: list[list[str]],
    footer: Optional[list[str]] = None,
) -> list[str]:
    """Render a full table: header, separator, rows and an optional footer row."""
    lines = [table_header(columns), table_separator(columns)]
    lines.extend(table_row(row, columns) for row in rows)
    if footer is not None:
        lines.append(table_separator(columns))
        lines.append(table_row(footer, columns))
    return lines


def side_by_side(left: list[str], right: list[str], gap: int = 2) -> list[str]:
    """Combine two column layouts side by side.

    Args:
        left: Lines for left column
        right: Lines for right column
        gap: Number of spaces between columns

    Returns:
        Combined lines
    """
    left_width = max(len(line) for line in left) if left else 0

    result = []
    max_lines = max(len(left), len(right))

    for i in range(max_lines):
        left_line = left[i] if i < len(left) else ""
        right_line = right[i] if i < len(right) else ""
        result.append(f"{left_line:<{left_width}}{' ' * gap}{right_line}".rstrip())

    return result
