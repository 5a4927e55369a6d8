"""Plain-text rendering of traversal results."""

from typing import Iterable

from share_tools.traversal import RemoteEntry

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
ROW_FORMAT = "{:<50} | {:<12} | {:<15} | {}"


def format_size(num_bytes: int) -> str:
    """Format a byte count using binary units, e.g. ``1.50 KB``."""
    if num_bytes <= 0:
        return "0 B"

    value = float(num_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.2f} {SIZE_UNITS[unit_index]}"


def render_table(entries: Iterable[RemoteEntry]) -> list[str]:
    """Render entries as table lines followed by a total count line."""
    lines = [
        ROW_FORMAT.format("Path", "Type", "Size", "Last Modified"),
        "-" * 110,
    ]

    count = 0
    for entry in entries:
        count += 1
        lines.append(
            ROW_FORMAT.format(
                entry.relative_path,
                "Directory" if entry.is_directory else "File",
                "-" if entry.is_directory else format_size(entry.size),
                entry.last_modified.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
            )
        )

    lines.append("")
    lines.append(f"Total items: {count}")
    return lines
