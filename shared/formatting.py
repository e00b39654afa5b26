"""Human-readable rendering of byte counts and ratios."""

SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def format_size(num_bytes: int) -> str:
    """Format a byte count with 1024-based units, capped at TiB.

    Bytes are rendered without decimals ("512 B"), every larger unit with
    exactly one ("1.5 MiB").
    """
    size = float(num_bytes)
    unit_idx = 0
    while size >= 1024.0 and unit_idx < len(SIZE_UNITS) - 1:
        size /= 1024.0
        unit_idx += 1
    if unit_idx == 0:
        return f"{size:.0f} {SIZE_UNITS[unit_idx]}"
    return f"{size:.1f} {SIZE_UNITS[unit_idx]}"


def format_percentage(count: int, total: int) -> str:
    """Format ``count / total`` as a percentage with one decimal place."""
    if total == 0:
        return "0.0%"
    return f"{count * 100.0 / total:.1f}%"


__all__ = ["format_size", "format_percentage", "SIZE_UNITS"]
