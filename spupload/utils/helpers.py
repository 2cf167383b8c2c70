"""Utility functions for SharePoint Uploader (spupload)."""

import os

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(num_bytes):
    """Format a byte count for display, e.g. 1310720 -> "1.25 MB"."""
    value = float(num_bytes)
    order = 0
    while value >= 1024 and order < len(SIZE_UNITS) - 1:
        order += 1
        value = value / 1024

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[order]}"


def split_folder_path(folder_path):
    """Split a slash-separated folder path into its non-empty segments."""
    return [part for part in (folder_path or "").split("/") if part]


def truncate_path(path, max_length=40):
    """Truncate a file path with ellipses if it's too long."""
    if len(path) <= max_length:
        return path

    # Try to keep the filename and some parent directory info
    filename = os.path.basename(path)
    if len(filename) >= max_length - 3:
        return f"...{filename[-(max_length-3):]}"

    remaining_space = max_length - len(filename) - 4  # "..." and "/"
    dir_part = os.path.dirname(path)
    if len(dir_part) > remaining_space:
        dir_part = dir_part[:remaining_space]
    return f"...{dir_part}/{filename}"


def validate_path_exists(path):
    """Check if a path exists and return its type."""
    if not os.path.exists(path):
        return None
    elif os.path.isfile(path):
        return "file"
    elif os.path.isdir(path):
        return "directory"
    else:
        return "other"
