"""
File handling utilities for the insertion finder.
"""

import os
from pathlib import Path
from typing import Optional, Union

import psutil


def ensure_directory(path: Union[str, Path]) -> Path:
    """Create a directory (and parents) if needed."""
    path_obj = Path(path)
    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj


def get_file_size(filepath: Union[str, Path], human_readable: bool = True) -> str:
    """
    Get file size, optionally in human-readable format.

    Args:
        filepath: Path to file
        human_readable: If True, return human-readable string

    Returns:
        File size string
    """
    size_bytes = float(os.path.getsize(filepath))

    if not human_readable:
        return str(int(size_bytes))

    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0

    return f"{size_bytes:.1f} PB"


def table_path_for(output_path: Union[str, Path]) -> Path:
    """CSV table written alongside an insertion file."""
    output_path = Path(output_path)
    return output_path.with_name(output_path.stem + "_insertions.csv")


def get_memory_usage() -> dict:
    """
    Get current memory usage.

    Returns:
        Dictionary with memory usage information
    """
    process = psutil.Process(os.getpid())
    memory_info = process.memory_info()

    return {
        'rss_mb': memory_info.rss / (1024 * 1024),
        'vms_mb': memory_info.vms / (1024 * 1024),
        'percent': process.memory_percent(),
        'available_mb': psutil.virtual_memory().available / (1024 * 1024),
    }


def describe_memory(usage: Optional[dict] = None) -> str:
    usage = usage or get_memory_usage()
    return f"{usage['rss_mb']:.1f} MB resident, {usage['available_mb']:.0f} MB available"


__all__ = [
    'ensure_directory',
    'get_file_size',
    'table_path_for',
    'get_memory_usage',
    'describe_memory',
]
