"""Shared utility helpers."""

from wscheck.utils.paths import atomic_temp_path, clear_execute_bits, is_executable

__all__ = [
    "atomic_temp_path",
    "clear_execute_bits",
    "is_executable",
]
