"""
Part planning strategies for file uploads.

Implements Strategy Pattern for splitting a declared size into parts.
"""
from abc import ABC, abstractmethod
from typing import Tuple

from ..models import PartInfo, DEFAULT_PART_SIZE


class BasePartStrategy(ABC):
    """Abstract base class for part planning strategies."""

    @abstractmethod
    def part_count(self, file_size: int) -> int:
        """Number of parts needed for ``file_size`` bytes."""
        pass

    def part_info_list(self, file_size: int) -> Tuple[PartInfo, ...]:
        """Request part list, numbered from 1."""
        return tuple(
            PartInfo(part_number=i)
            for i in range(1, self.part_count(file_size) + 1)
        )


class FixedSizePartStrategy(BasePartStrategy):
    """
    Fixed-size parts (10 MiB by default).

    ``part_count == ceil(size / part_size)``; an empty file has no parts.
    """

    def __init__(self, part_size: int = DEFAULT_PART_SIZE):
        """
        Initialize with part size.

        Args:
            part_size: Size of each part in bytes
        """
        if part_size <= 0:
            raise ValueError("Part size must be positive")
        self.part_size = part_size

    def part_count(self, file_size: int) -> int:
        if file_size < 0:
            raise ValueError(f"File size must be >= 0, got {file_size}")
        return -(-file_size // self.part_size)
