"""Transactions and the locators that point at them inside blocks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterator

from orcawal.types import BlockReference

TIMESTAMP_LEN = 8
RANDOM_LEN = 8
# Largest offset a range may reach once expanded.
MAX_RANGE_LEN = 1024 * 1024


@dataclass(frozen=True)
class Transaction:
    """An opaque transaction payload."""

    data: bytes = b""

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True, order=True)
class TransactionLocator:
    """Points at the transaction at ``offset`` among a block's statements."""

    block: BlockReference
    offset: int

    def __str__(self) -> str:
        return f"{self.block}:{self.offset}"

    def __repr__(self) -> str:
        return str(self)


@dataclass(frozen=True, order=True)
class TransactionLocatorRange:
    """A contiguous run of transaction offsets within one block."""

    block: BlockReference
    offset_start_inclusive: int
    offset_end_exclusive: int

    @classmethod
    def one(cls, locator: TransactionLocator) -> "TransactionLocatorRange":
        """A range holding exactly the given locator."""
        return cls(locator.block, locator.offset, locator.offset + 1)

    def range(self) -> range:
        return range(self.offset_start_inclusive, self.offset_end_exclusive)

    def locators(self) -> Iterator[TransactionLocator]:
        """Yield a locator for every offset in the range, in order."""
        return (TransactionLocator(self.block, offset) for offset in self.range())

    def __len__(self) -> int:
        return self.offset_end_exclusive - self.offset_start_inclusive

    def verify(self) -> None:
        """Raise ValueError if the range is reversed or too large."""
        if self.offset_end_exclusive < self.offset_start_inclusive:
            raise ValueError(
                "offset_end_exclusive must be greater or equal offset_start_inclusive: "
                f"{self.offset_end_exclusive}, {self.offset_start_inclusive}"
            )
        length = len(self)
        if length >= MAX_RANGE_LEN:
            raise ValueError(f"Include is too large when uncompressed: {length}")
        if self.offset_end_exclusive >= MAX_RANGE_LEN:
            raise ValueError(
                "offset_end_exclusive is too large when uncompressed: "
                f"{self.offset_end_exclusive}"
            )

    def __str__(self) -> str:
        return (
            f"{self.block}:{self.offset_start_inclusive}:{self.offset_end_exclusive}"
        )


def extract_timestamp(transaction: Transaction) -> timedelta:
    """Read the creation time stamped in a generated transaction's first bytes."""
    data = bytes(transaction)
    if len(data) < TIMESTAMP_LEN:
        raise ValueError("Transactions should be at least 8 bytes")
    millis = int.from_bytes(data[:TIMESTAMP_LEN], "little")
    return timedelta(milliseconds=millis)