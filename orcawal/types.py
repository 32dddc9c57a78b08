"""Block references and compact authority sets."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Iterator, Tuple

AuthorityIndex = int
RoundNumber = int
BlockDigest = bytes

DIGEST_LEN = 32
MAX_AUTHORITIES = 128
_EMPTY_DIGEST = bytes(DIGEST_LEN)


def format_authority_index(index: AuthorityIndex) -> str:
    """Render an authority as a letter: 0 is 'A', 1 is 'B' and so on."""
    return chr((ord("A") + index) & 0xFF)


def format_authority_round(index: AuthorityIndex, round_number: RoundNumber) -> str:
    """Render an authority and round, as in 'B3'."""
    return f"{format_authority_index(index)}{round_number}"


@functools.total_ordering
@dataclass(frozen=True)
class BlockReference:
    """Identifies a block by author, round and digest.

    References sort by round first, then by author, then by digest.
    """

    authority: AuthorityIndex = 0
    round: RoundNumber = 0
    digest: BlockDigest = field(default=_EMPTY_DIGEST)

    def _key(self) -> Tuple[int, int, bytes]:
        return (self.round, self.authority, self.digest)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BlockReference):
            return NotImplemented
        return self._key() < other._key()

    def author_round(self) -> Tuple[AuthorityIndex, RoundNumber]:
        return (self.authority, self.round)

    def author_digest(self) -> Tuple[AuthorityIndex, BlockDigest]:
        return (self.authority, self.digest)

    def __str__(self) -> str:
        if self.authority < 26:
            return format_authority_round(self.authority, self.round)
        return f"[{self.authority:02}]{self.round}"

    def __repr__(self) -> str:
        return str(self)


class AuthoritySet:
    """A set of authority indices below 128, stored as a bit mask."""

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0) -> None:
        self._bits = bits

    @staticmethod
    def _bit(authority: AuthorityIndex) -> int:
        if not 0 <= authority < MAX_AUTHORITIES:
            raise ValueError(
                f"authority index must be in [0, {MAX_AUTHORITIES}), got {authority}"
            )
        return 1 << authority

    def insert(self, authority: AuthorityIndex) -> bool:
        """Add an authority; return False if it was already present."""
        bit = self._bit(authority)
        if self._bits & bit:
            return False
        self._bits |= bit
        return True

    def present(self) -> Iterator[AuthorityIndex]:
        """Yield the authorities in the set in ascending order."""
        return (i for i in range(MAX_AUTHORITIES) if self._bits & (1 << i))

    def clear(self) -> None:
        self._bits = 0

    def __contains__(self, authority: object) -> bool:
        return (
            isinstance(authority, int)
            and 0 <= authority < MAX_AUTHORITIES
            and bool(self._bits & (1 << authority))
        )

    def __len__(self) -> int:
        return bin(self._bits).count("1")

    def __iter__(self) -> Iterator[AuthorityIndex]:
        return self.present()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthoritySet):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"AuthoritySet({list(self.present())})"