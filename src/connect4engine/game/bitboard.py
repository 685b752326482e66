"""
Fixed-width bit sets.

A FixedBitSet is a bit vector of ``num_words`` 64-bit words. The whole
value is held in a single Python int, so shifts and bitwise algebra are
one big-integer operation followed by a mask to the fixed capacity.

Bit i lives in word i // 64 at offset i % 64 (word 0 is least significant).
Only indices below the board area are meaningful; callers keep the bits
above it clear by masking, the bit set itself does not.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


def words_for_board(width: int, height: int) -> int:
    """Number of 64-bit words needed for a width x height board."""
    return -(-(width * height) // WORD_BITS)


class FixedBitSet:
    """
    Immutable fixed-capacity bit set.

    Operations that change bits (set, clear, shifts, algebra) return a new
    instance. In-place operators rebind the name to the result.

    Args:
        num_words: Number of 64-bit words
        bits: Initial value; bits beyond the capacity are discarded
    """

    __slots__ = ("_num_words", "_bits")

    def __init__(self, num_words: int, bits: int = 0):
        assert num_words >= 1, f"num_words must be positive, got {num_words}"
        self._num_words = num_words
        self._bits = bits & ((1 << (num_words * WORD_BITS)) - 1)

    # --- Constructors ---

    @classmethod
    def empty(cls, num_words: int) -> FixedBitSet:
        return cls(num_words)

    @classmethod
    def single(cls, num_words: int, index: int) -> FixedBitSet:
        assert 0 <= index < num_words * WORD_BITS, f"bit index {index} out of range"
        return cls(num_words, 1 << index)

    @classmethod
    def from_words(cls, words: Iterable[int]) -> FixedBitSet:
        words = list(words)
        bits = 0
        for i, word in enumerate(words):
            bits |= (word & WORD_MASK) << (i * WORD_BITS)
        return cls(len(words), bits)

    @classmethod
    def from_indices(cls, num_words: int, indices: Iterable[int]) -> FixedBitSet:
        bits = 0
        for index in indices:
            assert 0 <= index < num_words * WORD_BITS, f"bit index {index} out of range"
            bits |= 1 << index
        return cls(num_words, bits)

    # --- Introspection ---

    @property
    def num_words(self) -> int:
        return self._num_words

    @property
    def capacity(self) -> int:
        return self._num_words * WORD_BITS

    @property
    def bits(self) -> int:
        """The raw value as a non-negative int."""
        return self._bits

    @property
    def words(self) -> tuple[int, ...]:
        return tuple(
            (self._bits >> (i * WORD_BITS)) & WORD_MASK for i in range(self._num_words)
        )

    # --- Single-bit access ---

    def get(self, index: int) -> bool:
        assert 0 <= index < self.capacity, f"bit index {index} out of range"
        return (self._bits >> index) & 1 == 1

    def set(self, index: int) -> FixedBitSet:
        assert 0 <= index < self.capacity, f"bit index {index} out of range"
        return FixedBitSet(self._num_words, self._bits | (1 << index))

    def clear(self, index: int) -> FixedBitSet:
        assert 0 <= index < self.capacity, f"bit index {index} out of range"
        return FixedBitSet(self._num_words, self._bits & ~(1 << index))

    # --- Whole-set queries ---

    def is_empty(self) -> bool:
        return self._bits == 0

    def is_nonzero(self) -> bool:
        return self._bits != 0

    def __bool__(self) -> bool:
        return self._bits != 0

    def count(self) -> int:
        """Population count."""
        return self._bits.bit_count()

    def lowest_bit_index(self) -> Optional[int]:
        if self._bits == 0:
            return None
        return (self._bits & -self._bits).bit_length() - 1

    def iter_ones(self) -> Iterator[int]:
        """Yield set-bit indices in ascending order."""
        work = self._bits
        while work:
            low = work & -work
            yield low.bit_length() - 1
            work ^= low

    # --- Shifts ---

    def shift_left(self, n: int) -> FixedBitSet:
        """Shift toward higher indices; bits past the top are lost."""
        if n == 0:
            return self
        if n >= self.capacity:
            return FixedBitSet(self._num_words)
        return FixedBitSet(self._num_words, self._bits << n)

    def shift_right(self, n: int) -> FixedBitSet:
        """Shift toward lower indices; bits below index 0 are lost."""
        if n == 0:
            return self
        if n >= self.capacity:
            return FixedBitSet(self._num_words)
        return FixedBitSet(self._num_words, self._bits >> n)

    # --- Algebra ---

    def _check(self, other: FixedBitSet) -> None:
        if other._num_words != self._num_words:
            raise ValueError(
                f"Bit set width mismatch: {self._num_words} vs {other._num_words} words"
            )

    def andnot(self, other: FixedBitSet) -> FixedBitSet:
        """Bits in self that are not in other."""
        self._check(other)
        return FixedBitSet(self._num_words, self._bits & ~other._bits)

    def __and__(self, other: FixedBitSet) -> FixedBitSet:
        self._check(other)
        return FixedBitSet(self._num_words, self._bits & other._bits)

    def __or__(self, other: FixedBitSet) -> FixedBitSet:
        self._check(other)
        return FixedBitSet(self._num_words, self._bits | other._bits)

    def __xor__(self, other: FixedBitSet) -> FixedBitSet:
        self._check(other)
        return FixedBitSet(self._num_words, self._bits ^ other._bits)

    def __invert__(self) -> FixedBitSet:
        return FixedBitSet(self._num_words, ~self._bits)

    # Immutable, so the augmented forms just rebind
    __iand__ = __and__
    __ior__ = __or__
    __ixor__ = __xor__

    # --- Value semantics ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedBitSet):
            return NotImplemented
        return self._num_words == other._num_words and self._bits == other._bits

    def __hash__(self) -> int:
        return hash((self._num_words, self._bits))

    def __repr__(self) -> str:
        return f"FixedBitSet(num_words={self._num_words}, bits={self._bits:#x})"
