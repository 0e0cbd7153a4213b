"""
Helpers for the sequences used as trie keys and edge labels.

Any python sequence that supports slicing, ``+`` and ``len`` can serve as a key. str, bytes and tuples are used
as-is, other iterables are converted to tuples so that edge labels stay hashable.
"""
from typing import Any, Callable, Optional, Sequence, TypeVar

from seqtrie.exceptions import InvalidKeyError

S = TypeVar('S', bound=Sequence)

native_sequence_types = (str, bytes, tuple)


def identity(x):
    return x


def as_sequence(key) -> Sequence:
    """
    normalize a key given to a trie into a sliceable, hashable sequence

    >>> as_sequence('abc')
    'abc'
    >>> as_sequence(['a', 'b'])
    ('a', 'b')
    >>> as_sequence(iter(range(2)))
    (0, 1)
    """
    if key is None:
        raise InvalidKeyError(key)
    if isinstance(key, native_sequence_types):
        return key
    try:
        return tuple(key)
    except TypeError:
        raise InvalidKeyError(key) from None


def is_empty(sequence: Optional[Sequence]) -> bool:
    return sequence is None or len(sequence) == 0


def subsequence(sequence: S, start: int, end: Optional[int] = None) -> S:
    """
    :return: the symbols of sequence from start (inclusive) to end (exclusive, defaults to the sequence's end)
    """
    if end is None:
        return sequence[start:]
    return sequence[start:end]


def head(sequence: S) -> S:
    """
    :return: a sequence holding only the first symbol of sequence
    """
    return sequence[:1]


def concat(prefix: Optional[S], suffix: Optional[S]) -> Optional[S]:
    """
    concatenate two sequences, either of which may be None

    >>> concat(None, 'ab')
    'ab'
    >>> concat('ab', 'c')
    'abc'
    >>> concat(None, None) is None
    True
    """
    if prefix is None:
        return suffix
    if suffix is None:
        return prefix
    return prefix + suffix


def common_prefix_length(sequence1: Sequence, sequence2: Sequence) -> int:
    """
    >>> common_prefix_length('tea', 'ted')
    2
    >>> common_prefix_length('in', 'inn')
    2
    >>> common_prefix_length('a', 'b')
    0
    """
    length = min(len(sequence1), len(sequence2))
    for i in range(length):
        if sequence1[i] != sequence2[i]:
            return i
    return length


def binary_search(size: int, getter: Callable[[int], Any], target, key: Callable[[Any], Any] = None) \
        -> Optional[int]:
    """
    search an ordered, random-access collection for an element equivalent to target

    :param size: the number of elements in the collection
    :param getter: a function returning the element at an index
    :param target: the element to look for
    :param key: the key the collection is ordered by, defaults to the elements themselves
    :return: the index of an element whose key is equal to the target's, or None if none exists
    """
    if key is None:
        key = identity
    target_key = key(target)
    low = 0
    high = size - 1
    while low <= high:
        pivot = (low + high) // 2
        pivot_key = key(getter(pivot))
        if pivot_key < target_key:
            low = pivot + 1
        elif target_key < pivot_key:
            high = pivot - 1
        else:
            return pivot
    return None
