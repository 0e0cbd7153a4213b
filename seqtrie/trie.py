from __future__ import annotations

import logging
from collections import deque
from functools import partial
from typing import Any, Callable, Generic, Iterator, MutableMapping, Optional, Sequence, Tuple, TypeVar

from seqtrie.exceptions import ConcurrentModificationError, InvalidKeyError, SubTrieNotFoundError, \
    UnsupportedOperationError
from seqtrie.node import EMPTY, TrieNode
from seqtrie.sequence import as_sequence, concat, is_empty, subsequence
from seqtrie.structure import Operation, PatriciaStructure, Structure, UncompressedStructure
from seqtrie.successors import HashSuccessors, SortedSuccessors, SuccessorStore

logger = logging.getLogger(__name__)

V = TypeVar('V')

_no_default = object()


class Trie(Generic[V], MutableMapping[Sequence, V]):
    """
    A trie, mapping sequences to values. How sequences are laid out along edges is decided by the trie's structure,
    how each node stores its edges is decided by the trie's successor store.
    """
    # different trie types may have different node types
    node_factory: Callable[[SuccessorStore], TrieNode[V]] = TrieNode
    successors_factory: Callable[[], SuccessorStore] = HashSuccessors
    structure_factory: Callable[[], Structure] = UncompressedStructure

    def __init__(self, update_arg=None, *, structure: Structure = None,
                 successors_factory: Callable[[], SuccessorStore] = None, **kwargs):
        """
        :param update_arg: a mapping or iterable of key-value pairs to fill the trie with
        :param structure: the structure of the trie, defaults to a new instance of structure_factory
        :param successors_factory: a callable creating empty successor stores, defaults to the class's
        :param kwargs: additional entries to fill the trie with. Entries named structure or successors_factory (or
         key, for sorted tries) are taken as the options above, pass them through update_arg instead
        """
        if structure is None:
            structure = self.structure_factory()
        if successors_factory is not None:
            self.successors_factory = successors_factory
        if structure.requires_sorted_successors and not self.successors_factory().sorted:
            raise UnsupportedOperationError(structure, 'unsorted successor stores')
        self.structure = structure
        self.root: Optional[TrieNode[V]] = None
        self._modification_count = 0
        if update_arg or kwargs:
            self.update(update_arg or (), **kwargs)

    def _empty_like(self) -> Trie[V]:
        return type(self)(structure=self.structure, successors_factory=self.successors_factory)

    def _create_root(self) -> TrieNode[V]:
        return self.node_factory(self.successors_factory())

    @staticmethod
    def _check_key(key) -> Sequence:
        sequence = as_sequence(key)
        if is_empty(sequence):
            raise InvalidKeyError(key)
        return sequence

    def _get_node(self, sequence: Sequence) -> Optional[TrieNode[V]]:
        current = self.root
        if current is None:
            return None
        suffix = sequence
        while not is_empty(suffix):
            pair = self.structure.on_get_successor(current, suffix, Operation.GET)
            if pair is None:
                return None
            current, suffix = pair
        return current

    def put(self, key, value: V) -> Optional[V]:
        """
        set the value of a key

        :return: the key's previous value, or None if it had none
        """
        previous = self._put(self._check_key(key), value)
        return None if previous is EMPTY else previous

    def _put(self, sequence: Sequence, value):
        if self.root is None:
            self.root = self._create_root()
        current = self.root
        suffix = sequence
        while not is_empty(suffix):
            pair = self.structure.on_get_successor(current, suffix, Operation.PUT)
            if pair is None:
                break
            current, suffix = pair
        while not is_empty(suffix):
            current, suffix = self.structure.on_add_successor(current, suffix)
        previous = current.set_value(value)
        self._modification_count += 1
        return previous

    def get(self, key, default: V = None) -> V:
        node = self._get_node(self._check_key(key))
        if node is None:
            return default
        return node.value(default)

    def __getitem__(self, item):
        ret = self.get(item, EMPTY)
        if ret is EMPTY:
            raise KeyError(item)
        return ret

    def __setitem__(self, key, value):
        self.put(key, value)

    def contains_key(self, key) -> bool:
        node = self._get_node(self._check_key(key))
        return node is not None and node.has_value

    def __contains__(self, item):
        return self.contains_key(item)

    def setdefault(self, key, default=None):
        sequence = self._check_key(key)
        node = self._get_node(sequence)
        if node is not None and node.has_value:
            return node.inner_value
        self._put(sequence, default)
        return default

    def remove(self, key) -> Optional[V]:
        """
        remove a key from the trie

        :return: the key's value, or None if the key was not in the trie
        """
        ret = self._remove(self._check_key(key))
        return None if ret is EMPTY else ret

    def _remove(self, sequence: Sequence):
        current = self.root
        if current is None:
            return EMPTY
        # the deepest node on the path that must survive the removal, and the edge leaving it along the path
        retained = current
        retained_label = None
        suffix = sequence
        while not is_empty(suffix):
            pair = self.structure.on_get_successor(current, suffix, Operation.REMOVE)
            if pair is None:
                return EMPTY
            successor, remainder = pair
            if current is self.root or current.successor_count > 1 or current.has_value:
                retained = current
                retained_label = subsequence(suffix, 0, len(suffix) - len(remainder))
            current, suffix = successor, remainder

        if not current.has_value:
            return EMPTY
        ret = current.set_value()
        if current.has_successors:
            self.structure.on_deleted_value(current)
        else:
            self.structure.on_remove_successor(retained, retained_label)
        if not self.root.aggregate_count:
            self.root = None
            logger.debug('last value removed, trie reset')
        self._modification_count += 1
        return ret

    def pop(self, key, default: V = _no_default):
        ret = self._remove(self._check_key(key))
        if ret is not EMPTY:
            return ret
        if default is _no_default:
            raise KeyError(key)
        return default

    def __delitem__(self, key):
        self.pop(key)

    def sub_trie(self, key) -> Trie[V]:
        """
        :return: a new, independent trie holding all the entries whose keys start with key
        """
        sequence = self._check_key(key)
        node, path = self._locate_sub_trie(sequence)
        if node is None:
            raise SubTrieNotFoundError(key)
        ret = self._empty_like()
        root = self.structure.get_sub_trie(path, ret._create_root(), node, True)
        if root.aggregate_count:
            ret.root = root
        logger.debug('extracted sub-trie of %d entries for %r', len(ret), key)
        return ret

    def _locate_sub_trie(self, sequence: Sequence) -> Tuple[Optional[TrieNode[V]], Optional[Sequence]]:
        """
        :return: the node sequence leads to, and the path from the root to that node
        """
        current = self.root
        if current is None:
            return None, None
        consumed = 0
        suffix = sequence
        while not is_empty(suffix):
            pair = self.structure.on_get_successor(current, suffix, Operation.SUB_TRIE)
            if pair is None:
                return None, None
            successor, remainder = pair
            if len(remainder) > len(suffix):
                # sequence ends within an edge, remainder is the label of that edge
                return successor, concat(subsequence(sequence, 0, consumed), remainder)
            consumed += len(suffix) - len(remainder)
            current, suffix = successor, remainder
        return current, sequence

    def size(self) -> int:
        return self.root.aggregate_count if self.root is not None else 0

    def __len__(self):
        return self.size()

    def is_empty(self) -> bool:
        return self.root is None

    def clear(self):
        self.root = None
        self._modification_count += 1

    def _check_modification(self, expected: int):
        if self._modification_count != expected:
            raise ConcurrentModificationError(expected, self._modification_count)

    def entries(self) -> Iterator[Tuple[Sequence, V]]:
        """
        iterate over all key-value pairs, breadth first

        :raises ConcurrentModificationError: if the trie is modified during iteration
        """
        return self._breadth_first(self._modification_count, self.root)

    def _breadth_first(self, expected: int, root: Optional[TrieNode[V]]):
        queue = deque()
        if root is not None:
            queue.append((root, None))
        while queue:
            self._check_modification(expected)
            node, key = queue.popleft()
            for label, successor in node.edges():
                queue.append((successor, concat(key, label)))
            if node.has_value:
                yield key, node.inner_value
        self._check_modification(expected)

    def items(self):
        return self.entries()

    def __iter__(self):
        return (k for (k, _) in self.entries())

    def values(self):
        return (v for (_, v) in self.entries())

    def node_count(self) -> int:
        """
        :return: the number of nodes in the trie, including the root
        """
        if self.root is None:
            return 0
        ret = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            ret += 1
            stack.extend(e.node for e in node.edges())
        return ret


class SortedTrie(Trie[V]):
    """
    A trie whose nodes keep their edges ordered
    """
    successors_factory = SortedSuccessors

    def __init__(self, update_arg=None, *, key: Callable[[Sequence], Any] = None, structure: Structure = None,
                 successors_factory: Callable[[], SuccessorStore] = None, **kwargs):
        """
        :param key: the ordering key of edge labels, defaults to lexicographic order
        :param kwargs: additional entries to fill the trie with, an entry named key must be passed through update_arg
        """
        if key is not None and not callable(key):
            raise TypeError(f'key must be a callable, got {key!r}')
        if successors_factory is None:
            successors_factory = partial(SortedSuccessors, key)
        self.key = key
        super().__init__(update_arg, structure=structure, successors_factory=successors_factory, **kwargs)

    def _empty_like(self):
        return type(self)(key=self.key, structure=self.structure, successors_factory=self.successors_factory)

    def _first_entry(self) -> Optional[Tuple[Sequence, TrieNode[V]]]:
        current = self.root
        key = None
        while current is not None and not current.has_value and current.has_successors:
            label, current = current.first_edge()
            key = concat(key, label)
        if current is None or not current.has_value:
            return None
        return key, current

    def first_entry(self) -> Optional[Tuple[Sequence, V]]:
        """
        :return: the entry with the lowest key, or None if the trie is empty
        """
        found = self._first_entry()
        if found is None:
            return None
        key, node = found
        return key, node.inner_value

    def last_entry(self) -> Optional[Tuple[Sequence, V]]:
        """
        :return: the entry with the highest key, or None if the trie is empty
        """
        current = self.root
        key = None
        while current is not None and current.has_successors:
            label, current = current.last_edge()
            key = concat(key, label)
        if current is None or not current.has_value:
            return None
        return key, current.inner_value

    def poll_first_entry(self) -> Optional[Tuple[Sequence, V]]:
        """
        remove and return the entry with the lowest key

        :return: the removed entry, or None if the trie is empty
        """
        found = self._first_entry()
        if found is None:
            return None
        key, _ = found
        return key, self._remove(key)

    def first_key(self) -> Sequence:
        entry = self.first_entry()
        if entry is None:
            raise KeyError('first_key of empty trie')
        return entry[0]

    def last_key(self) -> Sequence:
        entry = self.last_entry()
        if entry is None:
            raise KeyError('last_key of empty trie')
        return entry[0]

    def ascending_entries(self) -> Iterator[Tuple[Sequence, V]]:
        """
        iterate over all key-value pairs in ascending key order

        :raises ConcurrentModificationError: if the trie is modified during iteration
        """
        return self._depth_first(self._modification_count, self.root)

    def _depth_first(self, expected: int, root: Optional[TrieNode[V]]):
        stack = []
        if root is not None:
            stack.append((root, None))
        while stack:
            self._check_modification(expected)
            node, key = stack.pop()
            stack.extend((successor, concat(key, label)) for (label, successor) in reversed(list(node.edges())))
            if node.has_value:
                yield key, node.inner_value
        self._check_modification(expected)


class HashTrie(Trie[V]):
    """
    An uncompressed trie that stores successors in hash tables
    """
    successors_factory = HashSuccessors
    structure_factory = UncompressedStructure


class SortedListTrie(SortedTrie[V]):
    """
    An uncompressed trie that stores successors in sorted lists
    """
    structure_factory = UncompressedStructure


class PatriciaTrie(SortedTrie[V]):
    """
    A trie that merges chains of valueless, single-successor nodes into single edges
    """
    structure_factory = PatriciaStructure
