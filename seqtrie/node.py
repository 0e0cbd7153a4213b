from __future__ import annotations

from typing import Generic, Iterator, Optional, Sequence, Tuple, TypeVar
from weakref import ref

from seqtrie.exceptions import InvalidKeyError
from seqtrie.sequence import is_empty
from seqtrie.successors import Edge, SuccessorStore

V = TypeVar('V')

EMPTY = object()
_no_default = object()


class TrieNode(Generic[V]):
    """
    A node for a trie, holding an optional value, its outgoing edges, and the number of values reachable through it
    """
    __slots__ = 'successors', 'inner_value', 'aggregate_count', '_predecessor', '__weakref__'

    def __init__(self, successors: SuccessorStore):
        self.successors = successors
        self.inner_value: V = EMPTY
        # number of values in this node and all of its descendants
        self.aggregate_count = 0
        # (label, weak reference to the parent), or None for detached nodes
        self._predecessor = None

    def spawn(self) -> TrieNode[V]:
        """
        :return: a new, empty node of the same kind and successor store configuration
        """
        return type(self)(self.successors.empty())

    def value(self, default=_no_default):
        """
        :return: the inner value of the node, or default if none exists
        """
        if self.inner_value is EMPTY:
            if default is _no_default:
                raise ValueError('no value')
            return default
        return self.inner_value

    @property
    def has_value(self):
        """
        :return: whether the node has an inner value
        """
        return self.inner_value is not EMPTY

    def set_value(self, value=EMPTY):
        """
        set or (if value is EMPTY) clear the inner value of the node

        :return: the previous inner value, EMPTY if there was none
        """
        previous = self.inner_value
        self.inner_value = value
        if previous is EMPTY and value is not EMPTY:
            self._adjust_count(1)
        elif previous is not EMPTY and value is EMPTY:
            self._adjust_count(-1)
        return previous

    def _adjust_count(self, delta: int):
        node = self
        while node is not None:
            node.aggregate_count += delta
            node = node._parent()

    def _parent(self) -> Optional[TrieNode[V]]:
        if self._predecessor is None:
            return None
        return self._predecessor[1]()

    @property
    def predecessor(self) -> Optional[Tuple[Sequence, TrieNode[V]]]:
        """
        :return: the label of the edge leading to this node and the node it comes from, or None for a root
        """
        if self._predecessor is None:
            return None
        label, parent_ref = self._predecessor
        parent = parent_ref()
        if parent is None:
            return None
        return label, parent

    @property
    def successor_count(self):
        return len(self.successors)

    @property
    def has_successors(self):
        return len(self.successors) > 0

    def get_successor(self, label) -> Optional[TrieNode[V]]:
        return self.successors.get(label)

    def add_successor(self, label, successor: TrieNode[V] = None) -> TrieNode[V]:
        """
        attach a successor under label, replacing any successor already there

        :param successor: the node to attach, a new empty node is created if None
        :return: the attached node
        """
        if is_empty(label):
            raise InvalidKeyError(label, 'edge label')
        if self.successors.get(label) is not None:
            self.remove_successor(label)
        if successor is None:
            successor = self.spawn()
        self.successors.add(label, successor)
        successor._predecessor = (label, ref(self))
        if successor.aggregate_count:
            self._adjust_count(successor.aggregate_count)
        return successor

    def remove_successor(self, label) -> Optional[TrieNode[V]]:
        """
        detach the successor under label

        :return: the detached node, or None if there was none
        """
        successor = self.successors.pop(label)
        if successor is not None:
            self._detach(successor)
        return successor

    def remove_successor_at(self, index: int) -> TrieNode[V]:
        successor = self.successors.pop_at(index).node
        self._detach(successor)
        return successor

    def _detach(self, successor: TrieNode[V]):
        if successor.aggregate_count:
            self._adjust_count(-successor.aggregate_count)
        successor._predecessor = None

    def index_of(self, label) -> Optional[int]:
        return self.successors.index_of(label)

    def index_of_first_symbol(self, sequence) -> Optional[int]:
        return self.successors.index_of_first_symbol(sequence)

    def label_at(self, index: int):
        return self.successors.label_at(index)

    def successor_at(self, index: int) -> TrieNode[V]:
        return self.successors.node_at(index)

    def first_edge(self) -> Optional[Edge]:
        if not self.successors:
            return None
        return Edge(self.label_at(0), self.successor_at(0))

    def last_edge(self) -> Optional[Edge]:
        if not self.successors:
            return None
        return Edge(self.label_at(-1), self.successor_at(-1))

    def edges(self) -> Iterator[Edge]:
        return iter(self.successors)

    def __iter__(self):
        return (e.label for e in self.successors)

    def clone(self) -> TrieNode[V]:
        """
        :return: a detached deep copy of this node and all its descendants
        """
        ret = self.spawn()
        stack = [(self, ret)]
        while stack:
            source, target = stack.pop()
            if source.has_value:
                target.set_value(source.inner_value)
            for label, successor in source.edges():
                stack.append((successor, target.add_successor(label)))
        return ret
