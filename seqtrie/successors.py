from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, NamedTuple, Optional, Sequence

from sortedcontainers import SortedKeyList

from seqtrie.exceptions import UnsupportedOperationError
from seqtrie.sequence import binary_search, head, identity


class Edge(NamedTuple):
    """
    A labeled link from a node to one of its successors
    """
    label: Sequence
    node: Any


class SuccessorStore(ABC):
    """
    The collection holding the outgoing edges of a single node
    """
    # whether the store supports positional access
    sorted = False

    @abstractmethod
    def add(self, label, node):
        """
        add an edge, the label must not already be present
        """
        pass

    @abstractmethod
    def get(self, label):
        """
        :return: the successor under label, or None
        """
        pass

    @abstractmethod
    def pop(self, label):
        """
        remove an edge

        :return: the successor that was under label, or None if there was none
        """
        pass

    @abstractmethod
    def __len__(self):
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Edge]:
        pass

    @abstractmethod
    def empty(self) -> SuccessorStore:
        """
        :return: a new, empty store configured like this one
        """
        pass

    def index_of(self, label) -> Optional[int]:
        raise UnsupportedOperationError(self, 'index_of')

    def index_of_first_symbol(self, sequence) -> Optional[int]:
        raise UnsupportedOperationError(self, 'index_of_first_symbol')

    def label_at(self, index: int):
        raise UnsupportedOperationError(self, 'label_at')

    def node_at(self, index: int):
        raise UnsupportedOperationError(self, 'node_at')

    def pop_at(self, index: int) -> Edge:
        raise UnsupportedOperationError(self, 'pop_at')


class HashSuccessors(SuccessorStore):
    """
    An unordered store, mapping labels to successors with a dict
    """
    __slots__ = 'edges',

    def __init__(self):
        self.edges: Dict[Sequence, Any] = {}

    def add(self, label, node):
        self.edges[label] = node

    def get(self, label):
        return self.edges.get(label)

    def pop(self, label):
        return self.edges.pop(label, None)

    def __len__(self):
        return len(self.edges)

    def __iter__(self):
        return (Edge(k, v) for (k, v) in self.edges.items())

    def empty(self):
        return type(self)()


class SortedSuccessors(SuccessorStore):
    """
    A store that keeps its edges in a list, ordered by their labels
    """
    __slots__ = 'key', 'edges'
    sorted = True

    def __init__(self, key: Callable[[Sequence], Any] = None):
        """
        :param key: the ordering key of edge labels, defaults to the labels themselves (lexicographic order). The
         ordering must be consistent with the order of the labels' first symbols.
        """
        self.key = key or identity
        label_key = self.key
        self.edges = SortedKeyList(key=lambda edge: label_key(edge.label))

    def add(self, label, node):
        self.edges.add(Edge(label, node))

    def index_of(self, label):
        label_key = self.key(label)
        edges = self.edges
        i = edges.bisect_key_left(label_key)
        # distinct labels may share a key, scan all of them
        while i < len(edges):
            edge = edges[i]
            if edge.label == label:
                return i
            if self.key(edge.label) != label_key:
                break
            i += 1
        return None

    def index_of_first_symbol(self, sequence):
        edges = self.edges
        symbol = head(sequence)
        found = binary_search(len(edges), lambda i: head(edges[i].label), symbol, key=self.key)
        if found is None:
            return None
        # distinct symbols may share a key, the edges starting with them are adjacent
        symbol_key = self.key(symbol)
        for step in (-1, 1):
            i = found
            while 0 <= i < len(edges):
                first = head(edges[i].label)
                if first == symbol:
                    return i
                if self.key(first) != symbol_key:
                    break
                i += step
        return None

    def get(self, label):
        i = self.index_of(label)
        if i is None:
            return None
        return self.edges[i].node

    def pop(self, label):
        i = self.index_of(label)
        if i is None:
            return None
        return self.edges.pop(i).node

    def label_at(self, index):
        return self.edges[index].label

    def node_at(self, index):
        return self.edges[index].node

    def pop_at(self, index):
        return self.edges.pop(index)

    def __len__(self):
        return len(self.edges)

    def __iter__(self):
        return iter(self.edges)

    def empty(self):
        return type(self)(self.key)
