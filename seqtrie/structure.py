"""
Structures decide how sequences are split across edges, and how nodes are split and merged when a trie is modified.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence, Tuple

from seqtrie.node import TrieNode
from seqtrie.sequence import common_prefix_length, concat, head, is_empty, subsequence

logger = logging.getLogger(__name__)


class Operation(Enum):
    """
    The operation a successor is looked up for, structures may match differently for each
    """
    GET = 'get'
    PUT = 'put'
    REMOVE = 'remove'
    SUB_TRIE = 'sub_trie'


class Structure(ABC):
    """
    A strategy for laying sequences out over the nodes of a trie

    The trie walks from the root asking the structure for the successor a sequence leads to, and notifies it when
    edges are added or removed so it can keep its layout.
    """
    # whether the structure relies on positional access to successors
    requires_sorted_successors = False

    @abstractmethod
    def on_get_successor(self, node: TrieNode, sequence: Sequence, operation: Operation) \
            -> Optional[Tuple[TrieNode, Sequence]]:
        """
        find the successor of node that sequence leads to

        :return: the successor and the part of sequence that remains after it, or None if no successor matches
        """
        pass

    @abstractmethod
    def on_add_successor(self, node: TrieNode, sequence: Sequence) -> Tuple[TrieNode, Sequence]:
        """
        add a successor to node for (a prefix of) sequence

        :return: the new successor and the part of sequence that remains after it
        """
        pass

    @abstractmethod
    def on_remove_successor(self, node: TrieNode, label: Sequence):
        """
        remove the edge of node labeled label
        """
        pass

    @abstractmethod
    def on_deleted_value(self, node: TrieNode):
        """
        called after the value of a node that still has successors is cleared
        """
        pass

    def get_sub_trie(self, sequence: Optional[Sequence], root: TrieNode, node: TrieNode,
                     include_node_value: bool) -> TrieNode:
        """
        copy the successors of node into a new trie

        :param sequence: the path to place the copied successors under, relative to root
        :param root: the root of the new trie
        :param node: the node whose successors to copy
        :param include_node_value: whether to copy node's own value as well
        :return: root
        """
        current = root
        suffix = sequence
        while not is_empty(suffix):
            current, suffix = self.on_add_successor(current, suffix)
        if include_node_value and node.has_value:
            current.set_value(node.inner_value)
        for label, successor in node.edges():
            current.add_successor(label, successor.clone())
        return root


class UncompressedStructure(Structure):
    """
    A structure where every edge is labeled with exactly one symbol
    """

    def on_get_successor(self, node, sequence, operation):
        successor = node.get_successor(head(sequence))
        if successor is None:
            return None
        return successor, subsequence(sequence, 1)

    def on_add_successor(self, node, sequence):
        successor = node.add_successor(head(sequence))
        return successor, subsequence(sequence, 1)

    def on_remove_successor(self, node, label):
        node.remove_successor(label)

    def on_deleted_value(self, node):
        pass


class PatriciaStructure(Structure):
    """
    A structure where chains of nodes that have a single successor and no value are merged into one edge

    rule: no node, other than the root, has exactly one successor and no value
    """
    requires_sorted_successors = True

    def on_get_successor(self, node, sequence, operation):
        index = node.index_of_first_symbol(sequence)
        if index is None:
            return None
        label = node.label_at(index)
        successor = node.successor_at(index)
        prefix_length = common_prefix_length(sequence, label)
        if prefix_length == 0:
            return None
        suffix = subsequence(sequence, prefix_length)

        if operation is Operation.PUT:
            if prefix_length < len(label):
                successor = self._split(node, index, label, prefix_length)
            return successor, suffix

        if prefix_length == len(label):
            return successor, suffix
        if operation is Operation.SUB_TRIE and prefix_length == len(sequence):
            # the sequence ends within the edge, the whole edge is needed to reach the successor
            return successor, label
        return None

    def _split(self, node: TrieNode, index: int, label: Sequence, prefix_length: int) -> TrieNode:
        """
        split the edge at index after prefix_length symbols

        :return: the new intermediate node
        """
        successor = node.remove_successor_at(index)
        intermediate = node.add_successor(subsequence(label, 0, prefix_length))
        intermediate.add_successor(subsequence(label, prefix_length), successor)
        logger.debug('split edge %r after %d symbols', label, prefix_length)
        return intermediate

    def _merge_intermediate(self, node: TrieNode):
        """
        if node has a single successor and no value, replace it with an edge from its predecessor to its successor
        """
        if node.successor_count != 1 or node.has_value:
            return
        predecessor = node.predecessor
        if predecessor is None:
            return
        label, parent = predecessor
        successor_label, successor = next(node.edges())
        parent.remove_successor(label)
        node.remove_successor(successor_label)
        joined = concat(label, successor_label)
        parent.add_successor(joined, successor)
        logger.debug('merged edges %r and %r into %r', label, successor_label, joined)

    def on_add_successor(self, node, sequence):
        successor = node.add_successor(sequence)
        return successor, subsequence(sequence, len(sequence))

    def on_remove_successor(self, node, label):
        node.remove_successor(label)
        self._merge_intermediate(node)

    def on_deleted_value(self, node):
        self._merge_intermediate(node)
