from seqtrie.exceptions import ConcurrentModificationError, InvalidKeyError, SubTrieNotFoundError, \
    UnsupportedOperationError
from seqtrie.node import EMPTY, TrieNode
from seqtrie.structure import Operation, PatriciaStructure, Structure, UncompressedStructure
from seqtrie.successors import Edge, HashSuccessors, SortedSuccessors, SuccessorStore
from seqtrie.trie import HashTrie, PatriciaTrie, SortedListTrie, SortedTrie, Trie
from seqtrie._version import __version__

__all__ = ['Trie', 'SortedTrie', 'HashTrie', 'SortedListTrie', 'PatriciaTrie', 'TrieNode', 'EMPTY', 'Edge',
           'SuccessorStore', 'HashSuccessors', 'SortedSuccessors', 'Structure', 'UncompressedStructure',
           'PatriciaStructure', 'Operation', 'InvalidKeyError', 'SubTrieNotFoundError', 'UnsupportedOperationError',
           'ConcurrentModificationError', '__version__']
