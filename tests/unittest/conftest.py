from pytest import fixture

from seqtrie import HashTrie, PatriciaStructure, PatriciaTrie, SortedListTrie, Trie, TrieNode


def _check_node(node: TrieNode, is_root: bool, patricia: bool):
    expected = int(node.has_value)
    for label, successor in node.edges():
        assert label
        predecessor = successor.predecessor
        assert predecessor is not None
        assert predecessor[0] == label
        assert predecessor[1] is node
        expected += _check_node(successor, False, patricia)
    assert node.aggregate_count == expected
    if not is_root:
        # every non-root node leads to at least one value
        assert node.aggregate_count > 0
        if patricia:
            assert node.has_value or node.successor_count != 1
    return expected


def check_trie(trie: Trie):
    """
    assert that the aggregate counts, predecessor links and structural invariants of a trie hold
    """
    if trie.root is None:
        assert len(trie) == 0
        assert trie.is_empty()
        return
    assert trie.root.predecessor is None
    count = _check_node(trie.root, True, isinstance(trie.structure, PatriciaStructure))
    assert count == len(trie) == sum(1 for _ in trie.entries())
    assert count > 0


@fixture(params=[HashTrie, SortedListTrie, PatriciaTrie], ids=['hash', 'sorted', 'patricia'])
def trie_type(request):
    return request.param


@fixture(name='check_trie')
def check_trie_fixture():
    return check_trie
