from typing import Dict
from unittest import TestCase

import numpy as np

from seqtrie import HashTrie, PatriciaStructure, PatriciaTrie, SortedListTrie, Trie, TrieNode


class RandomOperationsTest(TestCase):
    trie_types = (HashTrie, SortedListTrie, PatriciaTrie)
    keys = ['a', 'in', 'inn', 'i', 'te', 'to', 'ted', 'tea', 'ten cents', 'tenacious', 'tent', 'x']

    def assertNodeOk(self, node: TrieNode, patricia: bool, is_root: bool):
        count = int(node.has_value)
        for label, child in node.edges():
            self.assertIs(child.predecessor[1], node)
            count += self.assertNodeOk(child, patricia, False)
        self.assertEqual(node.aggregate_count, count)
        if not is_root:
            self.assertTrue(count)
            if patricia:
                self.assertFalse(node.successor_count == 1 and not node.has_value)
        return count

    def assertTrieOk(self, trie: Trie):
        if len(trie) == 0:
            self.assertIsNone(trie.root)
        else:
            self.assertNodeOk(trie.root, isinstance(trie.structure, PatriciaStructure), True)

    def assertTrieEqual(self, trie: Trie, control: Dict):
        self.assertTrieOk(trie)
        d = dict(trie.items())
        self.assertEqual(len(d), len(trie))
        self.assertDictEqual(d, control)

    def test_run(self):
        rng = np.random.default_rng(1234)
        ops = 1_000
        rem_odds = 0.35

        for trie_type in self.trie_types:
            with self.subTest(trie_type=trie_type.__name__):
                rolls = rng.random(ops) > rem_odds
                keys = rng.choice(self.keys, size=ops)

                trie = trie_type()
                ctrl = {}

                for (ins, key) in zip(rolls, keys):
                    key = str(key)
                    if ins:
                        self.assertEqual(trie.put(key, key), ctrl.get(key))
                        ctrl[key] = key
                    else:
                        ans1 = trie.remove(key)
                        ans2 = ctrl.pop(key, None)
                        self.assertEqual(ans1, ans2)
                    self.assertTrieEqual(trie, ctrl)

    def test_sub_tries(self):
        rng = np.random.default_rng(42)
        for trie_type in self.trie_types:
            with self.subTest(trie_type=trie_type.__name__):
                chosen = rng.choice(self.keys, size=8, replace=False)
                ctrl = {str(k): i for (i, k) in enumerate(chosen)}
                trie = trie_type(ctrl)
                prefixes = {k[:n] for k in ctrl for n in range(1, len(k) + 1)}
                for prefix in prefixes:
                    sub = trie.sub_trie(prefix)
                    self.assertTrieEqual(sub, {k: v for (k, v) in ctrl.items() if k.startswith(prefix)})
                self.assertTrieEqual(trie, ctrl)
