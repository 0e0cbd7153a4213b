class InvalidKeyError(ValueError):
    """An error indicating that a key or edge label was None or empty"""

    def __init__(self, key, what='key'):
        super().__init__(f'the {what} may not be None or empty (got {key!r})')


class SubTrieNotFoundError(KeyError):
    """An error indicating that a sub-trie was requested for a sequence that is not in the trie"""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f'no sub-trie for sequence {self.key!r}'


class UnsupportedOperationError(TypeError):
    """An error indicating that a successor store or structure does not support an operation"""

    def __init__(self, owner, operation):
        super().__init__(f'{type(owner).__name__} does not support {operation}')


class ConcurrentModificationError(RuntimeError):
    """An error indicating that a trie was modified while being iterated"""

    def __init__(self, expected, actual):
        super().__init__(f'trie changed during iteration (modification count {expected} -> {actual})')
