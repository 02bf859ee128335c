"""
The dictionary of user-defined words.

Definitions are only ever appended: redefining a word adds a new entry after
the old one instead of replacing it. Every lookup is bounded by an index, so
a word's body keeps seeing the dictionary as it was when the word was
defined.
"""
from collections import namedtuple
import logging

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


Definition = namedtuple('Definition', ['name', 'body'])


class DefinitionTable(object):
    """ An append-only, creation-ordered list of :class:`Definition`s. """
    def __init__(self):
        self._definitions = []

    def __len__(self):
        return len(self._definitions)

    def __iter__(self):
        return iter(self._definitions)

    def __getitem__(self, index):
        return self._definitions[index]

    def append(self, name, body):
        """
        Adds a new definition and returns its index. Nothing is ever
        deduplicated or overwritten.
        """
        index = len(self._definitions)
        definition = Definition(name.upper(), tuple(body))
        self._definitions.append(definition)
        log.debug('defined %s (#%d): %s', definition.name, index, ' '.join(definition.body))
        return index

    def get(self, index):
        return self._definitions[index]

    def lookup(self, name, bound):
        """
        Finds the most recent definition of `name` (case-insensitive) whose
        index is strictly lower than `bound`. Returns None when there is none.
        """
        canonical = name.upper()
        for index in range(min(bound, len(self._definitions)) - 1, -1, -1):
            if self._definitions[index].name == canonical:
                return index
        return None

    def snapshot(self):
        return tuple(self._definitions)
