import re


class Parser(object):
    """
    Very simple Forth parser -- not much more than a few primitives useful for
    consuming an input string in a Forth-compatible way, one word at a time.

    The parser is stateful, in as much as each instance thereof is given an
    initial string to operate on, and calls to parse_whatever will advance the
    parser's position within that string, if necessary (thus, the next call
    will start from where the previous left off).

    The parser is not a compiler nor an interpreter: its output is a flat
    sequence of words with their original casing. Deciding that ":" starts a
    definition or that "42" is a number is left to the :class:`Machine`.

    The parse_* methods raise :exc:`StopIteration` when the string has been
    completely consumed. Iterating over the parser, on the other hand, always
    starts over from the beginning of the text and simply stops at the end, so
    the same parser may be walked any number of times:

        >>> list(Parser(": SQUARE dup * ;"))
        [':', 'SQUARE', 'dup', '*', ';']
    """
    WHITESPACE = r'\s*'
    WORD = r'\S+'

    def __init__(self, text):
        self.text = text
        self.pos = 0

    @property
    def is_finished(self):
        return self.pos >= len(self.text)

    def _consume(self, pattern):
        """
        Consume (advancing self.pos) some characters based on a regex. The
        regex is applied to self.text starting from self.pos.

        Note that matches are only ever expected at the current position.
        """
        if self.is_finished:
            raise StopIteration()
        found = re.compile(pattern).match(self.text, self.pos)
        if found is None:
            return None
        self.pos = found.end()
        return found.group()

    def parse_whitespace(self):
        return self._consume(self.WHITESPACE)

    def parse_word(self):
        return self._consume(self.WORD)

    def next_word(self):
        self.parse_whitespace()
        return self.parse_word()

    def words(self):
        """ Yields every word in the text, from the start, without raising. """
        cursor = Parser(self.text)
        while True:
            try:
                word = cursor.next_word()
            except StopIteration:
                return
            if not word:
                return
            yield word

    def __iter__(self):
        return self.words()
