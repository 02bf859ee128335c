import pytest
import forth


class TestTheParser():
    def test_empty_string(self):
        """ Parser refuses to parse past the end of the string. """
        p = forth.Parser('')

        with pytest.raises(StopIteration):
            p.parse_whitespace()

        with pytest.raises(StopIteration):
            p.parse_word()

        with pytest.raises(StopIteration):
            p.next_word()

        assert list(p) == []

    def test_all_whitespace(self):
        """ Parser consumes all whitespace in one gulp. """
        whitespace_string = "   \t\t  \t \t"
        p = forth.Parser(whitespace_string)

        assert p.parse_whitespace() == whitespace_string
        assert p.is_finished

        with pytest.raises(StopIteration):
            p.next_word()

        # Also, next_word will happily consume and ignore the whitespace itself.
        p = forth.Parser(whitespace_string)

        with pytest.raises(StopIteration):
            p.next_word()

        assert list(p) == []

    def test_single_word(self):
        """ A single word is returned immediately. """
        p = forth.Parser("JUST-ONE-WORD")

        assert p.next_word() == "JUST-ONE-WORD"

        # no further words exist
        with pytest.raises(StopIteration):
            p.next_word()

    def test_leading_whitespace(self):
        """ Leading whitespace is ignored. """
        p = forth.Parser("  \t HELLO-WORLD")

        assert p.next_word() == 'HELLO-WORLD'

        with pytest.raises(StopIteration):
            p.next_word()

    def test_more_words(self):
        """ Multiple words are returned one at a time. """
        p = forth.Parser("AND ON THE PEDESTAL,")

        assert p.next_word() == 'AND'
        assert p.next_word() == 'ON'
        assert p.next_word() == 'THE'
        assert p.next_word() == 'PEDESTAL,'

        with pytest.raises(StopIteration):
            p.next_word()

    def test_more_whitespace(self):
        """ All whitespace is eaten together and has no effect on words. """
        p = forth.Parser("   \tTHESE\t\tWORDS      APPEAR      \t  ")

        assert list(p) == ['THESE', 'WORDS', 'APPEAR']

    def test_newlines(self):
        """ Newlines are just whitespace between words. """
        p = forth.Parser("MY NAME IS OZYMANDIAS,\r\nKING OF KINGS!\n")

        assert list(p) == ['MY', 'NAME', 'IS', 'OZYMANDIAS,', 'KING', 'OF', 'KINGS!']

    def test_casing_preserved(self):
        p = forth.Parser(": Foo dUp ;")

        assert list(p) == [':', 'Foo', 'dUp', ';']

    def test_restartable(self):
        """ Every iteration starts from the beginning of the text. """
        p = forth.Parser("1 2 +")

        assert list(p) == ['1', '2', '+']
        assert list(p) == ['1', '2', '+']

    def test_iteration_is_independent_of_cursor(self):
        p = forth.Parser("ONE TWO")

        assert p.next_word() == 'ONE'
        assert list(p) == ['ONE', 'TWO']
        assert p.next_word() == 'TWO'

    def test_lazy(self):
        words = iter(forth.Parser("1 2 3"))

        assert next(words) == '1'
        assert list(words) == ['2', '3']

    def test_unicode_whitespace(self):
        """ Any Unicode whitespace separates words, e.g. pasted non-breaking spaces. """
        p = forth.Parser("1\u00a02 +\u2003DUP\u3000")

        assert list(p) == ['1', '2', '+', 'DUP']
        assert forth.evaluate("1\u00a02 +").stack == (3,)
