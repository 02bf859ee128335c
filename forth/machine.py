from forth.definitions import DefinitionTable
from forth.parser import Parser

import functools
import inspect
import logging
import operator
import re
import types

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

__all__ = [
    'ForthError', 'DivisionByZero', 'StackUnderflow', 'UnknownWord', 'InvalidWord',
    'Machine', 'evaluate',
]


class ForthError(Exception):
    """
    Base class of everything the machine raises. Each subclass carries a
    human-readable `message`; the optional `detail` says what went wrong
    where it is known (the offending word, the operand count...).
    """
    message = 'error'

    def __init__(self, detail=None):
        super(ForthError, self).__init__(detail)
        self.detail = detail

    def __str__(self):
        if self.detail is None:
            return self.message
        return '%s: %s' % (self.message, self.detail)


class DivisionByZero(ForthError):
    message = 'Cannot divide by 0'


class StackUnderflow(ForthError):
    message = 'Stack underflow'


class UnknownWord(ForthError):
    message = 'Unknown word'


class InvalidWord(ForthError):
    message = 'Invalid word definition'


BEGIN_DEFINITION = ':'
END_DEFINITION = ';'

NUMBER_PATTERN = r'^[+-]?[0-9]+$'


def parse_number(word):
    """ Returns the int spelled by `word`, or None if it isn't a number. """
    if re.match(NUMBER_PATTERN, word) is None:
        return None
    return int(word)


def divide(dividend, divisor):
    """ Integer division truncating toward zero. """
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


def _word(name):
    """
    Creates a decorator that adds a .word member to its given func, which may
    then be inspected for by the :class:`Machine`'s __init__ method. Note that
    if you already have an instance of :class:`Machine`, it's too late to
    decorate and you should call its :method:`Machine.add_stackmethod`
    instead.
    """
    def decorator(func):
        func.word = name
        return func
    return decorator


class Machine(object):
    """
    A Forth machine: a data stack, a dictionary of user definitions and the
    built-in words.

    Every word is resolved against a bound on the dictionary: only definitions
    with an index below the bound are visible. At the top level the bound is
    the dictionary size; inside the body of definition #n it is n, so a word
    can never reach itself or anything defined after it.
    """
    def __init__(self):
        self.data_stack = []
        self.dictionary = DefinitionTable()
        self.words = {}

        # Add decorated member words
        for name, method in inspect.getmembers(self, inspect.ismethod):
            if hasattr(method, 'word'):
                self.words[method.word] = method

        # Add stack handling
        self.add_stackmethod('DUP', lambda a: (a, a))
        self.add_stackmethod('DROP', lambda a: None)
        self.add_stackmethod('SWAP', lambda b, a: (b, a))
        self.add_stackmethod('OVER', lambda b, a: (a, b, a))

    @property
    def stack(self):
        return tuple(self.data_stack)

    @property
    def definitions(self):
        return self.dictionary.snapshot()

    def reset(self):
        self.data_stack = []
        self.dictionary = DefinitionTable()

    def _push(self, val):
        self.data_stack.append(val)

    def _push_all(self, ls):
        self.data_stack.extend(ls)

    def _pop(self):
        if self.data_stack:
            return self.data_stack.pop()
        else:
            raise StackUnderflow('1 needed')

    def _require(self, count):
        if len(self.data_stack) < count:
            raise StackUnderflow('%d needed' % count)

    def _fold(self, func):
        """
        Collapses the whole stack into one value by folding `func` over it,
        from the bottom up. Arithmetic always consumes everything.
        """
        self._require(2)
        self.data_stack = [functools.reduce(func, self.data_stack)]

    @_word('+')
    def _add(self):
        self._fold(operator.add)

    @_word('-')
    def _subtract(self):
        self._fold(operator.sub)

    @_word('*')
    def _multiply(self):
        self._fold(operator.mul)

    @_word('/')
    def _divide(self):
        self._require(2)
        if 0 in self.data_stack[1:]:
            raise DivisionByZero()
        self._fold(divide)

    def add_stackmethod(self, word, func):
        """
        Turns a given function `func` into a stack-consumer.

        The function will get its arguments from the stack automatically, in
        the order they pop off (so from the stack [1, 2] the call to a
        two-argument function will be func(2, 1). The function's return value
        (or values) are assumed to go back on the stack.

        The stack is checked for enough values before anything is popped, so a
        failing word leaves the stack as it found it.
        """
        num_args = func.__code__.co_argcount

        def stack_helper(self):
            self._require(num_args)
            args = [self._pop() for x in range(num_args)]
            ret = func(*args)
            if ret is None:
                return
            try:
                self._push_all(ret)
            except TypeError:
                self._push(ret)
        self.words[word.upper()] = types.MethodType(stack_helper, self)

    def eval(self, text=''):
        """
        Evaluates a chunk of input. The first error is raised and everything
        done before it stays done.
        """
        log.debug('eval %r', text)
        words = iter(Parser(text))
        for word in words:
            if word == BEGIN_DEFINITION:
                self._define(words)
            else:
                self.execute(word, len(self.dictionary))

    def try_eval(self, text=''):
        """ Like :meth:`eval`, but the error (if any) is returned instead. """
        try:
            self.eval(text)
        except ForthError as e:
            log.debug('eval failed: %s', e)
            return e
        return None

    def _define(self, words):
        """
        Consumes a word name and body from `words`, up to and including the
        closing ";". The body is stored as-is and only resolved when run.
        """
        name = next(words, None)
        if name is None:
            raise InvalidWord('no name given')
        if parse_number(name) is not None:
            raise InvalidWord('cannot redefine number %s' % name)

        body = []
        for word in words:
            if word == END_DEFINITION:
                return self.dictionary.append(name, body)
            body.append(word)
        raise InvalidWord('unterminated definition of %s' % name.upper())

    def resolve(self, word, bound):
        """
        Turns a word into an instruction, a (kind, argument) tuple. User
        definitions win over built-ins, and built-ins over numbers.
        """
        index = self.dictionary.lookup(word, bound)
        if index is not None:
            return 'CALL', index

        canonical = word.upper()
        if canonical in self.words:
            return 'BUILTIN', self.words[canonical]

        number = parse_number(word)
        if number is not None:
            return 'NUMBER', number

        raise UnknownWord(word)

    def execute(self, word, bound):
        self._run(iter((word,)), bound)

    def invoke(self, index):
        self._run(iter(self.dictionary.get(index).body), index)

    def _run(self, words, bound):
        """
        Executes `words` resolved under `bound`. User definitions are expanded
        on an explicit stack of (words, bound) frames rather than by recursion,
        so nesting depth is only limited by the size of the dictionary.
        """
        frames = [(words, bound)]
        while frames:
            words, bound = frames[-1]
            word = next(words, None)
            if word is None:
                frames.pop()
                continue

            kind, token = self.resolve(word, bound)
            if kind == 'CALL':
                frames.append((iter(self.dictionary.get(token).body), token))
            elif kind == 'BUILTIN':
                token()
            else:
                self._push(token)


def evaluate(text):
    """ Evaluates `text` on a fresh :class:`Machine` and returns the machine. """
    machine = Machine()
    machine.eval(text)
    return machine
