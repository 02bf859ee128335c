"""
Implements a small Forth machine, i.e., an object capable of maintaining a
stack of integers and a dictionary of user-defined words, and of evaluating
Forth code passed to it.

Usage should be as simple as:
    >>> import forth
    >>> m = forth.Machine()
    >>> m.eval(": SQUARE DUP * ; 3 SQUARE")
    >>> m.stack
    (9,)

Errors are raised as :exc:`forth.ForthError` subclasses (StackUnderflow,
DivisionByZero, UnknownWord, InvalidWord); the machine stays usable
afterwards, with everything evaluated before the error still in place.

Only the integer arithmetic words (+ - * /) and the stack words (DUP DROP SWAP
OVER) are built in. Note that arithmetic folds over the *whole* stack,
bottom to top, and leaves a single value:
    >>> forth.evaluate("1 2 3 -").stack
    (-4,)

A word can only use what was defined before it, so redefining a word does not
change the meaning of older words, and a word can never call itself.

For an interactive session, run `forth-repl` (see :file:`forth_repl.py`).
"""
from forth.definitions import Definition, DefinitionTable
from forth.machine import *
from forth.parser import Parser

__version__ = '0.2.0'
