import argparse
import logging
import sys

import forth

try:
    import readline  # noqa: F401 (line editing for input())
except ImportError:
    pass

PROMPT = '> '
QUIT_WORD = 'BYE'

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


def render(machine, error=None):
    """
    Formats the machine's state for display: one line per definition, the
    stack on one line, then 'ok' or the error message.
    """
    lines = ['%s : %s' % (d.name, ' '.join(d.body)) for d in machine.definitions]
    lines.append(' '.join(str(value) for value in machine.stack))
    if error is None:
        lines.append('ok')
    else:
        lines.append('error: %s' % error)
    return '\n'.join(lines)


class Session(object):
    """
    Feeds lines to a machine. In replay mode the machine is thrown away and
    the whole history evaluated again on every line, so the display always
    reflects the full text typed so far.
    """
    def __init__(self, replay=False):
        self.replay = replay
        self.history = []
        self.machine = forth.Machine()

    def feed(self, line):
        if self.replay:
            self.history.append(line)
            self.machine = forth.Machine()
            return self.machine.try_eval('\n'.join(self.history))
        return self.machine.try_eval(line)


def forth_repl(session, read=None, write=None):
    read = read or input
    write = write or print
    write('Type "%s" or input an end of file (Ctrl+D) to quit.' % QUIT_WORD)

    try:
        cmd = read(PROMPT)
        while cmd.strip().upper() != QUIT_WORD:
            error = session.feed(cmd)
            write(render(session.machine, error))
            cmd = read(PROMPT)
    except EOFError:
        pass  # perfectly acceptable
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='forth-repl',
        description='Interactive Forth-like stack evaluator',
    )
    parser.add_argument('--replay', action='store_true',
                        help='re-evaluate the whole session on a fresh machine for every line')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='log debug information to stderr')
    parser.add_argument('--version', action='version', version='%(prog)s ' + forth.__version__)
    args = parser.parse_args(argv)

    if args.verbose:
        log_fmt = '%(asctime)s %(name)s %(levelname)s: %(message)s'
        logging.basicConfig(format=log_fmt, level=logging.DEBUG, stream=sys.stderr)

    log.debug('starting session (replay=%s)', args.replay)
    return forth_repl(Session(replay=args.replay))


if __name__ == '__main__':
    sys.exit(main())
