from os import isatty, path
import sys
from sys import stdin, stdout, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .engine import Engine
from .lexer import Lexer
from .logging_config import configure_logging
from .policy import ArithmeticType, Unit
from .real import BACKENDS
from .util import CalcError, wrap_user_errors


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    history=self.history,
                                    enable_suspend=True,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression engine.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.stepcalc_history'

    def _engine(self):
        '''
        Create an engine configured from the command line.
        '''
        engine = Engine(backend=self.args.backend, strict=self.args.strict)
        unit = Unit.SIGNIFICANT_DIGITS if self.args.significant \
            else Unit.DECIMAL_PLACES
        engine.set_arithmetic_mode(self.args.mode, self.args.precision, unit)
        for definition in self.args.define:
            self._define(engine, definition)
        return engine

    @wrap_user_errors('Bad definition {2}')
    def _define(self, engine, definition):
        name, text = definition.split('=', 1)
        value = engine.reals.parse(text)
        if not engine.reals.is_finite(value):
            raise ValueError(text)
        engine.set_variable(name.strip().lower(), value)

    def _lines(self):
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def dumper(self):
        '''
        Dump all tokens, with their positions.
        '''
        engine = self._engine()
        print('<type>\t<repr(text)>\t<line:column>')
        for line in self._lines():
            for token in Lexer(engine.reals, line):
                print(token.type.name,
                      repr(token.text),
                      '{}:{}'.format(token.position.line,
                                     token.position.column),
                      sep='\t')

    def tree(self):
        '''
        Dump the arena after parsing, then the re-printed expression.
        '''
        engine = self._engine()
        for line in self._lines():
            root = engine.parse(line)
            if root is None:
                print('Expression too long', file=sys.stderr)
                continue
            for index, node in enumerate(engine.arena):
                print(index, type(node).__name__,
                      *engine.arena.children(index), sep='\t')
            print(engine.arena.render(root, engine.reals))

    def executor(self):
        '''
        Evaluate expressions, one per line.
        '''
        engine = self._engine()
        for line in self._lines():
            # Report and carry on with the next line
            try:
                result, ok = engine.evaluate(line)
            except CalcError as e:
                print(e.args[0], file=sys.stderr)
                continue
            if not ok:
                print('Expression too long', file=sys.stderr)
                continue
            if self.args.steps:
                for step in result.steps:
                    print(step)
            for step in result.errors:
                print('Error:', step, file=sys.stderr)
            print(result.formatted_text)

    def raw_grammar(self):
        '''
        Print the lexeme pattern.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return a prompting line source when a prompt was asked for, or both
        stdin and stdout are ttys; plain stdin otherwise.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Step-by-step expression calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-b', '--backend',
                                          choices=sorted(BACKENDS),
                                          default=Engine.DEFAULT_BACKEND)
        self.argument_parser.add_argument('-m', '--mode',
                                          choices=[mode.value
                                                   for mode
                                                   in ArithmeticType],
                                          default=ArithmeticType.NORMAL.value)
        self.argument_parser.add_argument('-k', '--precision', type=int)
        self.argument_parser.add_argument('-S', '--significant',
                                          action='store_true',
                                          help='precision counts significant '
                                               'digits, not decimal places')
        self.argument_parser.add_argument('-d', '--define',
                                          action='append',
                                          default=[],
                                          metavar='NAME=VALUE')
        self.argument_parser.add_argument('-s', '--steps',
                                          action='store_true')
        self.argument_parser.add_argument('--strict',
                                          action='store_true')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper),
                                      ('-T', '--tree', self.tree)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        configure_logging('DEBUG' if self.args.verbose else 'WARNING')
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except CalcError as e:
            print(e.args[0], file=sys.stderr)
            exit(1)
        except KeyboardInterrupt:
            exit(1)
