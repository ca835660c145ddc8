from argparse import ArgumentParser, REMAINDER, OPTIONAL
from contextlib import nullcontext
from os import isatty, path
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .generator import generate
from .lexer import Lexer
from .machine import evaluate
from .search import MatchWriter, Search, SearchConfig
from .tokens import render
from .util import ConfigurationError, RPNError, setup_logging
from .vocabulary import Vocabulary


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the expression search.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpn_search_history'

    def searcher(self):
        '''
        Search for expressions close to the target, printing matches.
        '''
        if self.args.target is None:
            self.argument_parser.error('the following arguments are '
                                       'required: -t/--target')
        try:
            config = SearchConfig(target=self.args.target,
                                  max_depth=self.args.max_depth,
                                  tolerance=self.args.tolerance,
                                  chunk_size=self.args.chunk_size,
                                  workers=self.args.workers,
                                  executor=self.args.executor)
        except ConfigurationError as e:
            self.argument_parser.error(e.args[0])
        with self._output() as output:
            search = Search(self.vocabulary,
                            config,
                            sink=MatchWriter(output),
                            logger=self.logger)
            stats = search.run()
        return 0 if stats.complete else 1

    def checker(self):
        '''
        Evaluate RPN expressions, one per line.
        '''
        lexer = Lexer(self.vocabulary)
        status = 0
        for line in self._expressions():
            try:
                sequence = lexer.tokens(line)
                if sequence:
                    print('{}: {}'.format(render(sequence),
                                          evaluate(sequence)))
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                print(e.args[0], file=sys.stderr)
                status = 1
        return status

    def dumper(self):
        '''
        Print every candidate up to the maximum depth, with its value.
        '''
        if self.args.max_depth < 0:
            self.argument_parser.error('Maximum depth must be non-negative')
        with self._output() as output:
            for sequence in generate(self.vocabulary, self.args.max_depth):
                print('{}: {}'.format(render(sequence), evaluate(sequence)),
                      file=output)
        return 0

    def lister(self):
        '''
        Print the vocabulary.
        '''
        for name, tokens in [('operands', self.vocabulary.operands),
                             ('unary', self.vocabulary.unary),
                             ('binary', self.vocabulary.binary)]:
            print(name + ':', *(token.symbol for token in tokens))
        return 0

    def _output(self):
        '''
        Return a context manager over the match output stream.
        '''
        if self.args.output is None:
            return nullcontext(sys.stdout)
        try:
            return open(self.args.output, 'w', encoding='utf-8')
        except OSError as e:
            self.argument_parser.error('Cannot open {}: {}'.format(
                self.args.output, e.strerror))

    def _expressions(self):
        '''
        Return the expressions to check: given, prompted for, or stdin.

        Prompt if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.expressions is not None:
            return self.args.expressions
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        return sys.stdin

    def __init__(self, vocabulary=None):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.vocabulary = Vocabulary.default() if vocabulary is None \
            else vocabulary
        self.argument_parser = ArgumentParser(
            description='Search for RPN expressions close to a target value')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-t', '--target', type=float)
        self.argument_parser.add_argument(
            '-d', '--max-depth',
            type=int,
            default=SearchConfig.DEFAULT_MAX_DEPTH,
            help='operands plus unary operators (default: %(default)s)')
        self.argument_parser.add_argument(
            '-e', '--tolerance',
            type=float,
            default=SearchConfig.DEFAULT_TOLERANCE,
            help='match window around target (default: %(default)s)')
        self.argument_parser.add_argument('-o', '--output',
                                          help='write matches to file')
        self.argument_parser.add_argument(
            '-c', '--chunk-size',
            type=int,
            default=SearchConfig.DEFAULT_CHUNK_SIZE,
            help='candidates per unit of work (default: %(default)s)')
        self.argument_parser.add_argument(
            '-n', '--num-threads',
            type=int,
            dest='workers',
            help='worker pool size (default: number of CPUs)')
        self.argument_parser.add_argument(
            '--threads',
            action='store_const',
            const='thread',
            default='process',
            dest='executor',
            help='use a thread pool instead of processes')
        input_groups = self.argument_parser.add_mutually_exclusive_group()
        input_groups.add_argument('-x', '--expression',
                                  nargs=REMAINDER,
                                  dest='expressions')
        input_groups.add_argument('-p', '--prompt',
                                  nargs=OPTIONAL,
                                  const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-k', '--check', self.checker),
                                      ('-D', '--dump', self.dumper),
                                      ('-L', '--list', self.lister)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.searcher)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Return the exit status.
        '''
        self.args = self.argument_parser.parse_args(args)
        self.logger = setup_logging(self.args.verbose)
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1
        finally:
            for handler in self.logger.handlers:
                handler.flush()
