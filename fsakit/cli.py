import argparse
import json
import logging
import os
from typing import List, Optional

from fsakit.automaton import Automaton
from fsakit.errors import AutomatonError
from fsakit.session import Session
from fsakit.utils import OUTPUT_DIR

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='fsakit',
        description='Convert NFA to DFA, build DAFSA from finite languages and test strings.')
    p.add_argument('--log-level',
                   default='WARNING',
                   choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                   help='Logging level (default: WARNING)')
    sub = p.add_subparsers(dest='command', required=True)

    show = sub.add_parser('show', help='print the transition table of an automaton')
    show.add_argument('input', help='automaton definition (.json/.json5)')
    show.add_argument('--strict', action='store_true',
                      help='reject references to undeclared states and symbols')

    convert = sub.add_parser('convert', help='convert an NFA to a DFA')
    convert.add_argument('input', help='automaton definition (.json/.json5)')
    convert.add_argument('--strict', action='store_true',
                         help='reject references to undeclared states and symbols')

    dafsa = sub.add_parser('dafsa', help='build a DAFSA from a finite language')
    dafsa.add_argument('input', help='language definition (.json/.json5)')
    dafsa.add_argument('--no-minimize', action='store_true',
                       help='emit the trie without merging states')

    for command in (convert, dafsa):
        command.add_argument('-o', '--output', help='write the result as json')
        command.add_argument('--render', nargs='?', const=OUTPUT_DIR, metavar='DIR',
                             help=f'render the result as svg (default dir: {OUTPUT_DIR})')
        command.add_argument('-v', '--verbose', action='store_true',
                             help='print the intermediate tables')

    test = sub.add_parser('test', help='test strings against an automaton')
    test.add_argument('input', help='automaton or language definition')
    test.add_argument('words', nargs='*', default=[''],
                      help='strings to test (default: the empty string)')
    test.add_argument('--language', action='store_true',
                      help='input is a language definition')
    test.add_argument('--strict', action='store_true',
                      help='reject references to undeclared states and symbols')
    test.add_argument('--convert', action='store_true',
                      help='convert to a DFA before testing')
    test.add_argument('--minimize', action='store_true',
                      help='minimize before testing (acyclic automata only)')
    return p


def write_automaton(automaton: Automaton, path: str) -> None:
    dirname = os.path.dirname(path)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(automaton.to_dict(), f, ensure_ascii=False, indent=2)
    logger.info('automaton saved to %s', path)


def render_automaton(automaton: Automaton, directory: str, name: str) -> str:
    graph = automaton.visualize(name)
    graph.format = 'svg'
    filename = os.path.join(directory, name)
    graph.render(cleanup=True, filename=filename)
    logger.info('svg file saved to %s.svg', filename)
    return f'{filename}.svg'


def _emit(automaton: Automaton, args: argparse.Namespace, name: str) -> None:
    print(automaton)
    if args.output:
        write_automaton(automaton, args.output)
    if args.render:
        render_automaton(automaton, args.render, name)


def run(args: argparse.Namespace) -> int:
    session = Session()
    base = os.path.splitext(os.path.basename(args.input))[0]

    if args.command == 'show':
        print(session.load_automaton(args.input, args.strict))
        return 0

    if args.command == 'convert':
        session.load_automaton(args.input, args.strict)
        _emit(session.convert(args.verbose), args, f'{base}.dfa')
        return 0

    if args.command == 'dafsa':
        session.load_language(args.input)
        if args.no_minimize:
            _emit(session.current, args, f'{base}.trie')
        else:
            _emit(session.minimize(args.verbose), args, f'{base}.dafsa')
        return 0

    # test
    if args.language:
        session.load_language(args.input)
    else:
        session.load_automaton(args.input, args.strict)
    if args.convert:
        session.convert()
    if args.minimize:
        session.minimize()
    status = 0
    for word in args.words:
        verdict = session.evaluate(word)
        print(f'{word!r}: {verdict}')
        if not verdict.accepted:
            status = 1
    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s: %(message)s',
    )

    try:
        return run(args)
    except (AutomatonError, OSError) as e:
        logger.error('%s', e)
        return 2
