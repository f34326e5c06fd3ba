"""
Command-Line Interface
======================

Flag-driven and interactive front ends for the Bible search tool.

Both entry styles build a ``Request`` and hand it to ``BibleTool.execute``,
so a search typed at the interactive prompt runs exactly the same code as
``biblesearch --search``.

Examples:
    biblesearch --kjv --search "living water" --book John
    biblesearch --search love --synonyms --limit 5
    biblesearch --reference "John 3:16"
    biblesearch --reference "Psalms 23" --format verse-only
    biblesearch --cross-references "John 3:16" --similarity 0.2 --use-synonyms-xref
    biblesearch --random --seed 7
    biblesearch --create-synonyms
    biblesearch -i
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional

import yaml

from . import __version__
from .config import OUTPUT_FORMATS, ToolConfig
from .corpus.loader import Corpus, load_corpus, lookup_reference
from .cross_reference.analyzer import DEFAULT_THRESHOLD, CrossReferenceAnalyzer
from .errors import BibleSearchError, InvalidArgumentError, ReferenceNotFoundError
from .output.formatter import ResultPrinter
from .sampling.sampler import PassageSampler
from .search.engine import SearchQuery, search
from .synonyms.table import SynonymTable, create_default, load_synonyms

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/default.yaml"


class Command(Enum):
    """Operations available from both the flags and the interactive prompt."""
    SEARCH = "search"
    REFERENCE = "ref"
    RANDOM = "random"
    CROSS_REFERENCE = "xref"
    HELP = "help"
    QUIT = "quit"


COMMAND_ALIASES = {
    "search": Command.SEARCH,
    "s": Command.SEARCH,
    "ref": Command.REFERENCE,
    "reference": Command.REFERENCE,
    "r": Command.REFERENCE,
    "random": Command.RANDOM,
    "xref": Command.CROSS_REFERENCE,
    "x": Command.CROSS_REFERENCE,
    "cross-references": Command.CROSS_REFERENCE,
    "help": Command.HELP,
    "h": Command.HELP,
    "?": Command.HELP,
    "quit": Command.QUIT,
    "exit": Command.QUIT,
    "q": Command.QUIT,
}

INTERACTIVE_HELP = """\
Commands:
  search <query> [--synonyms] [--case-sensitive] [--book <book>] [--limit <n>]
  ref <reference>          (e.g. 'John 3:16', 'Genesis 1' or 'Psalms')
  xref <reference> [--similarity <0-1>] [--synonyms] [--stop-words] [--limit <n>]
  random [--limit <n>]
  help
  quit"""


@dataclass
class Request:
    """One command with its options, independent of how it was entered."""
    command: Command
    argument: str = ""
    case_sensitive: bool = False
    use_synonyms: bool = False
    book: Optional[str] = None
    limit: Optional[int] = None
    threshold: float = DEFAULT_THRESHOLD
    filter_stop_words: bool = False


# ---------------------------------------------------------------------------
# Argument validation (shared by argparse and the interactive parser)
# ---------------------------------------------------------------------------

def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def unit_interval(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number between 0.0 and 1.0, got {value!r}") from None
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"expected a number between 0.0 and 1.0, got {value!r}")
    return number


def parse_interactive(line: str, config: Optional[ToolConfig] = None) -> Optional[Request]:
    """
    Turn a line typed at the prompt into a Request.

    Returns None for a blank line.

    Raises:
        InvalidArgumentError: unknown command, bad option or missing value.
    """
    config = config or ToolConfig()
    try:
        tokens = shlex.split(line)
    except ValueError as e:
        raise InvalidArgumentError(f"Could not parse command: {e}") from None
    if not tokens:
        return None

    command = COMMAND_ALIASES.get(tokens[0].lower())
    if command is None:
        raise InvalidArgumentError("Unknown command. Type 'help' for available commands.")

    xref = config.cross_reference
    request = Request(
        command=command,
        case_sensitive=config.search.case_sensitive,
        use_synonyms=xref.use_synonyms if command is Command.CROSS_REFERENCE else config.search.use_synonyms,
        limit=config.search.interactive_limit if command is Command.SEARCH else None,
        threshold=xref.threshold,
        filter_stop_words=xref.filter_stop_words,
    )

    words: list[str] = []
    rest = iter(tokens[1:])
    for token in rest:
        if token in ("--synonyms", "--use-synonyms-xref"):
            request.use_synonyms = True
        elif token in ("--case-sensitive", "-c"):
            request.case_sensitive = True
        elif token == "--stop-words":
            request.filter_stop_words = True
        elif token in ("--book", "-b", "--limit", "-l", "--similarity"):
            value = next(rest, None)
            if value is None:
                raise InvalidArgumentError(f"{token} needs a value")
            try:
                if token in ("--book", "-b"):
                    request.book = value
                elif token in ("--limit", "-l"):
                    request.limit = positive_int(value)
                else:
                    request.threshold = unit_interval(value)
            except argparse.ArgumentTypeError as e:
                raise InvalidArgumentError(f"{token}: {e}") from None
        else:
            words.append(token)

    request.argument = " ".join(words)
    return request


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class BibleTool:
    """
    Executes requests against a loaded corpus.

    Holds the corpus and synonym table for the session; nothing is stored
    at module level.
    """

    def __init__(
        self,
        corpus: Corpus,
        synonyms: SynonymTable,
        printer: ResultPrinter,
        config: Optional[ToolConfig] = None,
        seed: Optional[int] = None,
    ):
        self.corpus = corpus
        self.synonyms = synonyms
        self.printer = printer
        self.config = config or ToolConfig()
        self.seed = seed
        self._sampler: Optional[PassageSampler] = None
        self._analyzers: dict[tuple[bool, bool], CrossReferenceAnalyzer] = {}
        self._handlers: dict[Command, Callable[[Request], int]] = {
            Command.SEARCH: self._search,
            Command.REFERENCE: self._lookup,
            Command.RANDOM: self._random,
            Command.CROSS_REFERENCE: self._cross_reference,
            Command.HELP: self._help,
            Command.QUIT: lambda request: 0,
        }

    def execute(self, request: Request) -> int:
        """Run a request and return its exit status (0 success, 1 not found, 2 invalid)."""
        try:
            return self._handlers[request.command](request)
        except ReferenceNotFoundError as e:
            self.printer.error(f"{e}")
            return 1
        except InvalidArgumentError as e:
            self.printer.error(f"{e}")
            return 2

    def _search(self, request: Request) -> int:
        if not request.argument.strip():
            self.printer.warning("Search query cannot be empty.")
            return 2
        query = SearchQuery(
            text=request.argument,
            case_sensitive=request.case_sensitive,
            book_filter=request.book,
            limit=request.limit,
            use_synonyms=request.use_synonyms,
        )
        result = search(self.corpus, query, synonyms=self.synonyms)
        self.printer.search_result(result)
        return 0

    def _lookup(self, request: Request) -> int:
        if not request.argument.strip():
            self.printer.warning("Usage: ref <reference>")
            return 2
        passages = lookup_reference(self.corpus, request.argument)
        if request.limit is not None:
            passages = passages[:request.limit]
        self.printer.passages(passages)
        return 0

    def _random(self, request: Request) -> int:
        if self._sampler is None:
            self._sampler = PassageSampler(self.corpus, seed=self.seed)
        if request.limit is None:
            passages = [self._sampler.choice()]
        else:
            passages = self._sampler.sample(request.limit)
        self.printer.passages(passages)
        return 0

    def _cross_reference(self, request: Request) -> int:
        if not request.argument.strip():
            self.printer.warning("Usage: xref <reference>")
            return 2
        if request.use_synonyms and not self.synonyms:
            self.printer.warning("No synonyms available; comparing exact words only.")
        key = (request.use_synonyms, request.filter_stop_words)
        analyzer = self._analyzers.get(key)
        if analyzer is None:
            analyzer = CrossReferenceAnalyzer(
                self.corpus,
                synonyms=self.synonyms if request.use_synonyms else None,
                filter_stop_words=request.filter_stop_words,
            )
            self._analyzers[key] = analyzer
        result = analyzer.find(request.argument, threshold=request.threshold, limit=request.limit)
        self.printer.cross_references(result)
        return 0

    def _help(self, request: Request) -> int:
        self.printer.out.print(INTERACTIVE_HELP, markup=False)
        return 0

    def interactive(self, lines: Optional[Iterable[str]] = None) -> int:
        """
        Read commands until ``quit`` or end of input.

        Args:
            lines: Commands to run instead of reading the terminal.
        """
        out = self.printer.out
        title = f"=== Bible Search Tool - {self.corpus.name} ({self.corpus.abbreviation}) ==="
        out.print(title, style="bold bright_cyan", markup=False)
        out.print(INTERACTIVE_HELP, markup=False)
        out.print()

        source = iter(lines) if lines is not None else None
        while True:
            try:
                line = next(source) if source is not None else out.input("> ")
            except (EOFError, KeyboardInterrupt, StopIteration):
                out.print()
                break

            try:
                request = parse_interactive(line, self.config)
            except InvalidArgumentError as e:
                self.printer.error(f"{e}")
                continue
            if request is None:
                continue
            if request.command is Command.QUIT:
                break
            self.execute(request)
            out.print()

        out.print("Goodbye!")
        return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biblesearch",
        description="Bible search tool with synonym support and cross-references",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(__doc__ or "").partition("Examples:")[2],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", "-f", metavar="FILE", help="Path to Bible text or JSON file")
    source.add_argument("--kjv", dest="translation", action="store_const", const="kjv",
                        help="Use the King James Version")
    source.add_argument("--erv", dest="translation", action="store_const", const="erv",
                        help="Use the English Revised Version")
    source.add_argument("--asv", dest="translation", action="store_const", const="asv",
                        help="Use the American Standard Version")

    parser.add_argument("--synonyms-file", metavar="FILE", help="Path to synonyms configuration file")
    parser.add_argument("--create-synonyms", action="store_true",
                        help="Create default synonyms file and exit")

    command = parser.add_mutually_exclusive_group()
    command.add_argument("--search", "-s", metavar="QUERY", help="Search for text in verses")
    command.add_argument("--reference", "-r", metavar="REFERENCE",
                         help="Look up a verse, chapter or book (e.g. 'John 3:16', 'Genesis 1')")
    command.add_argument("--random", action="store_true", help="Show a random verse")
    command.add_argument("--cross-references", "-x", metavar="REFERENCE",
                         help="Find cross-references for a verse (e.g. 'John 3:16')")
    command.add_argument("--interactive", "-i", action="store_true", help="Start in interactive mode")

    parser.add_argument("--synonyms", action="store_true", help="Include synonyms in search")
    parser.add_argument("--case-sensitive", "-c", action="store_true", help="Case sensitive search")
    parser.add_argument("--book", "-b", metavar="BOOK",
                        help="Filter results to books whose name contains BOOK")
    parser.add_argument("--limit", "-l", metavar="NUMBER", type=positive_int,
                        help="Limit number of results")
    parser.add_argument("--similarity", metavar="THRESHOLD", type=unit_interval,
                        help=f"Similarity threshold for cross-references (0.0-1.0, default: {DEFAULT_THRESHOLD})")
    parser.add_argument("--use-synonyms-xref", action="store_true",
                        help="Use synonyms when calculating cross-reference similarity")
    parser.add_argument("--stop-words", action="store_true",
                        help="Ignore common words when calculating cross-reference similarity")
    parser.add_argument("--seed", type=int, help="Seed for --random")

    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format (default: text)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def load_config(path: str | Path) -> ToolConfig:
    path = Path(path)
    if path.exists():
        return ToolConfig.from_yaml(path)
    logger.info(f"Config file {path} not found, using defaults")
    return ToolConfig()


def request_from_args(args: argparse.Namespace, config: ToolConfig) -> Optional[Request]:
    """The Request for the command flags, or None when none was given."""
    if args.search is not None:
        return Request(
            command=Command.SEARCH,
            argument=args.search,
            case_sensitive=args.case_sensitive or config.search.case_sensitive,
            use_synonyms=args.synonyms or config.search.use_synonyms,
            book=args.book,
            limit=args.limit if args.limit is not None else config.search.limit,
        )
    if args.reference is not None:
        return Request(command=Command.REFERENCE, argument=args.reference, limit=args.limit)
    if args.random:
        return Request(command=Command.RANDOM, limit=args.limit)
    if args.cross_references is not None:
        xref = config.cross_reference
        return Request(
            command=Command.CROSS_REFERENCE,
            argument=args.cross_references,
            use_synonyms=args.use_synonyms_xref or xref.use_synonyms,
            limit=args.limit if args.limit is not None else xref.limit,
            threshold=args.similarity if args.similarity is not None else xref.threshold,
            filter_stop_words=args.stop_words or xref.filter_stop_words,
        )
    return None


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the ``biblesearch`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        parser.error(f"invalid config {args.config}: {e}")

    fmt = args.format or config.output.format
    color = config.output.color and not args.no_color
    printer = ResultPrinter(fmt=fmt, color=color)

    synonyms_file = args.synonyms_file or config.synonyms.file

    if args.create_synonyms:
        try:
            create_default(synonyms_file)
        except OSError as e:
            printer.error(f"Error creating synonyms file: {e}")
            return 1
        printer.info(f"Created default synonyms file: {synonyms_file}", style="green")
        printer.info("You can now edit this file to customize your synonyms.")
        return 0

    try:
        bible_file = args.file or config.corpus.resolve(args.translation)
    except ValueError as e:
        parser.error(str(e))

    printer.info(f"Loading Bible from {bible_file}...")
    try:
        corpus = load_corpus(bible_file)
    except (OSError, BibleSearchError) as e:
        printer.error(f"Error loading {bible_file}: {e}")
        printer.error("Please ensure the file exists and has the correct format.")
        return 1
    printer.info(f"Bible loaded successfully ({len(corpus)} verses).", style="green")

    synonyms = load_synonyms(synonyms_file)
    if synonyms:
        printer.info(f"Loaded {len(synonyms)} synonym groups from {synonyms_file}", style="green")
    elif synonyms.loaded:
        printer.warning(f"No synonyms loaded from {synonyms_file}. Using exact word matching only.")
    else:
        printer.warning(f"Could not load synonyms file ({synonyms_file}). Using exact word matching only.")
        printer.warning("Run with --create-synonyms to create a default synonyms file.")

    tool = BibleTool(corpus, synonyms, printer, config=config, seed=args.seed)

    request = request_from_args(args, config)
    if args.interactive or request is None:
        return tool.interactive()
    return tool.execute(request)


if __name__ == "__main__":
    sys.exit(main())
