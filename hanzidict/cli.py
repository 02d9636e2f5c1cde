"""
Command line interface for hanzidict.

Usage:
    python -m hanzidict.cli "你好"              # look up characters
    python -m hanzidict.cli ni3 hao3            # look up pinyin
    python -m hanzidict.cli -f "to run"         # full JSON
    python -m hanzidict.cli -s "今天天气不错"    # segment only
    python -m hanzidict.cli build               # compile the dictionary
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

from hanzidict import __version__
from hanzidict.db.connection import get_db_path
from hanzidict.dictionary import ChineseDictionary
from hanzidict.errors import CedictFormatError, DictionaryLoadError
from hanzidict.models import QueryResult
from hanzidict.settings import CEDICT_PATH, CEDICT_URL, DB_PATH, DEBUG, HSK_PATH


def format_entry_text(entry) -> str:
    """Format an entry as a CC-CEDICT style line."""
    line = f"{entry.traditional} {entry.simplified} [{entry.pinyin_marks}] /{'/'.join(entry.english)}/"
    if entry.measure_words:
        measure = ', '.join(f"{mw.simplified}[{mw.pinyin_marks}]" for mw in entry.measure_words)
        line += f"  CL: {measure}"
    if entry.hsk:
        line += f"  HSK {entry.hsk}"
    return line


def build_command(args) -> int:
    """Compile the dictionary database from CC-CEDICT."""
    cedict_path = Path(args.cedict) if args.cedict else CEDICT_PATH
    db_path = Path(args.output) if args.output else DB_PATH

    hsk_path = None
    if args.hsk:
        hsk_path = Path(args.hsk)
    elif HSK_PATH.exists():
        hsk_path = HSK_PATH

    gz_path = cedict_path.with_name(cedict_path.name + ".gz")
    if not cedict_path.exists() and not gz_path.exists():
        print(f"Error: CC-CEDICT file not found: {cedict_path}", file=sys.stderr)
        print(f"Download from: {CEDICT_URL}", file=sys.stderr)
        print("Or specify path with --cedict", file=sys.stderr)
        return 1

    if hsk_path is not None and not hsk_path.exists():
        print(f"Error: HSK file not found: {hsk_path}", file=sys.stderr)
        return 1

    # Confirm overwrite
    if db_path.exists() and not args.force:
        print(f"Database already exists: {db_path}")
        response = input("Overwrite? [y/N]: ").strip().lower()
        if response != 'y':
            print("Aborted.")
            return 1

    print("Building dictionary...")
    print(f"  CC-CEDICT: {cedict_path}")
    if hsk_path is not None:
        print(f"  HSK:       {hsk_path}")
    print(f"  Output:    {db_path}")
    print()

    from hanzidict.dict_load import build_dictionary

    t0 = time.perf_counter()

    def progress(count):
        if count % 50000 == 0:
            print(f"  {count:,} entries parsed...")

    try:
        total = build_dictionary(
            cedict_path=cedict_path,
            db_path=db_path,
            hsk_path=hsk_path,
            progress_callback=progress,
            strict=args.strict,
        )
    except (OSError, CedictFormatError) as e:
        print(f"Error building dictionary: {e}", file=sys.stderr)
        return 1

    elapsed = time.perf_counter() - t0
    db_size = os.path.getsize(db_path) / 1024 / 1024

    print()
    print("Dictionary built successfully!")
    print(f"   Entries: {total:,}")
    print(f"   Time: {elapsed:.1f}s")
    print(f"   Size: {db_size:.1f}MB")
    print()
    print("Set HANZIDICT_DB_PATH to use this database from elsewhere:")
    print(f'  export HANZIDICT_DB_PATH="{db_path.absolute()}"')
    return 0


def main_build(args: list) -> int:
    """CLI entry point for build subcommand."""
    parser = argparse.ArgumentParser(
        description='Compile the hanzidict database from CC-CEDICT',
        prog='hanzidict build',
    )

    parser.add_argument(
        '--cedict', '-c',
        type=str,
        metavar='PATH',
        help=f'Path to CC-CEDICT file, .gz allowed (default: {CEDICT_PATH})',
    )

    parser.add_argument(
        '--hsk',
        type=str,
        metavar='PATH',
        help='Path to HSK word list (simplified<TAB>level per line)',
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        metavar='PATH',
        help=f'Output database path (default: {DB_PATH})',
    )

    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing database without prompting',
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on malformed CC-CEDICT lines instead of skipping them',
    )

    parsed = parser.parse_args(args)
    return build_command(parsed)


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'build':
        return main_build(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Command line interface for Hanzidict (Chinese/English dictionary)',
        prog='hanzidict',
        epilog='Subcommands:\n  hanzidict build     Compile the dictionary from a CC-CEDICT file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'text',
        nargs='*',
        help='Characters, pinyin or English to look up',
    )

    parser.add_argument(
        '-f', '--full',
        action='store_true',
        help='Print results as JSON',
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        '-s', '--segment',
        action='store_true',
        help='Only segment the text into words',
    )
    mode.add_argument(
        '-c', '--classify',
        action='store_true',
        help='Only print how the query is classified (PY, EN, ZH or UN)',
    )
    mode.add_argument(
        '--to-simplified',
        action='store_true',
        help='Convert the text to simplified characters',
    )
    mode.add_argument(
        '--to-traditional',
        action='store_true',
        help='Convert the text to traditional characters',
    )

    parser.add_argument(
        '-d', '--database',
        type=str,
        default=None,
        metavar='PATH',
        help='Path to compiled dictionary file',
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log query routing to stderr',
    )

    parser.add_argument(
        '-v', '--version',
        action='store_true',
        help='Show version information',
    )

    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'hanzidict {__version__}')
        return 0

    text = ' '.join(parsed.text) if parsed.text else ''

    if not text.strip():
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if (parsed.verbose or DEBUG) else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    db_path = parsed.database
    if db_path is None:
        db_path = get_db_path()

    if not db_path or not Path(db_path).exists():
        print("Error: dictionary database not found.", file=sys.stderr)
        print("Run 'hanzidict build' to compile it from CC-CEDICT.", file=sys.stderr)
        return 1

    try:
        dictionary = ChineseDictionary.open(db_path)
    except DictionaryLoadError as e:
        print(f'Error loading dictionary: {e}', file=sys.stderr)
        return 1

    if parsed.classify:
        print(dictionary.classify(text).value)
        return 0

    if parsed.to_simplified:
        print(dictionary.convert_to_simplified(text))
        return 0

    if parsed.to_traditional:
        print(dictionary.convert_to_traditional(text))
        return 0

    if parsed.segment:
        print(' '.join(dictionary.segment(text)))
        return 0

    classification = dictionary.classify(text)
    entries = dictionary.query(text)

    if entries is None:
        print(f"Error: could not tell whether {text!r} is Chinese, pinyin or English",
              file=sys.stderr)
        return 1

    if parsed.full:
        result = QueryResult.from_query(text, classification, entries)
        print(result.model_dump_json(indent=2))
    elif entries:
        for entry in entries:
            print(format_entry_text(entry))
    else:
        print("No results.")

    return 0


if __name__ == '__main__':
    sys.exit(main())
