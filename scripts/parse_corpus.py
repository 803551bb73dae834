"""
Batch parser for New Ithkuil word lists.

Reads a text file (one or more words per line), parses every word and writes
one JSON object per word: the word, its canonical spelling, its gloss and its
structured record, or the error that stopped it.
"""
import os
import sys
import json
import argparse
import logging

# Add project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ithkuil.errors import IthkuilError
from ithkuil.generator import generate
from ithkuil.gloss import GlossOptions, gloss
from ithkuil.lexicon import EMPTY_LEXICON, load_lexicon
from ithkuil.logging_config import setup_logging, ProgressLogger
from ithkuil.parser import parse_word, split_words
from tqdm import tqdm  # Keep for console progress bar


def parse_record(word: str, options: GlossOptions) -> dict:
    """Parses one word into an output record. Never raises on bad input."""
    try:
        formative = parse_word(word)
    except IthkuilError as e:
        return {"word": word, "error": type(e).__name__, "message": str(e)}
    return {
        "word": word,
        "canonical": generate(formative),
        "gloss": gloss(formative, options),
        "formative": formative.to_dict(),
    }


def parse_corpus(input_path: str, output_path: str, lexicon_path: str = None, limit: int = None,
                 log_file: str = 'parse_corpus.log', debug: bool = False):
    """
    Parses every word of a corpus file into JSON lines.

    Args:
        input_path: Text file of romanized New Ithkuil
        output_path: Destination JSONL file
        lexicon_path: Optional lexicon JSON for glosses
        limit: Parse at most N words (None = all)
        log_file: Log file path
        debug: Enable debug-level logging with per-stage context
    """
    setup_logging(log_file=log_file, debug=debug)

    logging.info("--- New Ithkuil corpus parser ---")
    logging.info(f"Reading words from: {input_path}")

    try:
        with open(input_path, 'r', encoding='utf-8') as f:
            words = split_words(f.read())
    except FileNotFoundError:
        logging.error(f"Input not found at {input_path}")
        print(f"ERROR: Input not found at {input_path}", file=sys.stderr)
        sys.exit(1)

    if limit is not None:
        words = words[:limit]
        logging.info(f"Limiting run to {limit} words.")

    lexicon = load_lexicon(lexicon_path) if lexicon_path else EMPTY_LEXICON
    options = GlossOptions(lexicon=lexicon)

    # Dual progress tracking: tqdm for console, ProgressLogger for log file
    progress_log = ProgressLogger(total=len(words), desc="Parsing words")

    parsed = 0
    failed = 0
    with open(output_path, 'w', encoding='utf-8') as out:
        for word in tqdm(words, desc="Parsing words", unit=" word"):
            record = parse_record(word, options)
            if "error" in record:
                failed += 1
                logging.warning(f"FAILED {word!r}: {record['message']}")
            else:
                parsed += 1
            out.write(json.dumps(record, ensure_ascii=False) + '\n')
            progress_log.update(1)

    progress_log.close()

    logging.info("=" * 80)
    logging.info(f"Corpus parse COMPLETE: {parsed} parsed, {failed} failed out of {len(words)}")
    logging.info("=" * 80)
    print(f"\nParsed {parsed} of {len(words)} words ({failed} failed). Output: {output_path}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Parse a New Ithkuil word list into JSON lines")
    parser.add_argument('input', help='Text file of romanized words')
    parser.add_argument('--output', default='parsed_words.jsonl', help='Output JSONL path')
    parser.add_argument('--lexicon', default=None, help='Lexicon JSON for root and affix glosses')
    parser.add_argument('--limit', type=int, default=None, help='Parse at most N words (Default: all)')
    parser.add_argument('--log-file', default='parse_corpus.log', help='Log file path')
    parser.add_argument('--debug', action='store_true', help='Enable debug-level logging')

    args = parser.parse_args()

    parse_corpus(
        input_path=args.input,
        output_path=args.output,
        lexicon_path=args.lexicon,
        limit=args.limit,
        log_file=args.log_file,
        debug=args.debug,
    )
