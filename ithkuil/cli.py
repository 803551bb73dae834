"""
Command-line interface for the New Ithkuil toolkit.

- Tokenizing and parsing romanized words
- Glossing words and sentences
- Generating canonical text from JSON word records
"""
import sys
import argparse
import json
import logging


def _read_input(args, prompt):
    """Returns the positional text, the --file contents, or one line of stdin."""
    if getattr(args, 'text', None):
        return args.text
    if getattr(args, 'file', None):
        with open(args.file, 'r', encoding='utf-8') as f:
            return f.read().strip()
    if sys.stdin.isatty():
        print(prompt)
    return sys.stdin.read().strip()


def _gloss_options(args):
    from ithkuil.gloss import GlossOptions
    from ithkuil.lexicon import EMPTY_LEXICON, load_lexicon

    lexicon = load_lexicon(args.lexicon) if args.lexicon else EMPTY_LEXICON
    return GlossOptions(
        long=args.long,
        show_defaults=args.show_defaults,
        markdown=args.markdown,
        lexicon=lexicon,
    )


def _fail(error):
    print(f"ERROR: {error}", file=sys.stderr)
    sys.exit(1)


def cmd_tokenize(args):
    """Print the tokens of every word."""
    from ithkuil.parser import split_words
    from ithkuil.romanize import tokenize

    text = _read_input(args, "Enter New Ithkuil text:")
    try:
        for word in split_words(text):
            tokens = tokenize(word.lstrip('['))
            parts = " ".join(token.text for token in tokens.body)
            print(f"{tokens.word}: {parts} [{tokens.stress.value}]")
    except ValueError as e:
        _fail(e)


def cmd_parse(args):
    """Parse words into structured records."""
    from ithkuil.gloss import gloss
    from ithkuil.parser import parse_word, split_words
    from ithkuil.trace import ParseTrace

    text = _read_input(args, "Enter New Ithkuil text:")
    try:
        options = _gloss_options(args)
        records = []
        for word in split_words(text):
            trace = ParseTrace(word) if args.trace else None
            try:
                formative = parse_word(word, trace=trace)
            finally:
                if trace:
                    print(trace.to_json(), file=sys.stderr)
            records.append((word, formative))
    except (ValueError, OSError) as e:
        _fail(e)

    if args.format == 'json':
        print(json.dumps([formative.to_dict() for _, formative in records], indent=2, ensure_ascii=False))
    else:
        for word, formative in records:
            print(f"{word}")
            print(f"  Type: {formative.word_type.value}")
            if formative.root is not None:
                print(f"  Root: {formative.root.identifier}")
            print(f"  Gloss: {gloss(formative, options)}")


def cmd_gloss(args):
    """Print an interlinear gloss line."""
    from ithkuil.gloss import gloss
    from ithkuil.parser import parse_text

    text = _read_input(args, "Enter New Ithkuil text:")
    try:
        options = _gloss_options(args)
        print("  ".join(gloss(formative, options) for formative in parse_text(text)))
    except (ValueError, OSError) as e:
        _fail(e)


def cmd_generate(args):
    """Generate text from JSON word records (one object or a list)."""
    from ithkuil.formative import formative_from_dict
    from ithkuil.generator import generate

    text = _read_input(args, "Enter a JSON word record:")
    try:
        data = json.loads(text)
        records = data if isinstance(data, list) else [data]
        print(" ".join(generate(formative_from_dict(record)) for record in records))
    except (ValueError, OSError) as e:
        _fail(e)


def cmd_normalize(args):
    """Rewrite text in canonical spelling."""
    from ithkuil.generator import generate
    from ithkuil.parser import parse_text

    text = _read_input(args, "Enter New Ithkuil text:")
    try:
        print(" ".join(generate(formative) for formative in parse_text(text)))
    except (ValueError, OSError) as e:
        _fail(e)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='ithkuil',
        description='New Ithkuil: parse, gloss and generate romanized words',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look at the pieces of a word
  ithkuil tokenize "malëuţřait"

  # Parse and gloss
  ithkuil parse "Wala malëuţřait"
  ithkuil parse --format json --trace "malëuţřait"
  ithkuil --long --show-defaults gloss "malëuţřait"
  ithkuil --lexicon lexicon.json gloss --file text.txt

  # Canonical spelling
  ithkuil normalize "malëuţřaita"
  ithkuil generate '{"word_type": "formative", "root": {"kind": "normal", "cr": "m"}}'
        """
    )
    parser.add_argument('--debug', action='store_true', help='Verbose logging')
    parser.add_argument('--log-file', help='Also write the log to this file')
    parser.add_argument('--long', action='store_true', help='Gloss with long category names')
    parser.add_argument('--show-defaults', action='store_true', help='Gloss unmarked categories too')
    parser.add_argument('--markdown', action='store_true', help='Bold roots in glosses')
    parser.add_argument('--lexicon', help='JSON file of root and affix glosses')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    def add_text_command(name, help_text, func):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('text', nargs='?', help='Input text')
        sub.add_argument('-f', '--file', help='Read input from file')
        sub.set_defaults(func=func)
        return sub

    add_text_command('tokenize', 'Split words into phonological units', cmd_tokenize)

    parser_parse = add_text_command('parse', 'Parse words into structured records', cmd_parse)
    parser_parse.add_argument('--format', choices=['text', 'json'], default='text',
                              help='Output format (default: text)')
    parser_parse.add_argument('--trace', action='store_true',
                              help='Write a JSON trace of every stage to stderr')

    add_text_command('gloss', 'Gloss words', cmd_gloss)
    add_text_command('generate', 'Generate text from JSON word records', cmd_generate)
    add_text_command('normalize', 'Rewrite text in canonical spelling', cmd_normalize)
    return parser


def main(argv=None):
    """Main CLI entry point."""
    from ithkuil.logging_config import setup_logging

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(log_file=args.log_file, level=logging.WARNING, debug=args.debug)
    args.func(args)


if __name__ == '__main__':
    main()
