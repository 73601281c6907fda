"""Entry point for wordtiles CLI client."""

import argparse
import sys

from cli.api_client import TilesAPIClient
from cli.console import ConsoleUI
from core.config import DEFAULT_COLLECTION, DEFAULT_WORD_LENGTH


def main():
    parser = argparse.ArgumentParser(description='Wordtiles - kanji word building practice')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument(
        '--collection',
        default=DEFAULT_COLLECTION,
        help=f'Kanji collection (default: {DEFAULT_COLLECTION})'
    )
    parser.add_argument(
        '--length',
        type=int,
        default=DEFAULT_WORD_LENGTH,
        help=f'Kanji per word (default: {DEFAULT_WORD_LENGTH})'
    )
    parser.add_argument(
        '--direction',
        choices=['forward', 'reverse'],
        default=None,
        help='Fix the direction instead of letting smart reverse mode decide'
    )
    args = parser.parse_args()

    client = TilesAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client)

    try:
        ui.run(args.collection, args.length, args.direction)
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
