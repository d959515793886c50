"""
Command-Line Interface for NewsAI

Provides user-friendly CLI commands for:
- Fetching the latest news for a keyword
- Searching or relevance-ranking fetched articles
- AI summaries of a single article
- Chatting with the assistant about an article
"""

import sys
import argparse
import logging

from .config import get_config
from .models import NewsArticle
from .ranking.search import SEARCH_MODES, SEMANTIC_MODE
from .reader import NewsReader


def setup_logging(verbose: bool = False):
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def print_article(position: int, article: NewsArticle, score=None):
    """Print a one-article listing entry."""
    print(f"[{position}] {article.title}")
    if article.source.name:
        print(f"    Source: {article.source.name}  {article.published_at}")
    print(f"    URL: {article.url}")
    if score is not None:
        print(f"    Relevance: {score:.3f}")
    if article.description:
        print(f"    {article.description[:200]}")
    print()


def _pick_article(reader: NewsReader, args) -> NewsArticle:
    articles = reader.fetch_news(args.fetch)
    if not 1 <= args.index <= len(articles):
        print(f"✗ Error: index {args.index} out of range (fetched {len(articles)} articles)")
        sys.exit(1)
    return articles[args.index - 1]


def cmd_news(args):
    """Handle the news command."""
    reader = NewsReader()

    print(f"Fetching news for: {args.query or 'latest'}")
    print()

    articles = reader.fetch_news(args.query)[:args.limit]

    if not articles:
        print("No articles found.")
        return

    for i, article in enumerate(articles, 1):
        print_article(i, article)


def cmd_search(args):
    """Handle the search command."""
    reader = NewsReader()
    reader.fetch_news(args.fetch)

    mode = args.mode or get_config().search_mode_default
    print(f"Searching {len(reader.articles)} articles for: {args.query} ({mode})")
    print()

    if mode == SEMANTIC_MODE and args.scores:
        ranked = reader.rank_with_scores(args.query)[:args.limit]
        for i, item in enumerate(ranked, 1):
            print_article(i, item.document, score=item.score)
        return

    results = reader.search(args.query, mode=mode)[:args.limit]

    if not results:
        print("No results found.")
        return

    print(f"Found {len(results)} results:\n")
    for i, article in enumerate(results, 1):
        print_article(i, article)


def cmd_summarize(args):
    """Handle the summarize command."""
    reader = NewsReader()
    article = _pick_article(reader, args)

    print(f"Summarizing: {article.title}")
    print()

    summary = reader.summarize(article)

    print("Summary:")
    print(f"{summary.summary}")
    print()

    if summary.key_points:
        print("Key Points:")
        for point in summary.key_points:
            print(f"  - {point}")
        print()

    print(f"Reading time: {summary.reading_time} min")


def cmd_chat(args):
    """Handle the chat command."""
    reader = NewsReader()
    article = _pick_article(reader, args)
    reader.select_article(article)

    print(f"Chatting about: {article.title}")
    print()

    if args.message:
        print(reader.ask(args.message))
        return

    print("(Type 'exit' or press Ctrl-D to quit)")
    while True:
        try:
            message = input("You: ").strip()
        except EOFError:
            print()
            break

        if message.lower() in ('exit', 'quit'):
            break
        if not message:
            continue

        print(f"Assistant: {reader.ask(message)}")
        print()


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='NewsAI - Read, search, summarize and discuss the news',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Latest news about a topic
  python -m newsai.cli news "climate"

  # Rank fetched articles by relevance to a query
  python -m newsai.cli search "carbon tax" --fetch climate --mode semantic --scores

  # Summarize the 3rd fetched article
  python -m newsai.cli summarize --fetch climate --index 3

  # Ask about an article
  python -m newsai.cli chat --fetch climate --index 3 --message "What is a carbon tax?"
        """
    )

    # Global arguments
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # News command
    news_parser = subparsers.add_parser(
        'news',
        help='Fetch news articles for a keyword'
    )
    news_parser.add_argument(
        'query',
        nargs='?',
        default='',
        help='Keyword query (default: latest)'
    )
    news_parser.add_argument(
        '--limit',
        type=int,
        default=10,
        help='Number of articles to show (default: 10)'
    )
    news_parser.set_defaults(func=cmd_news)

    # Search command
    search_parser = subparsers.add_parser(
        'search',
        help='Search or rank fetched articles'
    )
    search_parser.add_argument(
        'query',
        help='Search query'
    )
    search_parser.add_argument(
        '--fetch',
        default='',
        help='Keyword used to fetch the article set (default: latest)'
    )
    search_parser.add_argument(
        '--mode',
        choices=SEARCH_MODES,
        help='Search mode (default: from SEARCH_MODE_DEFAULT)'
    )
    search_parser.add_argument(
        '--scores',
        action='store_true',
        help='Show relevance scores (semantic mode)'
    )
    search_parser.add_argument(
        '--limit',
        type=int,
        default=10,
        help='Number of results to show (default: 10)'
    )
    search_parser.set_defaults(func=cmd_search)

    # Summarize command
    summarize_parser = subparsers.add_parser(
        'summarize',
        help='Generate an AI summary of an article'
    )
    summarize_parser.add_argument(
        '--fetch',
        default='',
        help='Keyword used to fetch the article set (default: latest)'
    )
    summarize_parser.add_argument(
        '--index',
        type=int,
        default=1,
        help='1-based position of the article in the fetched set (default: 1)'
    )
    summarize_parser.set_defaults(func=cmd_summarize)

    # Chat command
    chat_parser = subparsers.add_parser(
        'chat',
        help='Ask the assistant about an article'
    )
    chat_parser.add_argument(
        '--fetch',
        default='',
        help='Keyword used to fetch the article set (default: latest)'
    )
    chat_parser.add_argument(
        '--index',
        type=int,
        default=1,
        help='1-based position of the article in the fetched set (default: 1)'
    )
    chat_parser.add_argument(
        '--message', '-m',
        help='Single question to ask (interactive when omitted)'
    )
    chat_parser.set_defaults(func=cmd_chat)

    # Parse arguments
    args = parser.parse_args()

    # Setup logging
    setup_logging(args.verbose)

    # Execute command
    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"\n✗ Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
