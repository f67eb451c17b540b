"""
Look up one book against the live Google Books API.

Usage:
    python scripts/lookup_book.py "Harry Potter and the Philosopher's Stone" --author "J.K. Rowling"
"""

import argparse
import asyncio
import json

from dotenv import load_dotenv

# Load env vars
load_dotenv()

from bookmatch import BookSearchService, configure_logging, get_settings


async def main(title: str, author: str) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    
    async with BookSearchService(settings=settings) as service:
        result = await service.resolve(title, author)
    
    if result is None:
        print("❌ No confident match found")
        return 1
    
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Resolve a book title/author to catalog details")
    parser.add_argument("title", help="Book title")
    parser.add_argument("--author", default="", help="Author name (optional)")
    args = parser.parse_args()
    
    raise SystemExit(asyncio.run(main(args.title, args.author)))
