#!/usr/bin/env python3
"""
Rate Title - Print the nuanced rating of a title as JSON

Results are cached in CACHE_DATABASE_PATH, so running it twice within
CACHE_TTL_SECONDS reuses the first computation.

Usage:
    python scripts/rate_title.py tt0111161
    python scripts/rate_title.py tt0111161 --no-cache
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import asyncio
import json

import config
from core import MemoryStore, TTLCache
from services import rating_service
from services.rating import RatingError
from utils.logging_config import setup_logging, get_logger


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compute the review-bombing resistant rating of a title")
    parser.add_argument('title_id', help="Title identifier, e.g. tt0111161")
    parser.add_argument('--no-cache', action='store_true',
                        help="Recompute without reading or writing the persistent cache")
    parser.add_argument('--log-level', default=config.LOG_LEVEL,
                        help="Log level (DEBUG, INFO, WARNING, ERROR)")
    args = parser.parse_args(argv)

    # stdout carries the JSON result only
    setup_logging(level=args.log_level, stream=sys.stderr)
    logger = get_logger('CLI')

    cache = TTLCache(MemoryStore()) if args.no_cache else None
    try:
        rating = asyncio.run(rating_service.get_title_rating(args.title_id, cache=cache))
    except (RatingError, ValueError) as e:
        logger.error(str(e))
        return 1

    print(json.dumps(rating, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
