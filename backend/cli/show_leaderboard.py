#!/usr/bin/env python3
"""
Print the leaderboard straight from the score store.

Usage:
    python backend/cli/show_leaderboard.py [--limit 5] [--store postgres|memory]
"""

import argparse
import os
import sys

from dotenv import load_dotenv

# Add backend to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access.api_queries import create_score_repository  # noqa: E402
from domain.constants import TOP_SCORES_LIMIT  # noqa: E402


def format_leaderboard(records) -> str:
    if not records:
        return "No scores recorded yet."

    lines = [f"{'#':>3}  {'Score':>6}  {'Duration':>8}  Created"]
    lines.append("-" * 50)
    for rank, record in enumerate(records, start=1):
        lines.append(
            f"{rank:>3}  {record['score']:>6}  {str(record['duration']) + 's':>8}  {record['created_at']}"
        )
    return "\n".join(lines)


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description="Show the top scores.")
    parser.add_argument("--limit", type=int, default=TOP_SCORES_LIMIT,
                        help="Number of records to show")
    parser.add_argument("--store", type=str, default=None,
                        help="Score store to read (default: SCORE_STORE or postgres)")
    args = parser.parse_args()

    repo = create_score_repository(args.store)
    records = repo.get_top_scores(limit=args.limit)
    print(format_leaderboard(records))


if __name__ == "__main__":
    main()
