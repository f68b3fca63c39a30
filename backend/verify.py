"""
backend/verify.py

Purpose:
    CLI check that the configured ODDS_API_KEY is accepted by the provider.
    Performs one sports-catalog call through the same forwarder the API uses.

Dependencies:
    - odds_gpt.config
    - odds_gpt.providers.odds_api
"""

import asyncio
import os
import sys
from pprint import pprint

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from odds_gpt.config import settings
from odds_gpt.providers.odds_api import TheOddsAPIForwarder


async def main() -> int:
    print("\nSTARTING ODDS-GPT UPSTREAM CHECK")
    print("=" * 50)

    try:
        result = await TheOddsAPIForwarder(settings).list_sports("false")
    except Exception as e:
        print(f"FATAL ERROR: {e}")
        return 1

    body = result.body
    report = {
        "ok": body.get("ok"),
        "status": result.status_code,
        "sports": body.get("count"),
        "quota": result.headers,
    }
    if not body.get("ok"):
        report["error"] = body.get("error")

    print("\n--- REPORT ---")
    pprint(report, indent=2)
    print("-" * 50)

    if body.get("ok"):
        print("\nUPSTREAM GREEN: provider accepted the key.")
        return 0

    print("\nUPSTREAM RED: see the error above.")
    return 1


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
