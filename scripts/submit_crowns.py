"""
Submit crown counts for a hunter from the command line.

Example:
    python scripts/submit_crowns.py 1234567 --bronze 12 --silver 3 --gold 1
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from packages.core.crowns.submit import CrownCounts, submit_crowns
from packages.shared.store import ConfigStore

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Submit MouseHunt crown counts.")
    parser.add_argument("user", help="hunter id")
    parser.add_argument("--bronze", type=int, default=0)
    parser.add_argument("--silver", type=int, default=0)
    parser.add_argument("--gold", type=int, default=0)
    args = parser.parse_args(argv)

    if not ConfigStore().load().track_crowns:
        print("Crown tracking is turned off in settings")
        return 1

    crowns = CrownCounts(user=args.user, bronze=args.bronze, silver=args.silver, gold=args.gold)
    result = submit_crowns(crowns)
    if result is False:
        print("Nothing submitted")
        return 1
    print(f"Submitted {result} crowns for {crowns.user}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
