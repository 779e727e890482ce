#!/usr/bin/env python3
"""
Analyze an ingredient label from the command line.
Usage: cd backend && python scripts/analyze_ingredients.py "Vetemjöl, socker, mjölkpulver" [--language sv] [--json]
       python scripts/analyze_ingredients.py --file label.txt [--hints hints.json]
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure backend is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Deterministic vegan verdict for an ingredient label")
    parser.add_argument("text", nargs="?", help="Label text, e.g. 'Ingredienser: vetemjöl, socker, salt'")
    parser.add_argument("--file", type=Path, help="Read label text from a file instead")
    parser.add_argument("--hints", type=Path, help="JSON file: ingredient -> {isVegan, confidence}")
    parser.add_argument("--language", choices=["en", "sv"], default=None, help="Reasoning language")
    parser.add_argument("--json", action="store_true", help="Print the full verdict as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log classifier decisions")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    if args.file:
        text = args.file.read_text(encoding="utf-8")
    elif args.text:
        text = args.text
    else:
        parser.error("provide label text or --file")

    hints = None
    if args.hints:
        hints = json.loads(args.hints.read_text(encoding="utf-8"))

    from veganlens.evaluation.verdict_engine import VerdictEngine
    from veganlens.reference import ReferenceDataError

    try:
        engine = VerdictEngine(language=args.language)
    except ReferenceDataError as e:
        logger.error("Cannot load reference data: %s", e)
        return 2

    verdict = engine.analyze_text(text, hints=hints)
    if args.json:
        print(json.dumps(verdict.to_dict(), ensure_ascii=False, indent=2))
        return 0

    print(f"Status: {verdict.status.value}  confidence={verdict.confidence:.2f}")
    for item in verdict.ingredients:
        print(f"  {item.status.value:<10} {item.confidence:.2f}  {item.name}  ({item.match_reason})")
    if verdict.flags:
        print(f"Flags: {', '.join(verdict.flags)}")
    print()
    print(verdict.reasoning)
    return 0


if __name__ == "__main__":
    sys.exit(main())
