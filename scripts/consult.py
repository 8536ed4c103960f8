#!/usr/bin/env python3
"""
scripts/consult.py
==================

Run a consultation session from the terminal.

Usage:
    # One-shot question
    python scripts/consult.py --query "I can't sleep at night"

    # Interactive session with a dosha hint
    python scripts/consult.py --dosha Vata

    # Skip the remote model even if OPENAI_API_KEY is set
    python scripts/consult.py --local-only --query "acidity after meals"
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")

from config import LOG_LEVEL, SEED_GREETING, SUGGESTED_QUERIES
from core.corpus import load_corpus
from core.history import ConsultationSession
from core.models import Message
from core.service import ConsultationService
from rag.chat_engine import ConsultationChatEngine

MAX_SOURCES_SHOWN = 3


def print_message(message: Message, path: str) -> None:
    print()
    print(message.text)
    print()
    if message.sources:
        print(f"Sources found ({path} answer):")
        for source in message.sources[:MAX_SOURCES_SHOWN]:
            print(f"   [{source.kind.value}] {source.title} ({source.relevance})")
    else:
        print(f"No sources found ({path} answer).")
    print("-" * 60)


async def run(args) -> None:
    remote = None if args.local_only else ConsultationChatEngine()
    service = ConsultationService(corpus=load_corpus(), remote=remote)
    session = ConsultationSession()

    if args.query:
        message = await service.submit_query(args.query, session, profile_hint=args.dosha)
        print_message(message, service.last_path)
        return

    print("=" * 60)
    print(SEED_GREETING)
    print()
    print("Try: " + " | ".join(SUGGESTED_QUERIES))
    print("=" * 60)

    while True:
        try:
            text = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if text.lower() in {"quit", "exit"}:
            break
        if not text:
            continue
        message = await service.submit_query(text, session, profile_hint=args.dosha)
        print_message(message, service.last_path)


def main():
    parser = argparse.ArgumentParser(
        description="Ask the NayaVed consultation engine about a health concern",
    )
    parser.add_argument("--query", "-q", help="Ask one question and exit")
    parser.add_argument("--dosha", help="Dominant dosha (Vata, Pitta or Kapha)")
    parser.add_argument(
        "--local-only",
        action="store_true",
        help="Never call the remote model",
    )
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
