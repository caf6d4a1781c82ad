#!/usr/bin/env python3
"""
Demo script for the evaluation cache.

Evaluates a video or a playlist twice: the first call goes to the model,
the second is served from cache.

Usage:
    python scripts/demo.py video rfscVS0vtbw
    python scripts/demo.py playlist PLWKjhJtqVAbnRT_hue-3zyiuIYj0OlpyG
"""

import argparse
import asyncio
import time

from evaluation_cache.config import settings
from evaluation_cache.container import ServiceContainer
from evaluation_cache.entities import CollectionAggregate, Evaluation
from evaluation_cache.logging_config import setup_logging


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_evaluation(evaluation: Evaluation) -> None:
    print(f"  Title:          {evaluation.title}")
    print(f"  Relevant:       {evaluation.is_relevant} ({evaluation.detected_category})")
    print(f"  Score:          {evaluation.composite_score}/100 [{evaluation.quality_tier.value}]")
    print(f"  Recommendation: {evaluation.recommendation.value}")
    print(f"  Sentiment:      {evaluation.comment_sentiment.value} ({evaluation.comments_analyzed} comments)")
    for strength in evaluation.strengths:
        print(f"    + {strength}")
    for weakness in evaluation.weaknesses:
        print(f"    - {weakness}")
    if evaluation.summary:
        print(f"\n  {evaluation.summary}")


def print_aggregate(aggregate: CollectionAggregate) -> None:
    print(f"  Title:          {aggregate.title}")
    print(f"  Sampled:        {aggregate.sampled_count} of {aggregate.item_count} videos")
    print(f"  Relevant:       {aggregate.relevant_count}, irrelevant: {aggregate.irrelevant_count}")
    print(f"  Average score:  {aggregate.average_composite_score}/100 [{aggregate.quality_tier.value}]")
    print(f"  Recommendation: {aggregate.recommendation.value}")
    for member in aggregate.member_evaluations:
        print(f"    {member.composite_score:>3}  {member.title[:60]}")
    print(f"\n  {aggregate.summary}")


async def run(kind: str, item_id: str) -> None:
    container = ServiceContainer.create()
    service = container.evaluation_service

    try:
        for attempt in ("first call", "second call (cached)"):
            print_section(f"{kind.capitalize()} {item_id}: {attempt}")
            start = time.time()
            if kind == "video":
                print_evaluation(await service.evaluate(item_id))
            else:
                print_aggregate(await service.evaluate_collection(item_id))
            print(f"\n  ⏱  {(time.time() - start) * 1000:.0f} ms")

        print_section("Stats")
        stats = await service.get_stats()
        for name, values in stats.items():
            print(f"  {name}: {values}")
    finally:
        await container.aclose()


def main() -> None:
    """Run the demo."""
    parser = argparse.ArgumentParser(description="Evaluate a tutorial video or playlist")
    parser.add_argument("kind", choices=["video", "playlist"])
    parser.add_argument("item_id", help="YouTube video or playlist id")
    args = parser.parse_args()

    setup_logging(level=settings.log_level, json_output=settings.log_json)

    print("\n🚀 Evaluation Cache Demo")
    print("=" * 70)

    try:
        asyncio.run(run(args.kind, args.item_id))
        print("\n✅ Demo completed successfully!")
    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Redis is running and GROQ_API_KEY / YOUTUBE_API_KEY are set:")
        print("  docker run -d -p 6379:6379 redis")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
