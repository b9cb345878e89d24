"""Normalize a profile JSON file and print its search spec. Use: python run_pipeline.py profile.json"""

import argparse
import asyncio
import sys
from datetime import date

from job_spec_engine.agents.search_spec_agent import SearchSpecAgent
from job_spec_engine.errors import JobSpecEngineError
from job_spec_engine.normalizers.profile_normalizer import normalize_profile
from job_spec_engine.services.profile_source import load_raw_profile
from job_spec_engine.services.spec_cache import get_cache_storage
from job_spec_engine.utils.logger import get_logger

logger = get_logger("run_pipeline")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a search spec from a raw profile JSON file.")
    parser.add_argument("profile", help="Path to a RawProfile JSON file")
    parser.add_argument("--normalize-only", action="store_true", help="Print the normalized profile and stop")
    parser.add_argument("--redis-url", default=None, help="Cache in Redis instead of process memory")
    parser.add_argument("--reference-date", type=date.fromisoformat, default=None,
                        help="Date used for current positions (YYYY-MM-DD); defaults to today")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> str:
    raw = load_raw_profile(args.profile)
    normalized = normalize_profile(raw, reference_date=args.reference_date)
    if args.normalize_only:
        return normalized.model_dump_json(indent=2)
    agent = SearchSpecAgent(cache_storage=get_cache_storage(args.redis_url))
    result = await agent.generate(normalized)
    return result.spec.model_dump_json(indent=2)


def main(argv=None) -> int:
    args = _parse_args(argv)
    try:
        output = asyncio.run(_run(args))
    except (JobSpecEngineError, OSError) as e:
        logger.error("%s", e)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
