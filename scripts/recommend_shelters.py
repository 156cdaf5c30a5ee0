"""Print nearby shelters or the top recommendations for a location."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

if __package__ is None or __package__ == "":
    _SCRIPT_PARENT_STR = str(Path(__file__).resolve().parents[1])
    if _SCRIPT_PARENT_STR not in sys.path:
        sys.path.insert(0, _SCRIPT_PARENT_STR)

from scripts.bootstrap import bootstrap_project, resolve_path

_PROJECT_ROOT = bootstrap_project()

from src.infrastructure.recommenders.shelter_ranker import ShelterRanker  # noqa: E402
from src.infrastructure.storage.shelters import InMemoryShelterRepository  # noqa: E402
from src.use_cases.find_nearby_shelters import SORT_KEYS, FindNearbySheltersUseCase  # noqa: E402
from src.use_cases.recommend_shelters import RecommendSheltersUseCase  # noqa: E402
from src.utils.config import (  # noqa: E402
    AppConfig,
    build_user_locator,
    get_log_level,
    get_top_n,
    load_config,
)
from src.utils.logger import configure_logging, logger  # noqa: E402


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find heat shelters around a location")
    parser.add_argument("--config", type=Path, default=Path("configs/config.yaml"))
    parser.add_argument("--catalog", type=Path, default=None, help="Shelter catalog CSV")
    parser.add_argument("--lat", type=float, default=None, help="User latitude")
    parser.add_argument("--lng", type=float, default=None, help="User longitude")
    parser.add_argument("--address", default=None, help="Address to geocode when no coordinates")
    parser.add_argument("--top-n", type=int, default=None, help="Number of recommendations")
    parser.add_argument(
        "--nearby",
        action="store_true",
        help="List every shelter with its distance instead of recommendations",
    )
    parser.add_argument(
        "--search", default=None, help="Only list shelters whose name or address contains this text"
    )
    parser.add_argument(
        "--sort",
        choices=list(SORT_KEYS),
        default="distance",
        help="Order of the nearby list",
    )
    return parser.parse_args(argv)


def load_repository(config: AppConfig, catalog: Optional[Path]) -> InMemoryShelterRepository:
    if catalog is None:
        configured = config.get("paths", {}).get("shelter_catalog")
        catalog = Path(configured) if configured else None
    if catalog is None:
        logger.warning("No shelter catalog configured; using sample shelters.")
        return InMemoryShelterRepository.with_sample_data()

    try:
        return InMemoryShelterRepository.from_csv(resolve_path(catalog))
    except FileNotFoundError:
        logger.warning("Shelter catalog {} not found; using sample shelters.", catalog)
        return InMemoryShelterRepository.with_sample_data()


def run(args: argparse.Namespace) -> list[dict]:
    config = load_config(resolve_path(args.config))
    configure_logging(get_log_level(config))

    repository = load_repository(config, args.catalog)
    origin = build_user_locator(config).locate(args.lat, args.lng, args.address)
    ranker = ShelterRanker()

    if args.nearby:
        nearby = FindNearbySheltersUseCase(repository, ranker).execute(
            origin, query=args.search, sort_by=args.sort
        )
        return [shelter.to_dict() for shelter in nearby]

    active_only = bool(config.get("recommendations", {}).get("active_only", True))
    top_n = args.top_n if args.top_n is not None else get_top_n(config)
    use_case = RecommendSheltersUseCase(repository, ranker, active_only=active_only)
    return [recommendation.to_dict() for recommendation in use_case.execute(origin, top_n=top_n)]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        payload = run(args)
    except (ValueError, LookupError) as error:
        logger.error("Could not rank shelters: {}", error)
        return 1

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
