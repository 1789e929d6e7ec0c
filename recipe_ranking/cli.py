#!/usr/bin/env python3
"""Command-line interface for the recipe ranking core."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from recipe_ranking.data_layer.exceptions import (
    PreferenceDataError,
    RecipeNotFoundError,
    RecipeStoreError,
)
from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.data_layer.recipe_db import RecipeDB
from recipe_ranking.data_layer.user_profile import UserProfileLoader
from recipe_ranking.ingestion.shopping_list import build_shopping_list
from recipe_ranking.logging_utils import init_logging
from recipe_ranking.output.formatters import (
    format_batch_markdown,
    format_health_grade_json,
    format_health_grade_markdown,
    format_page_json,
    format_page_markdown,
    format_shopping_list_json,
    format_shopping_list_markdown,
    format_similar_json,
    format_similar_markdown,
    to_json_string,
)
from recipe_ranking.providers.local_provider import LocalPreferenceProvider
from recipe_ranking.recommendation.batch_cooking import BatchCookingRecommender
from recipe_ranking.recommendation.pipeline import RecommendationFilters, RecommendationPipeline
from recipe_ranking.scoring.health_grade import calculate_health_grade
from recipe_ranking.settings import PipelineSettings, load_pipeline_settings
from recipe_ranking.similarity.recipe_similarity import find_similar_recipes


def load_recipe_db(path: str) -> RecipeDB:
    recipes_path = Path(path)
    if not recipes_path.exists():
        raise FileNotFoundError(f"Recipes file not found: {recipes_path}")
    print(f"Loading recipes from {recipes_path}...", file=sys.stderr)
    return RecipeDB(str(recipes_path))


def load_provider(path: str, as_of: Optional[datetime] = None) -> LocalPreferenceProvider:
    users_path = Path(path)
    if not users_path.exists():
        raise FileNotFoundError(f"Users file not found: {users_path}")
    print(f"Loading user preferences from {users_path}...", file=sys.stderr)
    return LocalPreferenceProvider(
        UserProfileLoader(str(users_path)),
        as_of=as_of.date() if as_of else None,
    )


def require_recipe(db: RecipeDB, recipe_id: str) -> Recipe:
    recipe = db.find_by_id(recipe_id)
    if recipe is None:
        raise RecipeNotFoundError(recipe_id)
    return recipe


def emit(output: str, output_file: Optional[str]) -> None:
    if output_file:
        Path(output_file).write_text(output)
        print(f"Output saved to {output_file}", file=sys.stderr)
    else:
        print(output)


def cmd_recommend(args) -> int:
    db = load_recipe_db(args.recipes)
    moment = datetime.fromisoformat(args.at) if args.at else datetime.now()
    provider = load_provider(args.users, as_of=moment)
    settings = load_pipeline_settings(args.settings) if args.settings else PipelineSettings()

    pipeline = RecommendationPipeline(db, provider, settings)
    filters = RecommendationFilters(
        meal_type=args.meal_type,
        max_cook_time=args.max_cook_time,
        search=args.search,
    )
    page = pipeline.recommend(
        args.user_id,
        page=args.page,
        limit=args.limit,
        filters=filters,
        moment=moment,
        use_full_score=args.full,
    )
    if page is None:
        print(
            f"User '{args.user_id}' has no preferences yet. "
            "Add a preferences section for them to the users file.",
            file=sys.stderr,
        )
        return 2

    if args.output == "json":
        emit(to_json_string(format_page_json(page)), args.output_file)
    else:
        emit(format_page_markdown(page), args.output_file)
    return 0


def cmd_batch(args) -> int:
    db = load_recipe_db(args.recipes)
    provider = load_provider(args.users)
    recommendations = BatchCookingRecommender(db, provider).recommend(args.user_id, limit=args.limit)
    if args.output == "json":
        payload = {"recommendations": [vars(rec).copy() for rec in recommendations]}
        emit(to_json_string(payload), args.output_file)
    else:
        emit(format_batch_markdown(recommendations), args.output_file)
    return 0


def cmd_similar(args) -> int:
    db = load_recipe_db(args.recipes)
    target = require_recipe(db, args.recipe_id)
    candidates = db.get_all_recipes()
    results = find_similar_recipes(target, candidates, limit=args.limit, min_score=args.min_score)
    if args.output == "json":
        emit(to_json_string(format_similar_json(target, results)), args.output_file)
    else:
        by_id = {recipe.id: recipe for recipe in candidates}
        emit(format_similar_markdown(target, results, by_id), args.output_file)
    return 0


def cmd_grade(args) -> int:
    db = load_recipe_db(args.recipes)
    recipe = require_recipe(db, args.recipe_id)
    result = calculate_health_grade(recipe)
    if args.output == "json":
        emit(to_json_string(format_health_grade_json(recipe, result)), args.output_file)
    else:
        emit(format_health_grade_markdown(recipe, result), args.output_file)
    return 0


def cmd_shopping_list(args) -> int:
    db = load_recipe_db(args.recipes)
    recipes: List[Recipe] = [require_recipe(db, recipe_id) for recipe_id in args.recipe_ids]
    items = build_shopping_list(recipes)
    if args.output == "json":
        emit(to_json_string(format_shopping_list_json(items)), args.output_file)
    else:
        emit(format_shopping_list_markdown(items), args.output_file)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rank, grade and compare recipes for a user"
    )
    parser.add_argument(
        "--recipes",
        type=str,
        default="data/recipes/recipes.json",
        help="Path to recipes JSON file (default: data/recipes/recipes.json)"
    )
    parser.add_argument(
        "--output",
        type=str,
        choices=["markdown", "json"],
        default="markdown",
        help="Output format: markdown (default) or json"
    )
    parser.add_argument(
        "--output-file",
        type=str,
        help="Optional file path to save output (default: print to stdout)"
    )
    parser.add_argument("--verbose", action="store_true", help="Log pipeline stages at DEBUG")

    subparsers = parser.add_subparsers(dest="command", required=True)

    recommend = subparsers.add_parser("recommend", help="Rank a page of recipes for a user")
    recommend.add_argument("user_id")
    recommend.add_argument(
        "--users",
        type=str,
        default="config/users.yaml",
        help="Path to users YAML file (default: config/users.yaml)"
    )
    recommend.add_argument("--settings", type=str, help="YAML file with a 'pipeline' section")
    recommend.add_argument("--page", type=int, default=0)
    recommend.add_argument("--limit", type=int, default=None)
    recommend.add_argument("--meal-type", type=str)
    recommend.add_argument("--max-cook-time", type=int)
    recommend.add_argument("--search", type=str)
    recommend.add_argument("--full", action="store_true", help="Apply behavioral and time-of-day scoring")
    recommend.add_argument("--at", type=str, help="ISO timestamp to score against (default: now)")
    recommend.set_defaults(handler=cmd_recommend)

    batch = subparsers.add_parser("batch", help="Batch-cooking picks for a user")
    batch.add_argument("user_id")
    batch.add_argument("--users", type=str, default="config/users.yaml")
    batch.add_argument("--limit", type=int, default=10)
    batch.set_defaults(handler=cmd_batch)

    similar = subparsers.add_parser("similar", help="Recipes similar to a recipe")
    similar.add_argument("recipe_id")
    similar.add_argument("--limit", type=int, default=10)
    similar.add_argument("--min-score", type=float, default=0.1)
    similar.set_defaults(handler=cmd_similar)

    grade = subparsers.add_parser("grade", help="Health grade for a recipe")
    grade.add_argument("recipe_id")
    grade.set_defaults(handler=cmd_grade)

    shopping = subparsers.add_parser("shopping-list", help="Aggregate ingredients of recipes")
    shopping.add_argument("recipe_ids", nargs="+")
    shopping.set_defaults(handler=cmd_shopping_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    init_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        return args.handler(args)
    except (FileNotFoundError, RecipeStoreError, PreferenceDataError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
