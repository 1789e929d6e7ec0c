"""Formatters for ranking output (JSON and Markdown)."""

import json
from typing import Any, Dict, List, Sequence

from recipe_ranking.data_layer.models import Recipe
from recipe_ranking.ingestion.quantity_parser import IngredientQuantity
from recipe_ranking.recommendation.batch_cooking import BatchCookingRecommendation
from recipe_ranking.recommendation.pipeline import RankedRecipe, RecommendationPage
from recipe_ranking.scoring.external_score import popularity_tier, quality_tier
from recipe_ranking.scoring.health_grade import HealthGradeResult
from recipe_ranking.similarity.recipe_similarity import SimilarityScore


def format_macros(recipe: Recipe) -> str:
    """One-line macro summary, e.g. "450 kcal · 25.0g protein · 50.0g carbs · 15.0g fat"."""
    return (
        f"{recipe.calories:.0f} kcal · {recipe.protein:.1f}g protein · "
        f"{recipe.carbs:.1f}g carbs · {recipe.fat:.1f}g fat"
    )


def _ranked_recipe_markdown(idx: int, item: RankedRecipe) -> List[str]:
    recipe = item.recipe
    lines = [
        f"## {idx}. {recipe.title} ({item.score}/100)",
        f"**Cuisine:** {recipe.cuisine}  ",
        f"**Cooking Time:** {recipe.cook_time} minutes  ",
        f"**Nutrition:** {format_macros(recipe)}",
    ]
    if item.reasons:
        lines.append("")
        lines.append("**Why:**")
        for reason in item.reasons:
            lines.append(f"- {reason}")
    lines.append("")
    return lines


def format_page_markdown(page: RecommendationPage) -> str:
    """Format a RecommendationPage as Markdown.

    Args:
        page: Result of RecommendationPipeline.recommend

    Returns:
        Formatted Markdown string
    """
    lines = ["# Recommended Recipes\n"]
    lines.append(
        f"Page {page.page + 1} of {max(page.total_pages, 1)} · "
        f"{page.total} matching recipes\n"
    )
    if not page.recipes:
        lines.append("_No recipes matched your preferences on this page._\n")
    for idx, item in enumerate(page.recipes, page.page * page.limit + 1):
        lines.extend(_ranked_recipe_markdown(idx, item))
    return "\n".join(lines)


def format_page_json(page: RecommendationPage) -> Dict[str, Any]:
    """Format a RecommendationPage as a JSON-ready dictionary."""
    recipes_json = []
    for item in page.recipes:
        breakdown = item.quick.breakdown
        entry = {
            "id": item.recipe.id,
            "title": item.recipe.title,
            "cuisine": item.recipe.cuisine,
            "cook_time": item.recipe.cook_time,
            "score": item.score,
            "breakdown": {
                "cuisine_match": breakdown.cuisine_match,
                "has_banned_ingredients": breakdown.has_banned_ingredients,
                "cook_time_match": breakdown.cook_time_match,
                "macro_alignment": breakdown.macro_alignment,
            },
            "reasons": item.reasons,
        }
        if item.full is not None:
            entry["breakdown"].update({
                "behavioral": item.full.behavioral_score,
                "temporal": item.full.temporal_score,
                "health_goal": item.full.health_goal_score,
            })
        if item.external is not None:
            entry["external"] = {
                "score": item.external.total,
                "has_external_data": item.external.has_external_data,
                "quality_tier": quality_tier(item.recipe.quality_score),
                "popularity_tier": popularity_tier(item.recipe.aggregate_likes),
                "recency_bonus": item.external.breakdown.recency_bonus,
            }
        recipes_json.append(entry)

    return {
        "recipes": recipes_json,
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
        "total_pages": page.total_pages,
    }


def format_health_grade_markdown(recipe: Recipe, result: HealthGradeResult) -> str:
    breakdown = result.breakdown
    lines = [
        f"# {recipe.title}: Health Grade {result.grade} ({result.score}/100)\n",
        "| Category | Points |",
        "|---|---|",
        f"| Macronutrient balance | {breakdown.macronutrient_balance}/25 |",
        f"| Calorie density | {breakdown.calorie_density}/20 |",
        f"| Nutrient density | {breakdown.nutrient_density}/25 |",
        f"| Ingredient quality | {breakdown.ingredient_quality}/20 |",
        f"| Sugar & sodium | {breakdown.sugar_and_sodium}/10 |",
        "",
    ]
    return "\n".join(lines)


def format_health_grade_json(recipe: Recipe, result: HealthGradeResult) -> Dict[str, Any]:
    return {
        "recipe_id": recipe.id,
        "grade": result.grade,
        "score": result.score,
        "breakdown": vars(result.breakdown).copy(),
        "details": vars(result.details).copy(),
    }


def format_similar_markdown(target: Recipe,
                            results: Sequence[SimilarityScore],
                            recipes_by_id: Dict[str, Recipe]) -> str:
    lines = [f"# Recipes similar to {target.title}\n"]
    if not results:
        lines.append("_No similar recipes found._\n")
    for idx, result in enumerate(results, 1):
        recipe = recipes_by_id.get(result.recipe_id)
        title = recipe.title if recipe else result.recipe_id
        lines.append(f"{idx}. **{title}** (similarity {result.score:.2f})")
    lines.append("")
    return "\n".join(lines)


def format_similar_json(target: Recipe, results: Sequence[SimilarityScore]) -> Dict[str, Any]:
    return {
        "recipe_id": target.id,
        "similar": [
            {
                "recipe_id": result.recipe_id,
                "score": round(result.score, 4),
                "factors": {k: round(v, 4) for k, v in vars(result.factors).items()},
            }
            for result in results
        ],
    }


def format_shopping_list_markdown(items: Sequence[IngredientQuantity]) -> str:
    lines = ["# Shopping List\n"]
    for item in items:
        suffix = " (approx.)" if item.approximate else ""
        lines.append(f"- [ ] {item.display_quantity} {item.name}{suffix}")
    lines.append("")
    return "\n".join(lines)


def format_shopping_list_json(items: Sequence[IngredientQuantity]) -> Dict[str, Any]:
    return {
        "items": [
            {
                "name": item.name,
                "total_amount": round(item.total_amount, 3),
                "unit": item.total_unit,
                "display": item.display_quantity,
                "approximate": item.approximate,
                "sources": [q.original_text for q in item.parsed_quantities],
            }
            for item in items
        ]
    }


def format_batch_markdown(recommendations: Sequence[BatchCookingRecommendation]) -> str:
    lines = ["# Batch Cooking Picks\n"]
    if not recommendations:
        lines.append("_No batch-cooking recipes matched your preferences._\n")
    for idx, rec in enumerate(recommendations, 1):
        lines.append(f"{idx}. **{rec.title}** ({rec.servings} servings): {rec.reason}")
    lines.append("")
    return "\n".join(lines)


def to_json_string(payload: Dict[str, Any], indent: int = 2) -> str:
    """Serialize a formatter payload as a JSON string.

    Args:
        payload: Dictionary from one of the ``format_*_json`` functions
        indent: JSON indentation (default: 2)

    Returns:
        JSON string
    """
    return json.dumps(payload, indent=indent)
