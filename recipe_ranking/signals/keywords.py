"""Keyword families used by the text-signal extractors.

Static configuration loaded once at import. Tables are tuples and
read-only mappings; nothing mutates them at runtime.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

# --- Spice ---

SPICE_LEVELS: Tuple[str, ...] = ("mild", "medium", "spicy", "very_spicy")

SPICE_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "mild": (
        "black pepper", "white pepper", "paprika", "cumin", "coriander",
        "turmeric", "garlic", "onion", "ginger", "herbs", "basil", "oregano",
    ),
    "medium": (
        "chili", "chile", "jalapeño", "jalapeno", "cayenne", "red pepper flakes",
        "chipotle", "ancho", "poblano", "serrano", "curry powder", "harissa",
    ),
    "spicy": (
        "habanero", "scotch bonnet", "ghost pepper", "carolina reaper",
        "thai chili", "bird's eye", "sriracha", "sambal", "gochujang",
        "wasabi", "horseradish", "szechuan", "sichuan", "szechwan pepper",
    ),
    "very_spicy": (
        "ghost pepper", "carolina reaper", "trinidad scorpion", "bhut jolokia",
        "extreme heat", "super hot", "reaper",
    ),
})

SPICE_POINTS: Mapping[str, int] = MappingProxyType({
    "mild": 1,
    "medium": 3,
    "spicy": 5,
    "very_spicy": 8,
})

HEAT_WORDS: Tuple[str, ...] = ("hot", "spicy", "heat")

SPICY_CUISINES: Tuple[str, ...] = (
    "thai", "indian", "mexican", "szechuan", "sichuan", "korean", "ethiopian",
)

# --- Cooking technique ---

COMPLEX_TECHNIQUES: Tuple[str, ...] = (
    "braise", "sous vide", "temper", "emulsify", "brûlée", "brulée", "flambé", "flambe",
    "confit", "molecular", "spherification", "ferment", "cure", "smoke", "sous-vide",
    "reverse sear", "beer batter", "tempura", "phyllo", "puff pastry", "laminate",
)

INTERMEDIATE_TECHNIQUES: Tuple[str, ...] = (
    "sauté", "sautéed", "sear", "seared", "roast", "roasted", "braise", "braised",
    "simmer", "reduce", "deglaze", "marinate", "rub", "brine", "poach", "steam",
    "blanch", "julienne", "brunoise", "roux", "béchamel", "bechamel",
)

# --- Nutrient richness (health grade, nutrient density) ---

HEALTHY_INDICATORS: Tuple[str, ...] = (
    "vegetable", "vegetables", "fruit", "fruits", "legume", "legumes",
    "nut", "nuts", "seed", "seeds", "lean protein", "lean meat", "fish",
    "whole grain", "whole grains", "quinoa", "brown rice", "oats", "barley",
    "broccoli", "spinach", "kale", "carrot", "tomato", "pepper", "onion",
    "lettuce", "arugula", "romaine", "cabbage", "cucumber", "celery",
    "zucchini", "squash", "asparagus", "green bean", "pea", "corn",
    "cauliflower", "brussels", "artichoke", "beet", "radish", "mushroom",
    "eggplant", "avocado", "sweet potato", "potato",
    "salmon", "chicken breast", "turkey", "tofu", "beans", "lentils",
    "tuna", "shrimp", "egg", "greek yogurt", "cottage cheese",
    "salad", "greens", "mixed greens", "spring mix", "garden",
    "vinaigrette", "olive oil", "lemon", "lime", "herb", "herbs",
)

UNHEALTHY_INDICATORS: Tuple[str, ...] = (
    "fried", "deep fried", "battered", "processed", "refined",
    "white bread", "syrup", "high fructose", "artificial", "preservative",
)

# --- Ingredient quality ---

WHOLE_FOOD_KEYWORDS: Tuple[str, ...] = (
    "whole grain", "whole wheat", "fresh", "raw", "organic", "natural",
    "vegetable", "fruit", "legume", "nut", "seed", "lean", "unprocessed",
    "salad", "greens", "leafy", "grilled", "roasted", "steamed", "baked",
    "olive oil", "avocado", "tomato", "cucumber", "carrot", "spinach",
    "kale", "lettuce", "arugula", "mixed greens", "garden",
)

PROCESSED_KEYWORDS: Tuple[str, ...] = (
    "refined", "processed", "pre-made", "packaged", "instant",
    "white flour", "deep fried", "battered",
)

HIGHLY_PROCESSED_INDICATORS: Tuple[str, ...] = (
    "refined sugar", "high fructose", "corn syrup", "artificial",
    "preservative", "hydrogenated", "trans fat", "processed meat",
    "hot dog", "frozen dinner",
)

MODERATELY_PROCESSED_KEYWORDS: Tuple[str, ...] = (
    "soda", "soda pop", "candy", "chips", "cookies", "cake", "pastry",
    "deep fried", "battered",
)

# --- Sugar & sodium inference ---

SUGAR_INDICATORS: Tuple[str, ...] = (
    "sugar", "honey", "maple syrup", "agave", "molasses",
    "brown sugar", "white sugar", "cane sugar", "corn syrup",
    "high fructose", "sweetener", "soda", "juice", "candy",
)

SODIUM_INDICATORS: Tuple[str, ...] = (
    "salt", "sodium", "soy sauce", "teriyaki", "worcestershire",
    "bacon", "ham", "sausage", "cured", "pickled", "brine",
    "canned", "processed", "bouillon", "broth", "stock cube",
)

# --- Dietary restriction violators (matched on word boundaries) ---

# Kosher and halal lists are simplified approximations; full religious
# dietary law needs rules a keyword table cannot express.
DIETARY_VIOLATIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "vegetarian": (
        "chicken", "beef", "pork", "lamb", "turkey", "duck", "fish", "seafood",
        "meat", "bacon", "sausage", "ham", "prosciutto", "anchovy", "gelatin",
        "rennet", "lard", "broth", "stock", "chicken stock", "beef stock",
    ),
    "vegan": (
        "chicken", "beef", "pork", "lamb", "turkey", "duck", "fish", "seafood",
        "meat", "milk", "cheese", "butter", "cream", "yogurt", "sour cream",
        "eggs", "egg", "honey", "gelatin", "rennet", "lard", "whey", "casein",
        "mayonnaise", "mayo", "broth", "stock", "chicken stock", "beef stock",
    ),
    "gluten-free": (
        "flour", "wheat", "barley", "rye", "bread", "pasta", "noodles",
        "soy sauce", "beer", "malt", "couscous", "bulgur",
        "semolina", "farro", "spelt", "seitan",
    ),
    "dairy-free": (
        "milk", "cheese", "butter", "cream", "yogurt", "sour cream",
        "whey", "casein", "lactose", "ghee", "buttermilk",
    ),
    "nut-free": (
        "peanut", "almond", "walnut", "pecan", "cashew", "pistachio",
        "hazelnut", "macadamia", "brazil nut", "pine nut", "nutella",
    ),
    "shellfish-free": (
        "shrimp", "crab", "lobster", "crayfish", "scallop", "mussel",
        "clam", "oyster", "squid", "octopus", "shellfish",
    ),
    "kosher": ("pork", "shellfish", "mixing meat and dairy"),
    "halal": ("pork", "alcohol", "wine", "beer", "liquor"),
    "paleo": (
        "grains", "wheat", "rice", "corn", "beans", "legumes", "dairy", "milk",
        "cheese", "processed", "sugar", "refined",
    ),
    "keto": (
        "sugar", "honey", "maple syrup", "rice", "pasta", "bread", "potato",
        "carrot", "corn", "grains", "high carb",
    ),
    "low-sodium": ("salt", "soy sauce", "sodium", "brine", "cured", "pickled"),
    "low-carb": ("pasta", "rice", "bread", "potato", "corn", "high carb", "sugar"),
})
