RECIPE_DRAFT_PROMPT_VERSION = "v1"
PROFITABILITY_PROMPT_VERSION = "v1"

RECIPE_DRAFT_TEMPLATE = """Create a detailed professional restaurant recipe for the given recipe name.

The kitchen inventory already holds the listed ingredients. Use existing ingredients where possible
(spell them exactly as listed), and add new ones only if strictly necessary.

Return ONLY a JSON object with:
- description: a short appetizing description
- servings: number of servings, default 4
- ingredients: list of {"name", "quantity", "unit", "estimatedCost"}
    name: ingredient name
    quantity: amount needed (number)
    unit: metric unit, one of g, kg, ml, l, pc
    estimatedCost: estimated market cost in Indonesian Rupiah (IDR) for the quantity used
- instructions: brief cooking steps as a single string
"""

PROFITABILITY_TEMPLATE = """You are advising a restaurant on menu pricing. The currency is Indonesian Rupiah.
Given the dish, its total cost per serving and its selling price, say whether the profit margin
is healthy for a typical restaurant. Then give exactly 3 short bulleted suggestions to improve
profitability or value perception.
"""
