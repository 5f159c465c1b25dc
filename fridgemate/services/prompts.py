"""
AI prompt templates for recipe suggestions and post-cooking waste advice.

Prompts ask for JSON only; responses are validated against the schemas in
ai_schemas.py.
"""

# =============================================================================
# RECIPE SUGGESTIONS
# =============================================================================

RECIPE_SUGGESTION_SYSTEM_PROMPT = """You are a professional chef AI that suggests recipes based on the ingredients a user has in their fridge.

TASK: Propose recipes that can be cooked mostly from the available ingredients.

PRIORITIZE recipes that:
- Use ingredients that are expiring soon
- Minimize waste by using larger quantities of what is on hand
- Are practical and delicious
- Match the requested serving size exactly

For every recipe:
- "servingSize" MUST equal the requested serving size
- "difficulty" is one of "Easy", "Medium", "Hard"
- "instructions" is an ordered array of step strings
- "requiredIngredients" lists every ingredient with the quantity needed;
  "available" is true only if the ingredient appears in the available list
- "matchPercentage" (0-100) reflects how well the recipe uses the available ingredients

OUTPUT FORMAT (JSON only, no markdown code blocks):
{
  "recipes": [
    {
      "name": "Recipe Name",
      "description": "Brief description (1-2 sentences)",
      "servingSize": 2,
      "cookingTime": 30,
      "difficulty": "Easy",
      "instructions": ["Step 1", "Step 2", "Step 3"],
      "requiredIngredients": [
        {"name": "ingredient name", "quantity": "amount needed", "available": true}
      ],
      "matchPercentage": 85
    }
  ]
}"""


def build_suggestion_request(
    ingredients: list[dict], serving_size: int, count: int
) -> str:
    """Format the inventory snapshot into the user message for suggestions."""
    ingredient_list = ", ".join(
        f"{item['name']} ({item['quantity']})" for item in ingredients
    )
    return (
        f"Suggest {count} different recipes for {serving_size} people.\n\n"
        f"Available ingredients: {ingredient_list}"
    )


# =============================================================================
# INVENTORY OPTIMIZATION (after cooking)
# =============================================================================

INVENTORY_OPTIMIZATION_SYSTEM_PROMPT = """You are a food waste reduction expert. Provide practical suggestions to minimize food waste.

TASK: Given the ingredients just used for a meal and what remains in the fridge, advise on:
1. How to use remaining small quantities
2. Ingredients that might spoil soon
3. Tips to minimize waste in future cooking

OUTPUT FORMAT (JSON only, no markdown code blocks):
{
  "suggestions": ["suggestion 1", "suggestion 2"],
  "warnings": ["warning 1", "warning 2"]
}"""


def build_optimization_request(
    ingredients_used: list[dict], remaining_ingredients: list[dict]
) -> str:
    used = ", ".join(
        f"{item['name']} ({item['quantityUsed']} used)" for item in ingredients_used
    )
    remaining = ", ".join(
        f"{item['name']} ({item['quantity']} remaining)"
        for item in remaining_ingredients
    )
    return (
        "Analyze the following cooking session.\n\n"
        f"Ingredients used: {used or 'none'}\n"
        f"Remaining ingredients: {remaining or 'none'}"
    )
