"""Recipe suggestion prompt templates."""

RESPONSE_FORMAT = """Respond in this exact JSON format:
{
  "ingredients": ["ingredient1", "ingredient2", ...],
  "recipes": [
    {
      "name": "Recipe Name",
      "description": "Brief description",
      "time": "~30 min",
      "instructions": ["Step 1", "Step 2", "Step 3"],
      "missing": ["optional items that would enhance this recipe"]
    }
  ]
}"""

PHOTO_PROMPT = f"""Analyze this image of a fridge, pantry, or food items.

1. List all the ingredients/food items you can identify
2. Suggest 3 recipes that could be made with these ingredients

{RESPONSE_FORMAT}

Focus on practical, everyday recipes. If you can't identify many ingredients, suggest simple recipes with what you can see.
Only respond with JSON, no other text."""

TEXT_PROMPT_GUIDELINES = """The ingredients array should be a cleaned-up list of what I mentioned.
Focus on practical, everyday recipes that primarily use my ingredients.
Only respond with JSON, no other text."""


def format_text_prompt(ingredients: str) -> str:
    """
    Format the text-mode prompt around the user's ingredient list.

    The ingredient string is embedded verbatim.

    Args:
        ingredients: Ingredient list as typed by the user

    Returns:
        Formatted prompt string
    """
    return "\n\n".join([
        f"I have these ingredients: {ingredients}",
        "Suggest 3 recipes I could make with these ingredients.",
        RESPONSE_FORMAT,
        TEXT_PROMPT_GUIDELINES,
    ])
