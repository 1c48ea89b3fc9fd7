"""HTTP request/decode client and image cache for the CocktailRecipes app."""
