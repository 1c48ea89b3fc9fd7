"""Pydantic models for TheCocktailDB JSON payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

__all__ = ["Drink", "DrinkList", "Ingredient"]

_MAX_INGREDIENTS = 15


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Ingredient(BaseModel):
    name: str
    measure: str | None = None


class Drink(BaseModel):
    """A single drink; list endpoints only populate id, name and thumbnail."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="idDrink")
    name: str = Field(alias="strDrink")
    thumbnail_url: str | None = Field(default=None, alias="strDrinkThumb")
    category: str | None = Field(default=None, alias="strCategory")
    alcoholic: str | None = Field(default=None, alias="strAlcoholic")
    glass: str | None = Field(default=None, alias="strGlass")
    instructions: str | None = Field(default=None, alias="strInstructions")
    ingredients: list[Ingredient] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _collect_ingredients(cls, data: Any) -> Any:
        # The API flattens ingredients into strIngredient1..15 / strMeasure1..15.
        if not isinstance(data, dict) or "ingredients" in data:
            return data
        collected: list[dict[str, str | None]] = []
        for index in range(1, _MAX_INGREDIENTS + 1):
            name = _clean(data.get(f"strIngredient{index}"))
            if name is None:
                continue
            collected.append({"name": name, "measure": _clean(data.get(f"strMeasure{index}"))})
        return {**data, "ingredients": collected}


class DrinkList(BaseModel):
    """Envelope returned by every drinks endpoint."""

    drinks: list[Drink] = Field(default_factory=list)

    @field_validator("drinks", mode="before")
    @classmethod
    def _empty_when_missing(cls, value: Any) -> Any:
        # No matches come back as null or as a "no data found" string.
        if value is None or isinstance(value, str):
            return []
        return value
