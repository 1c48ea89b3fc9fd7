from __future__ import annotations

from cocktailnet.models import Drink, DrinkList


def test_drink_collects_flattened_ingredients() -> None:
    drink = Drink.model_validate(
        {
            "idDrink": "11007",
            "strDrink": "Margarita",
            "strDrinkThumb": "https://www.thecocktaildb.com/images/media/drink/margarita.jpg",
            "strCategory": "Ordinary Drink",
            "strGlass": "Cocktail glass",
            "strIngredient1": "Tequila",
            "strMeasure1": "1 1/2 oz ",
            "strIngredient2": "Triple sec",
            "strMeasure2": None,
            "strIngredient3": "",
            "strIngredient4": "Lime juice",
            "strMeasure4": "1 oz",
        }
    )

    assert drink.id == "11007"
    assert drink.thumbnail_url is not None
    assert [(i.name, i.measure) for i in drink.ingredients] == [
        ("Tequila", "1 1/2 oz"),
        ("Triple sec", None),
        ("Lime juice", "1 oz"),
    ]


def test_list_entries_only_need_id_and_name() -> None:
    drink = Drink.model_validate({"idDrink": "1", "strDrink": "Mojito"})
    assert drink.ingredients == []
    assert drink.category is None


def test_drink_list_treats_null_and_no_data_as_empty() -> None:
    assert DrinkList.model_validate({"drinks": None}).drinks == []
    assert DrinkList.model_validate({"drinks": "no data found"}).drinks == []
    assert DrinkList.model_validate({}).drinks == []
