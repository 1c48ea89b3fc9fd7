from __future__ import annotations

import pytest
from pydantic import BaseModel

from cocktailnet.models import DrinkList
from cocktailnet.net.decoding import ResponseDecoder
from cocktailnet.net.errors import DecodingError, NetworkErrorKind


class _Glass(BaseModel):
    strGlass: str


def test_decodes_model() -> None:
    payload = b'{"drinks": [{"idDrink": "11007", "strDrink": "Margarita"}]}'
    result = ResponseDecoder().decode(payload, DrinkList)
    assert result.drinks[0].name == "Margarita"


def test_decodes_generic_container_types() -> None:
    payload = b'[{"strGlass": "Highball"}, {"strGlass": "Coupe"}]'
    result = ResponseDecoder().decode(payload, list[_Glass])
    assert [g.strGlass for g in result] == ["Highball", "Coupe"]


def test_schema_mismatch_raises_decoding_error() -> None:
    with pytest.raises(DecodingError) as excinfo:
        ResponseDecoder().decode(b'{"drinks": [{"strDrink": "No id"}]}', DrinkList)
    assert excinfo.value.kind is NetworkErrorKind.DECODING
    assert "DrinkList" in str(excinfo.value)
    assert "idDrink" in str(excinfo.value)


def test_invalid_json_raises_decoding_error() -> None:
    with pytest.raises(DecodingError):
        ResponseDecoder().decode(b"<html>oops</html>", DrinkList)
