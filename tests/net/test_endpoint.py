from __future__ import annotations

import dataclasses

import pytest

from cocktailnet.net.endpoint import Endpoint, HTTPMethod, Parameterized, ParameterizedBody, Plain


def test_endpoint_defaults_to_plain_get() -> None:
    endpoint = Endpoint("https://api.example.com", "random.php")
    assert endpoint.method is HTTPMethod.GET
    assert endpoint.task == Plain()


def test_endpoint_is_immutable() -> None:
    endpoint = Endpoint("https://api.example.com", "random.php")
    with pytest.raises(dataclasses.FrozenInstanceError):
        endpoint.path = "other.php"  # type: ignore[misc]


def test_parameterized_task_copies_and_freezes_parameters() -> None:
    source = {"s": "margarita"}
    task = Parameterized(source)
    source["s"] = "mojito"

    assert task.parameters["s"] == "margarita"
    with pytest.raises(TypeError):
        task.parameters["s"] = "negroni"  # type: ignore[index]


def test_body_task_compares_by_parameters() -> None:
    assert ParameterizedBody({"a": 1}) == ParameterizedBody({"a": 1})
    assert ParameterizedBody({"a": 1}) != ParameterizedBody({"a": 2})


def test_no_validation_at_construction() -> None:
    endpoint = Endpoint("", "random.php", HTTPMethod.DELETE)
    assert endpoint.base_url == ""
    assert endpoint.method.value == "DELETE"
