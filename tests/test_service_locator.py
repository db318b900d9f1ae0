import pytest
from gui.services.service_locator import (
    services,
    ServiceAlreadyRegisteredError,
    ServiceNotFoundError,
    ServiceLocator,
)


class Dummy:
    def __init__(self, value: int) -> None:
        self.value = value


def setup_function(_):
    services.clear()


def test_register_and_get():
    services.register("config", {"env": "test"})
    assert services.get("config")["env"] == "test"


def test_double_register_raises():
    services.register("x", 1)
    with pytest.raises(ServiceAlreadyRegisteredError):
        services.register("x", 2)
    services.register("x", 3, allow_override=True)
    assert services.get("x") == 3


def test_override_requires_existing_key():
    services.register("cache", {"size": 10})
    services.override("cache", {"size": 20})
    assert services.get("cache")["size"] == 20
    with pytest.raises(ServiceNotFoundError):
        services.override("missing", 1)


def test_try_get_default():
    assert services.try_get("missing", 123) == 123


def test_unregister():
    services.register("temp", object())
    services.unregister("temp")
    with pytest.raises(ServiceNotFoundError):
        services.get("temp")


def test_get_typed():
    loc = ServiceLocator()
    loc.register("dummy", Dummy(5))
    assert loc.get_typed("dummy", Dummy).value == 5
    loc.register("number", 123)
    with pytest.raises(TypeError):
        loc.get_typed("number", Dummy)


def test_local_instance_isolated():
    local = ServiceLocator()
    local.register("foo", 1)
    assert set(local.list_keys()) == {"foo"}
    with pytest.raises(ServiceNotFoundError):
        services.get("foo")
