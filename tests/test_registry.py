import pytest

from acs_dashboard.components import ComponentRegistry


class SitesService:
    pass


class OtherService:
    pass


def test_names_are_sorted():
    registry = ComponentRegistry()
    registry.register('sites', SitesService)
    registry.register('assets', OtherService)
    assert registry.names() == ['assets', 'sites']


def test_same_class_can_register_twice():
    registry = ComponentRegistry()
    registry.register('sites', SitesService)
    registry.register('sites', SitesService)
    assert registry.names() == ['sites']


def test_name_clash_is_rejected():
    registry = ComponentRegistry()
    registry.register('sites', SitesService)
    with pytest.raises(ValueError):
        registry.register('sites', OtherService)
