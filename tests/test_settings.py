import pytest

from oaskit.external import ExternalReferenceError, NoExternal
from oaskit.raw_schema import RawSchema
from oaskit.settings import (
    NoReferenceResolver,
    ReferenceResolveError,
    ReferenceResolver,
    Settings,
)


class DictResolver:
    def __init__(self, schemas):
        self.schemas = schemas

    def resolve_reference(self, ref):
        return self.schemas[ref]


class StaticExternal:
    def get(self, location):
        return b"type: string\n"


def test_no_reference_resolver_raises():
    resolver = NoReferenceResolver()
    assert isinstance(resolver, ReferenceResolver)
    with pytest.raises(ReferenceResolveError, match="reference resolver is not provided"):
        resolver.resolve_reference("#/components/schemas/User")


def test_defaults_fill_in_resolvers():
    settings = Settings()
    assert isinstance(settings.external, NoExternal)
    assert isinstance(settings.resolver, NoReferenceResolver)
    assert settings.infer_types is False
    with pytest.raises(ExternalReferenceError):
        settings.external.get("other.yml")
    with pytest.raises(ReferenceResolveError):
        settings.resolver.resolve_reference("#/a")


def test_given_resolvers_are_kept():
    schema = RawSchema(type="string")
    resolver = DictResolver({"#/components/schemas/Name": schema})
    external = StaticExternal()
    settings = Settings(external=external, resolver=resolver, file="spec.yml", infer_types=True)
    assert settings.resolver is resolver
    assert settings.external is external
    assert settings.resolver.resolve_reference("#/components/schemas/Name") is schema
    assert settings.external.get("other.yml") == b"type: string\n"
    assert settings.file == "spec.yml"
    assert settings.infer_types is True


def test_explicit_none_gets_defaults():
    settings = Settings(external=None, resolver=None)
    assert isinstance(settings.external, NoExternal)
    assert isinstance(settings.resolver, NoReferenceResolver)
    with pytest.raises(ExternalReferenceError, match="external references are disabled"):
        settings.external.get("other.yml")
    with pytest.raises(ReferenceResolveError, match="reference resolver is not provided"):
        settings.resolver.resolve_reference("#/components/schemas/User")