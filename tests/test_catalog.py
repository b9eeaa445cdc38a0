"""Tests for the Schoolgate operation catalog.

Covers registration guards, startup filtering by policy, and the
advertised tool descriptors.
"""

import pytest

from schoolgate.config import PolicyConfig
from schoolgate.core.models import RiskTier
from schoolgate.exceptions import CatalogError
from schoolgate.safety.confirmation import CONFIRMATION_FIELD
from schoolgate.safety.policy import PolicyEngine
from schoolgate.safety.registry import default_registry
from schoolgate.tools.catalog import OperationCatalog, smartschool_catalog
from schoolgate.tools.models import OperationContext, OperationSpec


class TestRegistration:
    def test_smartschool_catalog_covers_registry(self, catalog):
        assert len(catalog) == 61
        assert {spec.name for spec in catalog.get_all()} == set(default_registry.names())

    def test_duplicate_rejected(self):
        catalog = OperationCatalog([OperationSpec(name="getCourses")])
        with pytest.raises(CatalogError, match="already registered"):
            catalog.register(OperationSpec(name="getCourses"))

    def test_reserved_field_rejected(self):
        spec = OperationSpec(
            name="sneaky",
            input_schema={"type": "object", "properties": {CONFIRMATION_FIELD: {"type": "boolean"}}},
        )
        with pytest.raises(CatalogError, match="reserved"):
            OperationCatalog([spec])

    def test_no_smartschool_schema_declares_marker(self, catalog):
        for spec in catalog.get_all():
            assert CONFIRMATION_FIELD not in spec.input_schema["properties"]

    def test_lookup_by_tool_name(self, catalog):
        assert catalog.get("smartschool-getCourses") is catalog.get("getCourses")
        assert "smartschool-getCourses" in catalog
        assert catalog.get("smartschool-nothing") is None

    def test_custom_prefix(self):
        catalog = smartschool_catalog(tool_prefix="ss_")
        assert catalog.tool_name("getCourses") == "ss_getCourses"
        assert catalog.get("ss_getCourses") is not None


class TestAdvertised:
    def test_defaults_hide_gated_operations(self, catalog, locked_config):
        names = {spec.name for spec in catalog.advertised(locked_config)}
        assert len(names) == 44
        assert "delUser" not in names
        assert "saveUser" not in names
        assert "getUserDetails" in names
        assert "sendMsg" in names

    def test_allow_destructive_advertises_everything(self, catalog, open_config):
        assert len(catalog.advertised(open_config)) == 61

    @pytest.mark.parametrize("allow", [False, True])
    def test_startup_filter_matches_call_time_policy(self, catalog, allow):
        config = PolicyConfig(allow_destructive=allow)
        engine = PolicyEngine()
        advertised = {spec.name for spec in catalog.advertised(config)}
        for spec in catalog.get_all():
            assert (spec.name in advertised) == engine.evaluate(spec.name, config).allowed
            assert catalog.is_advertised(spec.name, config) == (spec.name in advertised)


class TestDescriptors:
    def test_confirmation_field_injected(self, catalog, open_config):
        descriptors = {d.operation: d for d in catalog.descriptors(open_config)}
        schema = descriptors["delUser"].input_schema
        assert schema["properties"][CONFIRMATION_FIELD]["const"] is True
        assert CONFIRMATION_FIELD in schema["required"]
        assert "CRITICAL" in schema["properties"][CONFIRMATION_FIELD]["description"]
        assert descriptors["delUser"].requires_confirmation

        destructive = descriptors["saveGroup"].input_schema["properties"][CONFIRMATION_FIELD]
        assert "destructive operation" in destructive["description"]

    def test_no_confirmation_field_when_disabled(self, catalog, unguarded_config):
        descriptors = {d.operation: d for d in catalog.descriptors(unguarded_config)}
        assert CONFIRMATION_FIELD not in descriptors["delUser"].input_schema["properties"]
        assert not descriptors["delUser"].requires_confirmation

    def test_safe_operation_schema_unchanged(self, catalog, locked_config):
        descriptors = {d.operation: d for d in catalog.descriptors(locked_config)}
        spec = catalog.get("getUserDetails")
        assert descriptors["getUserDetails"].input_schema == spec.input_schema

    def test_injection_does_not_mutate_spec(self, catalog, open_config):
        catalog.descriptors(open_config)
        assert CONFIRMATION_FIELD not in catalog.get("delUser").input_schema["properties"]

    def test_descriptor_names_and_tiers(self, catalog, open_config):
        descriptors = {d.operation: d for d in catalog.descriptors(open_config)}
        assert descriptors["getAbsents"].name == "smartschool-getAbsents"
        assert descriptors["getAbsents"].tier == RiskTier.SAFE
        assert descriptors["clearGroup"].tier == RiskTier.CRITICAL

    def test_description_contents(self, catalog):
        text = catalog.describe(catalog.get("delUser"))
        assert text.startswith("Remove a user from the system permanently")
        assert "Category: User Management" in text
        assert "CRITICAL RISK" in text
        assert "PERMANENTLY DELETE a user" in text
        assert "Belgian school management system" in text

    def test_default_context_for_undocumented_operation(self, catalog):
        text = catalog.describe(catalog.get("getCourses"))
        assert text.startswith("Execute getCourses on Smartschool API")
        assert "Category: General" in text
        assert "RISK" not in text

    def test_custom_context(self):
        spec = OperationSpec(
            name="ping",
            context=OperationContext(description="Ping the server", examples=["Is it up?"]),
        )
        text = OperationCatalog([spec]).describe(spec)
        assert "Ping the server" in text
        assert "Examples: Is it up?" in text
        assert "MODERATE RISK" in text
