"""
tests/test_naming.py
--------------------
Unit tests for codegen/core/naming.py.
"""

import pytest

from ovsdb_modelgen.codegen.core.naming import (
    ACRONYMS,
    PLURAL_ACRONYMS,
    NameNormalizer,
    camel_case,
    field_name,
    struct_name,
)


class TestCamelCase:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("ip_port_mappings", "IPPortMappings"),
            ("external_ids", "ExternalIDs"),
            ("dns_records", "DNSRecords"),
            ("logical_ip", "LogicalIP"),
            ("ip", "IP"),
            ("foo_bar_baz", "FooBarBaz"),
            ("foo-bar-baz", "FooBarBaz"),
            ("foos-bars-bazs", "FoosBarsBazs"),
            ("ip_prefix", "IPPrefix"),
            ("uuid", "UUID"),
            ("Logical_Switch_Port", "LogicalSwitchPort"),
            ("has_foo", "HasFoo"),
            ("cts", "Cts"),
            ("port_ips", "PortIPs"),
            ("acls", "ACLs"),
        ],
    )
    def test_cases(self, name, expected):
        assert camel_case(name) == expected

    def test_empty_input(self):
        assert camel_case("") == ""

    @pytest.mark.parametrize("name", ["_foo_bar", "foo__bar", "foo_bar_", "-foo--bar-"])
    def test_extra_separators_are_dropped(self, name):
        assert camel_case(name) == "FooBar"

    def test_only_separators(self):
        assert camel_case("__-_") == ""


class TestStructAndFieldNames:
    def test_struct_name_collapses_separators(self):
        assert struct_name("Foo_Bar") == "FooBar"

    def test_field_name(self):
        assert field_name("foo") == "Foo"

    def test_field_name_keeps_inner_case(self):
        assert field_name("fooBar") == "FooBar"


class TestNameNormalizer:
    def test_acronyms_are_inspectable(self):
        assert {"IP", "ID", "UUID", "DNS"} <= ACRONYMS

    def test_extra_acronyms(self):
        normalizer = NameNormalizer(["bgp"])
        assert normalizer.normalize("bgp_peer") == "BGPPeer"
        assert "BGP" in normalizer.acronyms
        # The default set is unchanged
        assert camel_case("bgp_peer") == "BgpPeer"

    def test_split(self):
        assert NameNormalizer().split("a__b-c") == ["a", "b", "c"]

    def test_single_s_is_not_an_acronym_plural(self):
        assert camel_case("s") == "S"

    def test_plural_needs_explicit_entry(self):
        assert camel_case("has") == "Has"
        assert "HAS" not in PLURAL_ACRONYMS

    def test_plurals_are_plurals_of_acronyms(self):
        for upper, rendered in PLURAL_ACRONYMS.items():
            assert upper.endswith("S")
            assert upper[:-1] in ACRONYMS
            assert rendered == upper[:-1] + "s"

    def test_extra_acronym_has_no_plural(self):
        normalizer = NameNormalizer(["bgp"])
        assert normalizer.normalize("bgps") == "Bgps"
