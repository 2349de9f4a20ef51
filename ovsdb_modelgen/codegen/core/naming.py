"""
Naming utilities for safe code generation.

Turns separator-delimited schema identifiers (``logical_ip``,
``foo-bar-baz``) into exported, acronym-aware identifiers
(``LogicalIP``, ``FooBarBaz``).
"""

import re
from typing import Dict, Iterable, List, Optional, FrozenSet


# Words rendered fully upper-cased when they appear as a token.
ACRONYMS: FrozenSet[str] = frozenset(
    {
        "ACL",
        "BFD",
        "CT",
        "DHCP",
        "DNS",
        "DSCP",
        "HA",
        "ICMP",
        "ID",
        "IGMP",
        "IP",
        "IPSEC",
        "LB",
        "LLDP",
        "MAC",
        "MTU",
        "NAT",
        "OVN",
        "OVS",
        "QOS",
        "RSTP",
        "SSL",
        "STP",
        "TCP",
        "TLS",
        "UDP",
        "URL",
        "UUID",
        "VLAN",
        "VTEP",
    }
)

# Plural tokens of acronyms, keyed by the upper-cased token. Only these keep
# a lowercase "s"; "has" is not a plural of HA.
PLURAL_ACRONYMS: Dict[str, str] = {
    "ACLS": "ACLs",
    "IDS": "IDs",
    "IPS": "IPs",
    "LBS": "LBs",
    "MACS": "MACs",
    "UUIDS": "UUIDs",
    "URLS": "URLs",
    "VLANS": "VLANs",
}

_SEPARATORS = re.compile(r"[_\-]+")


class NameNormalizer:
    """Converts schema identifiers to exported identifiers."""

    def __init__(self, acronyms: Optional[Iterable[str]] = None):
        """
        Initialize name normalizer.

        Args:
            acronyms: Extra acronyms on top of the default ACRONYMS set
        """
        extra = {acronym.upper() for acronym in acronyms or ()}
        self.acronyms: FrozenSet[str] = ACRONYMS | extra

    def split(self, name: str) -> List[str]:
        """Split a name on separators, dropping empty tokens."""
        return [token for token in _SEPARATORS.split(name) if token]

    def normalize(self, name: str) -> str:
        """
        Normalize a name to an exported identifier.

        Args:
            name: Original identifier, e.g. ``ip_port_mappings``

        Returns:
            Exported identifier, e.g. ``IPPortMappings``
        """
        return "".join(self._render_token(token) for token in self.split(name))

    def _render_token(self, token: str) -> str:
        upper = token.upper()
        if upper in self.acronyms:
            return upper

        if upper in PLURAL_ACRONYMS:
            return PLURAL_ACRONYMS[upper]

        return token[0].upper() + token[1:]


_default_normalizer = NameNormalizer()


def camel_case(name: str) -> str:
    """Normalize a name using the default acronym set."""
    return _default_normalizer.normalize(name)


def struct_name(table_name: str) -> str:
    """Struct name for a table (``Foo_Bar`` -> ``FooBar``)."""
    return _default_normalizer.normalize(table_name)


def field_name(column_name: str) -> str:
    """Field name for a column (``foo`` -> ``Foo``)."""
    return _default_normalizer.normalize(column_name)
