# Tests for erpsync.sync.catalog
# Dependency graph, import order and delete order

import pytest

from erpsync.errors import CatalogError
from erpsync.sync.catalog import EntityCatalog, EntityDefinition

DEFAULT_IMPORT_ORDER = [
    "countries",
    "governorates",
    "client_area_tags",
    "client_industries",
    "client_types",
    "users",
    "clients",
    "client_balances",
    "suppliers",
    "base_units",
    "packaging_types",
    "categories",
    "product_attributes",
    "product_attribute_values",
    "products",
    "product_variants",
    "warehouse",
    "inventory",
    "customer_invoices",
    "credit_notes",
    "sales_deliveries",
    "purchase_orders",
    "goods_receipts",
    "purchase_returns",
    "safes",
    "safe_transactions",
]


def _catalog(*entries) -> EntityCatalog:
    """Build a catalog from (key, depends_on[, enabled]) tuples."""
    definitions = []
    for entry in entries:
        key, deps = entry[0], entry[1]
        enabled = entry[2] if len(entry) > 2 else True
        definitions.append(EntityDefinition(key=key, label=key.title(), enabled=enabled, depends_on=tuple(deps)))
    return EntityCatalog(definitions)


class TestDefaultCatalog:
    """Tests for the default 26-entity catalog."""

    def test_size(self, catalog):
        assert len(catalog) == 26

    def test_import_order_matches_declaration(self, catalog):
        assert [d.key for d in catalog.list_import_order()] == DEFAULT_IMPORT_ORDER

    def test_ranks_are_one_based_and_unique(self, catalog):
        ranks = [d.import_rank for d in catalog.list_import_order()]
        assert ranks == list(range(1, 27))

    def test_dependencies_have_smaller_rank(self, catalog):
        for descriptor in catalog:
            for dep in descriptor.depends_on:
                assert catalog.get(dep).import_rank < descriptor.import_rank

    def test_delete_order_is_reverse_of_import(self, catalog):
        assert catalog.list_delete_order() == list(reversed(DEFAULT_IMPORT_ORDER))

    def test_delete_order_includes_client_balances(self, catalog):
        order = catalog.list_delete_order()
        assert order.index("client_balances") < order.index("clients")

    def test_safe_transactions_deleted_before_safes(self, catalog):
        order = catalog.list_delete_order()
        assert order.index("safe_transactions") < order.index("safes")

    def test_labels(self, catalog):
        assert catalog.label_for("countries") == "Countries"
        assert catalog.label_for("unknown_key") == "unknown_key"


class TestOrdering:
    """Tests for the stable topological sort."""

    def test_ties_broken_by_declaration(self):
        catalog = _catalog(("b", ["a"]), ("c", []), ("a", []))
        assert [d.key for d in catalog.list_import_order()] == ["c", "a", "b"]

    def test_dependency_declared_later_goes_first(self):
        catalog = _catalog(("orders", ["clients"]), ("clients", []))
        assert [d.key for d in catalog.list_import_order()] == ["clients", "orders"]
        assert catalog.list_delete_order() == ["orders", "clients"]

    def test_diamond(self):
        catalog = _catalog(("a", []), ("b", ["a"]), ("c", ["a"]), ("d", ["b", "c"]))
        assert [d.key for d in catalog.list_import_order()] == ["a", "b", "c", "d"]
        assert catalog.list_delete_order() == ["d", "c", "b", "a"]

    def test_iteration_keeps_declaration_order(self):
        catalog = _catalog(("b", ["a"]), ("a", []))
        assert [d.key for d in catalog] == ["b", "a"]


class TestDisabledEntities:
    """Tests for disabled entities."""

    def test_excluded_from_both_orders(self):
        catalog = _catalog(("a", []), ("b", ["a"], False), ("c", ["b"]))
        assert [d.key for d in catalog.list_import_order()] == ["a", "c"]
        assert catalog.list_delete_order() == ["c", "a"]
        assert catalog.enabled_keys() == ["a", "c"]

    def test_disabled_keeps_its_rank(self):
        catalog = _catalog(("a", []), ("b", ["a"], False), ("c", ["b"]))
        assert catalog.get("b").import_rank == 2
        assert catalog.get("c").import_rank == 3
        assert "b" in catalog


class TestValidation:
    """Tests for catalog validation errors."""

    def test_duplicate_key(self):
        with pytest.raises(CatalogError, match="Duplicate"):
            _catalog(("a", []), ("a", []))

    def test_unknown_dependency(self):
        with pytest.raises(CatalogError, match="unknown entity 'missing'"):
            _catalog(("a", ["missing"]))

    def test_self_dependency(self):
        with pytest.raises(CatalogError, match="itself"):
            _catalog(("a", ["a"]))

    def test_cycle(self):
        with pytest.raises(CatalogError, match="a -> b -> c -> a"):
            _catalog(("a", ["b"]), ("b", ["c"]), ("c", ["a"]), ("d", ["a"]))


class TestDependencies:
    """Tests for dependencies_of."""

    def test_transitive(self, catalog):
        deps = catalog.dependencies_of("inventory")
        assert {"product_variants", "products", "categories", "base_units", "warehouse"} <= deps
        assert "inventory" not in deps

    def test_root_entity(self, catalog):
        assert catalog.dependencies_of("countries") == set()

    def test_unknown(self, catalog):
        with pytest.raises(KeyError):
            catalog.dependencies_of("nope")


class TestFromMapping:
    """Tests for building from configuration."""

    def test_from_config_respects_enabled(self, default_config):
        default_config.entities["inventory"].enabled = False
        catalog = EntityCatalog.from_config(default_config)
        assert "inventory" not in catalog.enabled_keys()
        assert catalog.get("inventory").enabled is False
