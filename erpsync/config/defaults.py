# erpsync Default Configuration
# Full default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "connection": {
        "base_url": "https://api.example.com/",
        "company": "my_company",
        "timeout": 30.0,
        "verify_ssl": True,
        "import_endpoint": "import_{entity}.php",
        "delete_endpoint": "delete_data.php",
        "test_endpoint": "test_connection.php",
    },
    "odoo": {
        "enabled": False,
        "url": "",
        "database": "",
        "username": "",
        "password": "",
    },
    "entities": {
        # Geography and client metadata
        "countries": {
            "label": "Countries",
            "description": "Country list",
            "depends_on": [],
        },
        "governorates": {
            "label": "Governorates / States",
            "description": "Governorates and states per country",
            "depends_on": ["countries"],
        },
        "client_area_tags": {
            "label": "Client Area Tags",
            "description": "Client areas",
            "depends_on": [],
        },
        "client_industries": {
            "label": "Client Industries",
            "description": "Client sectors and industries",
            "depends_on": [],
        },
        "client_types": {
            "label": "Client Types",
            "description": "Client types (customer, supplier, ...)",
            "depends_on": [],
        },
        "users": {
            "label": "Users",
            "description": "Employees imported as users",
            "depends_on": [],
        },
        # Partners
        "clients": {
            "label": "Clients (Contacts)",
            "description": "Clients from Odoo contacts",
            "depends_on": [
                "countries",
                "governorates",
                "client_area_tags",
                "client_industries",
                "client_types",
                "users",
            ],
        },
        "client_balances": {
            "label": "Client Balances",
            "description": "Client balances and credit limits",
            "depends_on": ["clients"],
        },
        "suppliers": {
            "label": "Suppliers",
            "description": "Supplier companies",
            "depends_on": ["countries", "governorates"],
        },
        # Products
        "base_units": {
            "label": "Base Units",
            "description": "Unit of measure categories",
            "depends_on": [],
        },
        "packaging_types": {
            "label": "Packaging Types",
            "description": "Packaging and measuring units",
            "depends_on": ["base_units"],
        },
        "categories": {
            "label": "Categories",
            "description": "Product categories",
            "depends_on": [],
        },
        "product_attributes": {
            "label": "Product Attributes",
            "description": "Product attributes (color, size, ...)",
            "depends_on": [],
        },
        "product_attribute_values": {
            "label": "Product Attribute Values",
            "description": "Attribute values (red, blue, large, small)",
            "depends_on": ["product_attributes"],
        },
        "products": {
            "label": "Products",
            "description": "Product master data",
            "depends_on": ["categories", "base_units", "packaging_types"],
        },
        "product_variants": {
            "label": "Product Variants",
            "description": "Product variants and options",
            "depends_on": ["products", "product_attribute_values"],
        },
        # Stock
        "warehouse": {
            "label": "Warehouses",
            "description": "Warehouse data",
            "depends_on": [],
        },
        "inventory": {
            "label": "Inventory",
            "description": "Current stock levels",
            "depends_on": ["product_variants", "warehouse"],
        },
        # Sales (from invoices and credit notes)
        "customer_invoices": {
            "label": "Customer Invoices",
            "description": "Customer invoices (sales orders)",
            "depends_on": ["clients", "product_variants", "warehouse", "users"],
        },
        "credit_notes": {
            "label": "Credit Notes (Returns)",
            "description": "Credit notes (sales returns)",
            "depends_on": ["customer_invoices"],
        },
        "sales_deliveries": {
            "label": "Sales Deliveries",
            "description": "Deliveries of sales orders",
            "depends_on": ["customer_invoices", "warehouse"],
        },
        # Purchasing
        "purchase_orders": {
            "label": "Purchase Orders",
            "description": "Purchase orders with their lines",
            "depends_on": ["suppliers", "product_variants", "warehouse"],
        },
        "goods_receipts": {
            "label": "Goods Receipts",
            "description": "Receipts of purchase orders",
            "depends_on": ["purchase_orders"],
        },
        "purchase_returns": {
            "label": "Purchase Returns",
            "description": "Returns to suppliers",
            "depends_on": ["goods_receipts"],
        },
        # Safes and payments
        "safes": {
            "label": "Safes",
            "description": "Safes from Odoo journals",
            "depends_on": ["users"],
        },
        "safe_transactions": {
            "label": "Safe Transactions",
            "description": "Safe transactions (payments)",
            "depends_on": ["safes", "clients", "suppliers"],
        },
    },
    "output": {
        "verbose": False,
        "colored": True,
        "history_file": "~/.config/erpsync/history.yaml",
        "history_limit": 20,
    },
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# erpsync - ERP bulk import/delete configuration
#
# connection: dashboard REST backend that talks to Odoo.
# odoo:       integration switch and credentials for 'erpsync test-connection'.
#             Import and delete jobs only run while odoo.enabled is true.
# entities:   catalog of importable entities. Each entity lists the entities
#             it depends on; import runs dependencies first, delete runs in
#             the exact reverse order. Set enabled: false to hide an entity.

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
