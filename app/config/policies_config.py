"""
Row-Level Security Policy Configuration
This config mirrors the RLS policies declared in supabase/migrations.
Used by /auth/me to report what an authenticated identity may do, and by the
test-suite to check the migrations declare exactly these policies.
"""

# Policy scopes
OWNER = "owner"                  # row's owner column must equal auth.uid()
AUTHENTICATED = "authenticated"  # any authenticated identity, no row predicate

# Tables, the column that carries row ownership, and one scope per allowed operation.
# An operation missing from "policies" has no policy, so RLS denies it.
TABLES = {
    "suppliers": {
        "owner_column": "id",
        "policies": {
            "select": OWNER,
        },
        "description": "Supplier record provisioned by the signup trigger"
    },
    "quality_parameters": {
        "owner_column": None,
        # Catalog writes are open to every authenticated identity; no ownership model yet.
        "policies": {
            "select": AUTHENTICATED,
            "insert": AUTHENTICATED,
            "update": AUTHENTICATED,
        },
        "description": "Control plan parameters with optional limits"
    },
    "measurements": {
        "owner_column": "supplier_id",
        "policies": {
            "select": OWNER,
            "insert": OWNER,
            "update": OWNER,
            "delete": OWNER,
        },
        "description": "Recorded values owned by the measuring supplier"
    },
}

OPERATIONS = ("select", "insert", "update", "delete")


def get_policy_matrix():
    """
    Returns every declared policy
    Format: {
        "policies": [
            {"name": "measurements:select", "table": "measurements", "operation": "select",
             "scope": "owner", "owner_column": "supplier_id"},
            ...
        ]
    }
    """
    policies = []
    for table, table_config in TABLES.items():
        for operation in OPERATIONS:
            scope = table_config["policies"].get(operation)
            if scope is None:
                continue
            policies.append({
                "name": f"{table}:{operation}",
                "table": table,
                "operation": operation,
                "scope": scope,
                "owner_column": table_config["owner_column"] if scope == OWNER else None,
            })
    return {"policies": policies}


def get_policy(table: str, operation: str):
    """Scope for (table, operation), or None when RLS denies it."""
    table_config = TABLES.get(table)
    if table_config is None:
        return None
    return table_config["policies"].get(operation)


def get_capabilities():
    """Capability names an authenticated identity holds, e.g. 'measurements:delete'."""
    return [p["name"] for p in get_policy_matrix()["policies"]]
