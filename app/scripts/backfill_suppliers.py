"""
Backfill Suppliers Script
Creates the missing suppliers row for every auth identity registered before the
signup trigger existed. Same name rule as the trigger; existing rows are left alone.
Needs SUPABASE_SERVICE_ROLE_KEY, since suppliers has no insert policy.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.database.supabase_client import SupabaseClient, fetch_all_rows
from app.modules.companies.service import supplier_name_for
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PAGE_SIZE = 500


def list_identities(supabase: Client):
    """All auth identities, fetched page by page"""
    identities = []
    page = 1
    while True:
        users = supabase.auth.admin.list_users(page=page, per_page=PAGE_SIZE)
        identities.extend(users)
        if len(users) < PAGE_SIZE:
            return identities
        page += 1


def backfill_suppliers(supabase: Client) -> int:
    """Insert supplier rows for identities lacking one. Returns the number inserted."""
    logger.info("Backfilling suppliers...")

    # Read page by page past the PostgREST row cap
    existing = fetch_all_rows(lambda: supabase.table("suppliers").select("id").order("id"))
    existing_ids = {row["id"] for row in existing}

    missing = []
    for user in list_identities(supabase):
        if user.id in existing_ids or not user.email:
            continue
        missing.append({
            "id": user.id,
            "email": user.email,
            "name": supplier_name_for(user.email, user.user_metadata),
        })

    if not missing:
        logger.info("All identities already have a supplier row")
        return 0

    supabase.table("suppliers")\
        .upsert(missing, on_conflict="id", ignore_duplicates=True)\
        .execute()

    logger.info(f"Created {len(missing)} supplier rows")
    return len(missing)


def main():
    supabase = SupabaseClient.get_service_client()
    try:
        backfill_suppliers(supabase)
    except Exception as e:
        logger.error(f"Backfill failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
