# Supabase table: suppliers
# This file documents the expected database schema
# Rows are written by the on_auth_user_created trigger, never by the API

"""
Expected Supabase table structure:
- id: uuid (primary key) - equals auth.users.id of the owning identity
- name: text (not null) - user_metadata.full_name, or the email when absent
- email: text (unique, not null)
- created_at: timestamptz (default: now())

RLS: select only where id = auth.uid(); no insert/update/delete policies.
"""
