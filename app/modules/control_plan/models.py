# Supabase table: quality_parameters
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default gen_random_uuid())
- name: text (not null) - no uniqueness constraint
- description: text (nullable)
- unit: text (not null)
- min_value: numeric (nullable) - inclusive lower limit
- max_value: numeric (nullable) - inclusive upper limit
- created_at: timestamptz (default: now())

RLS: select/insert/update for any authenticated identity, no delete policy.
"""
