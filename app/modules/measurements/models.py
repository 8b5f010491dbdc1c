# Supabase table: measurements
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default gen_random_uuid())
- supplier_id: uuid (foreign key to suppliers.id, not null) - owner
- parameter_id: uuid (foreign key to quality_parameters.id, not null)
- value: numeric (not null)
- measured_at: timestamptz (not null) - set to submission time by the API
- created_at: timestamptz (default: now())

RLS: select/insert/update/delete only where supplier_id = auth.uid().
Rows belonging to another supplier are invisible, so updates and deletes
against them affect zero rows.
"""
