# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.sign_up() - Register new identities
- auth.sign_in_with_password() - Authenticate identities
- auth.get_user() - Get current identity from JWT token
- auth.admin.sign_out() - Revoke a session

Registering an identity fires the on_auth_user_created trigger
(supabase/migrations/20250224101636_supplier_signup_trigger.sql), which inserts
the matching public.suppliers row. The optional full_name passed at sign up is
stored in user_metadata and becomes the supplier's display name; without it the
email address is used.
"""
