# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - Password sign-in and session management
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.sign_up() - Register new customers
- auth.sign_in_with_password() - Authenticate customers
- auth.get_user() - Resolve a bearer token to its user

A database trigger on auth.users creates the matching public.profiles row,
copying full_name from user_metadata. Roles live in public.user_roles.
"""
