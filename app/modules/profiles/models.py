# Supabase table: profiles
# Created by a trigger on auth.users sign-up; updated by its owner

"""
profiles:
- id: uuid (primary key, references auth.users.id)
- email: text
- full_name: text (nullable)
- phone_number: text (nullable) - exactly 10 digits when set
- created_at: timestamp (default: now())
- updated_at: timestamp

RLS: a user may select and update only the row whose id = auth.uid().
"""
