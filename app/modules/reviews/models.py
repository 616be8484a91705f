# Supabase table: reviews, view: reviews_public

"""
reviews:
- id: uuid (primary key)
- product_id: uuid (references products.id, on delete cascade)
- user_id: uuid
- rating: integer, 1..5 (check constraint)
- comment: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (trigger maintained)

One review per (user, product) by convention; not enforced by a constraint.

reviews_public (security_invoker view): the same columns without user_id,
readable by anon and authenticated roles.

RLS: everyone may select; insert/update/delete only where
user_id = auth.uid(). Admins may additionally delete any review.
"""
