# Supabase table: cart_items
# Rows are owned by one user and deleted after checkout

"""
cart_items:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id)
- product_id: uuid (references products.id)
- quantity: integer (>= 1)
- created_at: timestamp (default: now())

RLS: a user may select, insert, update and delete only rows whose
user_id = auth.uid().
"""
