# Supabase tables: profiles, cart_items
# Read and written through the service-role client in service.py

"""
profiles:
- id: uuid (primary key, references auth.users.id)
- email: text
- full_name: text (nullable)
- phone_number: text (nullable, 10 digits)

cart_items:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id)
- product_id: uuid (references products.id)
- quantity: integer (>= 1)
- created_at: timestamp (default: now())

All cart_items rows of a user are deleted once their checkout notification
has been sent.
"""
