# Supabase view: products_public

"""
products_public (security_invoker view over products):
- id: uuid
- title: text
- description: text (nullable)
- gender: text (nullable) - 'men' | 'women' | 'unisex'
- retail_price: numeric
- image_url: text (nullable)
- created_at: timestamp
- updated_at: timestamp

products.wholesale_price is deliberately absent from the view and is never
read by this service.
"""
