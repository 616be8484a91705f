# Supabase table: push_subscriptions

"""
push_subscriptions:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id)
- endpoint: text - push service URL from the browser's PushSubscription
- p256dh: text - client public key
- auth: text - client auth secret
- created_at: timestamp (default: now())
- unique (user_id, endpoint)

Upserted when a browser subscribes, deleted when it unsubscribes.
RLS: owner only.
"""
