# Supabase tables: push_subscriptions, admin_fcm_tokens, user_roles
# Read through the service-role client in service.py

"""
push_subscriptions:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id)
- endpoint: text
- p256dh: text
- auth: text
- unique (user_id, endpoint)

admin_fcm_tokens:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id, admin role required)
- fcm_token: text
- device_info: text (nullable)
- unique (user_id, fcm_token)

user_roles:
- user_id: uuid
- role: app_role ('admin' | 'user')
"""
