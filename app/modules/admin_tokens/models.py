# Supabase table: admin_fcm_tokens

"""
admin_fcm_tokens:
- id: uuid (primary key)
- user_id: uuid (references auth.users.id, on delete cascade)
- fcm_token: text
- device_info: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (trigger maintained)
- unique (user_id, fcm_token)

RLS: insert/select/delete only where user_id = auth.uid() and the user holds
the admin role.
"""
