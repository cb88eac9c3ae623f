# Supabase table: tasks
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

tasks:
- id: uuid (primary key, default: gen_random_uuid())
- "userId": uuid (foreign key to users.id, not null) - owner, never reassigned
- title: text (not null)
- description: text (nullable)
- "dueDate": date (not null)
- completed: boolean (not null, default: false)
- "createdAt": timestamptz (not null)
"""
