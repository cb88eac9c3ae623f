# Supabase table: users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id)
- email: text (unique, not null)
- name: text (nullable)
- "createdAt": timestamptz (not null)

Column names are camelCase and must be quoted in SQL. The id is the auth
identity id and is never updated.
"""
