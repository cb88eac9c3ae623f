# Supabase table: groups
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

groups:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- description: text (nullable)
- "createdBy": uuid (foreign key to users.id, not null) - creator
- members: uuid[] (not null) - user ids, no duplicates
- "createdAt": timestamptz (not null)

Membership changes go through these functions so concurrent invites never
overwrite each other's member list:

create or replace function add_group_member(group_id uuid, member_id uuid)
returns setof groups language sql as $$
  update groups
     set members = array_append(members, member_id)
   where id = group_id and not (member_id = any(members))
  returning *;
$$;

create or replace function remove_group_member(group_id uuid, member_id uuid)
returns setof groups language sql as $$
  update groups
     set members = array_remove(members, member_id)
   where id = group_id
  returning *;
$$;
"""
