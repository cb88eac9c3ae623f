# Supabase table: resources, Storage bucket: resources
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

resources:
- id: uuid (primary key, default: gen_random_uuid())
- "userId": uuid (foreign key to users.id, not null) - owner
- title: text (not null)
- description: text (nullable)
- "fileName": text (not null)
- "fileUrl": text (not null) - public download URL of the blob
- "fileType": text (nullable) - MIME type reported at upload
- "uploadedAt": timestamptz (not null)

Each row owns exactly one blob at resources/{userId}/{fileName}, so
("userId", "fileName") is unique. The blob is removed before the row.
"""
