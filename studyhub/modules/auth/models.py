# Supabase Auth
# This module uses Supabase's built-in authentication system
# Supabase Auth handles:
# - Email + password registration (auth.users table)
# - Login and session management
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Resolve the identity behind a JWT
- auth.admin.sign_out(jwt) - Revoke the session behind a JWT (service role key only)
- auth.admin.delete_user() - Remove an identity (service role key only)

Every identity issued by sign_up gets a profile row in the `users` table with
the same id (see modules/users/models.py). The display name is also kept in
user_metadata.name.
"""
