# 📄 File: plantgenius/modules/user_management/infrastructure/external/__init__.py
# 🧭 Purpose (Layman Explanation):
# Sign-in services run by other companies: Supabase, Google and Apple.
# 🧪 Purpose (Technical Summary):
# External identity adapters (supabase_auth, oauth_providers); import the submodules directly.
