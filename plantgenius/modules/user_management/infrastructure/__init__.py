# 📄 File: plantgenius/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# The parts that actually talk to the backend, Supabase, Google and Apple.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package: REST store repositories and external identity adapters.
