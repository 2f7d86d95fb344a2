# 📄 File: plantgenius/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the feature areas of PlantGenius: user accounts and payments.
# 🧪 Purpose (Technical Summary):
# Feature modules package (user_management, payments).
