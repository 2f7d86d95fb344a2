# 📄 File: plantgenius/modules/user_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rules of the user system, independent of which servers we talk to.
# 🧪 Purpose (Technical Summary):
# Domain layer package: models, repository interfaces, domain services.
